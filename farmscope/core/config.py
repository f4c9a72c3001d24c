"""
Configuration Manager for FarmScope

Handles YAML/JSON configuration files and environment variable integration
with validation of limits and batch delays.
"""

import os
import json
import yaml
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field, asdict
from pathlib import Path

from farmscope.core.base import ConfigurationError


DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)


@dataclass
class FetchConfig:
    """Configuration for the outbound fetcher"""
    user_agent: str = DEFAULT_USER_AGENT
    timeout: Optional[float] = None  # None leaves the request unbounded
    no_store: bool = True


@dataclass
class SourceConfig:
    """Upstream sites scraped by the pipeline"""
    pest_base_url: str = "https://pestoscope.com"
    pest_advisory_url: str = "https://pestoscope.com/category/pest-advisory/"
    farm_base_url: str = "https://www.kisanmitra.net"
    farm_advisory_url: str = "https://www.kisanmitra.net/category/farm-advisories/"


@dataclass
class LimitsConfig:
    """List and text caps applied by the result assembler"""
    advisory_limit: int = 20
    pest_advisory_snapshot_limit: int = 10
    farm_advisory_preview_limit: int = 3
    farm_excerpt_length: int = 200
    pest_excerpt_length: int = 250
    section_max_length: int = 1000
    detail_image_limit: int = 10
    min_content_length: int = 50


@dataclass
class BatchConfig:
    """Snapshot generation settings"""
    output_dir: str = "./public/data"
    pest_data_file: str = "pest-data.json"
    farmerscope_file: str = "farmerscope-advisories.json"
    category_delay: float = 1.0
    item_delay: float = 0.5
    advisory_delay: float = 0.5


@dataclass
class ServerConfig:
    """HTTP service settings"""
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: [
        "http://localhost:3000",
        "http://127.0.0.1:3000"
    ])


@dataclass
class LoggingConfig:
    """Logging system configuration"""
    level: str = "INFO"
    file: Optional[str] = "./logs/farmscope.log"
    max_size: str = "10MB"
    backup_count: int = 5


@dataclass
class AppConfig:
    """Parsed configuration tree"""
    fetch: FetchConfig = field(default_factory=FetchConfig)
    sources: SourceConfig = field(default_factory=SourceConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigManager:
    """
    Centralized configuration manager with support for YAML/JSON files
    and environment variable integration.
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "config/config.yaml"
        self._config_data: Dict[str, Any] = {}
        self.config: Optional[AppConfig] = None

    def load_config(self, config_path: Optional[str] = None) -> AppConfig:
        """Load configuration from file with environment variable override"""
        if config_path:
            self.config_path = config_path

        config_file = Path(self.config_path)

        if not config_file.exists():
            self._config_data = self._get_default_config()
        else:
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    if config_file.suffix.lower() == '.json':
                        self._config_data = json.load(f)
                    else:  # Assume YAML
                        self._config_data = yaml.safe_load(f) or {}
            except Exception as e:
                raise ConfigurationError(f"Failed to load config from {config_file}: {e}")

        self._apply_env_overrides()
        self.config = self._parse_config()
        self.validate_config()

        return self.config

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration dictionary"""
        return AppConfig().to_dict()

    def write_default_config(self, config_path: Optional[str] = None) -> str:
        """Write the default configuration as YAML and return its path"""
        path = Path(config_path or self.config_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(self._get_default_config(), f, default_flow_style=False, indent=2)

        return str(path)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides"""
        log_level = os.getenv('FARMSCOPE_LOG_LEVEL') or os.getenv('LOG_LEVEL')
        if log_level:
            self._config_data.setdefault('logging', {})['level'] = log_level

        if os.getenv('FARMSCOPE_OUTPUT_DIR'):
            self._config_data.setdefault('batch', {})['output_dir'] = os.getenv('FARMSCOPE_OUTPUT_DIR')

        if os.getenv('FARMSCOPE_USER_AGENT'):
            self._config_data.setdefault('fetch', {})['user_agent'] = os.getenv('FARMSCOPE_USER_AGENT')

        if os.getenv('FARMSCOPE_PORT'):
            try:
                self._config_data.setdefault('server', {})['port'] = int(os.getenv('FARMSCOPE_PORT'))
            except ValueError:
                raise ConfigurationError(f"Invalid FARMSCOPE_PORT: {os.getenv('FARMSCOPE_PORT')}")

    def _parse_config(self) -> AppConfig:
        """Parse configuration into dataclass objects"""
        sections = {
            'fetch': FetchConfig,
            'sources': SourceConfig,
            'limits': LimitsConfig,
            'batch': BatchConfig,
            'server': ServerConfig,
            'logging': LoggingConfig
        }

        parsed = {}
        for name, section_class in sections.items():
            data = self._config_data.get(name) or {}
            if not isinstance(data, dict):
                raise ConfigurationError(f"Section '{name}' must be a mapping")
            try:
                parsed[name] = section_class(**data)
            except TypeError as e:
                raise ConfigurationError(f"Invalid keys in section '{name}': {e}")

        return AppConfig(**parsed)

    def validate_config(self) -> bool:
        """Validate limits and delays of the loaded configuration"""
        if not self.config:
            raise ConfigurationError("Configuration not loaded")

        for name, value in asdict(self.config.limits).items():
            if value < 0:
                raise ConfigurationError(f"Limit '{name}' must be non-negative")

        batch = self.config.batch
        for name in ('category_delay', 'item_delay', 'advisory_delay'):
            if getattr(batch, name) < 0:
                raise ConfigurationError(f"Delay '{name}' must be non-negative")

        if self.config.fetch.timeout is not None and self.config.fetch.timeout <= 0:
            raise ConfigurationError("Fetch timeout must be greater than 0")

        if not 0 < self.config.server.port < 65536:
            raise ConfigurationError(f"Invalid server port: {self.config.server.port}")

        return True
