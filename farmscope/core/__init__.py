"""
Core components for FarmScope

This package contains the core components including:
- Record types, base classes and the error taxonomy
- Configuration management
- Logging system
- Page fetcher

The batch orchestrator lives in farmscope.core.orchestrator.
"""

from farmscope.core.base import (
    Advisory,
    AdvisoryDetail,
    Category,
    PestDetail,
    PestItem,
    BaseComponent,
    FetcherInterface,
    SnapshotWriterInterface,
    ScraperError,
    ConfigurationError,
    FetchFailed,
    MissingRequiredField,
    MissingRequestParameter,
    StorageError
)

from farmscope.core.config import (
    ConfigManager,
    AppConfig,
    FetchConfig,
    SourceConfig,
    LimitsConfig,
    BatchConfig,
    ServerConfig,
    LoggingConfig
)

from farmscope.core.logging import (
    LoggingManager,
    get_logger,
    setup_logging
)

from farmscope.core.fetcher import Fetcher

__all__ = [
    # Records
    'Advisory',
    'AdvisoryDetail',
    'Category',
    'PestDetail',
    'PestItem',

    # Base classes
    'BaseComponent',
    'FetcherInterface',
    'SnapshotWriterInterface',

    # Errors
    'ScraperError',
    'ConfigurationError',
    'FetchFailed',
    'MissingRequiredField',
    'MissingRequestParameter',
    'StorageError',

    # Configuration
    'ConfigManager',
    'AppConfig',
    'FetchConfig',
    'SourceConfig',
    'LimitsConfig',
    'BatchConfig',
    'ServerConfig',
    'LoggingConfig',

    # Logging
    'LoggingManager',
    'get_logger',
    'setup_logging',

    # Fetching
    'Fetcher'
]
