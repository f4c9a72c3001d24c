"""
Logging System for FarmScope

Provides logging with file rotation, console output and helpers for
fetch failures, batch progress and the snapshot summary report.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Dict, Any
import json


LOGGER_NAME = 'farmscope'


class LoggingManager:
    """
    Centralized logging manager with file rotation and structured logging
    """

    def __init__(self):
        self.logger: logging.Logger = logging.getLogger(LOGGER_NAME)
        self.file_handler: Optional[logging.handlers.RotatingFileHandler] = None
        self.console_handler: Optional[logging.StreamHandler] = None
        self._setup_complete = False

    def setup_logging(self, level: str = "INFO", log_file: Optional[str] = "./logs/farmscope.log",
                      max_size: str = "10MB", backup_count: int = 5) -> None:
        """
        Set up logging system with file rotation and console output

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Path to log file, or None for console only
            max_size: Maximum size before rotation (e.g., "10MB")
            backup_count: Number of backup files to keep
        """
        self.logger.setLevel(getattr(logging, level.upper()))
        self.close()
        self.logger.handlers.clear()

        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )

        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            self.file_handler = logging.handlers.RotatingFileHandler(
                log_file, maxBytes=self._parse_size(max_size), backupCount=backup_count, encoding='utf-8'
            )
            self.file_handler.setLevel(logging.DEBUG)
            self.file_handler.setFormatter(detailed_formatter)
            self.logger.addHandler(self.file_handler)

        self.console_handler = logging.StreamHandler(sys.stdout)
        self.console_handler.setLevel(getattr(logging, level.upper()))
        self.console_handler.setFormatter(console_formatter)
        self.logger.addHandler(self.console_handler)

        self._setup_complete = True
        self.logger.info("Logging system initialized")

    def _parse_size(self, size_str: str) -> int:
        """Parse size string like '10MB' to bytes"""
        size_str = size_str.upper().strip()

        if size_str.endswith('KB'):
            return int(size_str[:-2]) * 1024
        elif size_str.endswith('MB'):
            return int(size_str[:-2]) * 1024 * 1024
        elif size_str.endswith('GB'):
            return int(size_str[:-2]) * 1024 * 1024 * 1024
        else:
            return int(size_str)

    def get_logger(self) -> logging.Logger:
        """Get the package logger; handlers are attached by setup_logging()"""
        return self.logger

    def log_fetch_failure(self, url: str, status: Optional[int] = None,
                          error: Optional[str] = None) -> None:
        """Log a failed fetch with its URL and status"""
        context = {'url': url, 'status': status}
        if error:
            context['error'] = error
        self.logger.error(f"Fetch failed | Context: {json.dumps(context, default=str)}")

    def log_progress(self, current: int, total: int, message: str = "") -> None:
        """Log progress information"""
        percentage = (current / total) * 100 if total > 0 else 0
        progress_msg = f"Progress: {current}/{total} ({percentage:.1f}%)"
        if message:
            progress_msg += f" - {message}"

        self.logger.info(progress_msg)

    def generate_summary_report(self, stats: Dict[str, Any]) -> str:
        """Generate and log the snapshot summary report"""
        report_lines = [
            "=" * 60,
            "SNAPSHOT GENERATION SUMMARY",
            "=" * 60,
            f"Dataset: {stats.get('dataset', 'Unknown')}",
            f"Output File: {stats.get('output_file', 'Unknown')}",
            f"Last Updated: {stats.get('last_updated', 'Unknown')}",
            f"Duration: {stats.get('duration', 0):.1f}s",
            "",
            f"  Categories: {stats.get('categories', 0)}",
            f"  Total Pests: {stats.get('pests', 0)}",
            f"  Details Fetched: {stats.get('details_fetched', 0)}",
            f"  Details Failed: {stats.get('details_failed', 0)}",
            f"  Advisories: {stats.get('advisories', 0)}",
            f"  File Size: {stats.get('file_size', 0) / 1024:.2f} KB",
        ]

        errors = stats.get('errors', [])
        if errors:
            report_lines.extend(["", "ERRORS ENCOUNTERED:"])
            for error in errors[:10]:
                report_lines.append(f"  - {error}")
            if len(errors) > 10:
                report_lines.append(f"  ... and {len(errors) - 10} more errors")

        report_lines.append("=" * 60)

        report = "\n".join(report_lines)
        self.logger.info(f"Session Summary:\n{report}")

        return report

    def close(self) -> None:
        """Close logging handlers"""
        for handler in (self.file_handler, self.console_handler):
            if handler:
                self.logger.removeHandler(handler)
                handler.close()
        self.file_handler = None
        self.console_handler = None


# Global logging manager instance
logging_manager = LoggingManager()


def get_logger() -> logging.Logger:
    """Get the global logger instance"""
    return logging_manager.get_logger()


def setup_logging(level: str = "INFO", log_file: Optional[str] = "./logs/farmscope.log",
                  max_size: str = "10MB", backup_count: int = 5) -> None:
    """Set up global logging system"""
    logging_manager.setup_logging(level, log_file, max_size, backup_count)
