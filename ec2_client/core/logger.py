"""
Centralized logging module for EC2 API Client.
Provides structured logging with file rotation, console output and secret redaction.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Iterable, List, Optional


LOGGER_NAME = 'ec2-api-client'
REDACTED = '***REDACTED***'


class SecretRedactingFilter(logging.Filter):
    """Replaces every occurrence of the configured secrets in a log record."""

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        self.secrets: List[str] = [s for s in secrets if s]

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True

        message = record.getMessage()
        redacted = message
        for secret in self.secrets:
            redacted = redacted.replace(secret, REDACTED)

        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class Logger:
    """
    Centralized logger for the application.
    Configures both file and console logging with rotation.
    """

    _instance: Optional['Logger'] = None
    _logger: Optional[logging.Logger] = None

    def __init__(self, log_file: Path, log_level: str = 'INFO',
                 max_size_mb: int = 10, backup_count: int = 5,
                 secrets: Iterable[str] = ()):
        """
        Initialize the logger.

        Args:
            log_file: Path to log file
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
            max_size_mb: Maximum log file size in MB before rotation
            backup_count: Number of backup files to keep
            secrets: Strings that must never appear in any log output
        """
        if Logger._instance is not None and Logger._logger is not None:
            return

        Logger._instance = self

        Logger._logger = logging.getLogger(LOGGER_NAME)
        Logger._logger.setLevel(logging.DEBUG)
        Logger._logger.handlers.clear()

        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )

        redactor = SecretRedactingFilter(secrets)

        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)  # Log everything to file
        file_handler.setFormatter(file_formatter)
        file_handler.addFilter(redactor)
        Logger._logger.addHandler(file_handler)

        # Console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        console_handler.setFormatter(console_formatter)
        console_handler.addFilter(redactor)
        Logger._logger.addHandler(console_handler)

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get the configured logger, or the bare library logger if not initialized."""
        if cls._instance is None or cls._logger is None:
            library_logger = logging.getLogger(LOGGER_NAME)
            if not library_logger.handlers:
                library_logger.addHandler(logging.NullHandler())
            return library_logger
        return cls._logger

    @classmethod
    def initialize(cls, log_file: Path, log_level: str = 'INFO',
                  max_size_mb: int = 10, backup_count: int = 5,
                  secrets: Iterable[str] = ()):
        """
        Initialize the logger (convenience method).

        Returns:
            Logger instance
        """
        if cls._instance is not None:
            return cls._instance

        instance = cls(log_file, log_level, max_size_mb, backup_count, secrets)
        cls._instance = instance
        return instance

    @classmethod
    def reset(cls):
        """Drop the configured handlers so the logger can be initialized again."""
        if cls._logger is not None:
            for handler in list(cls._logger.handlers):
                handler.close()
            cls._logger.handlers.clear()
        cls._instance = None
        cls._logger = None


def get_logger() -> logging.Logger:
    """
    Convenience function to get the logger.

    Returns:
        Configured logger instance
    """
    return Logger.get_logger()
