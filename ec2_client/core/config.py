"""
Configuration management module for EC2 API Client.
Loads and validates configuration from config.yaml.
"""

import os
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

from ec2_client.core.exceptions import EC2ClientError
from ec2_client.models.credential import Credential


DEFAULT_ENDPOINT_URL = 'https://ec2.amazonaws.com/'
DEFAULT_API_VERSION = '2008-12-01'
SIGNING_METHODS = ('auto', 'HmacSHA256', 'HmacSHA1')

ACCESS_KEY_ENV = 'EC2_ACCESS_KEY_ID'
SECRET_KEY_ENV = 'EC2_SECRET_ACCESS_KEY'


class ConfigError(EC2ClientError):
    """Raised when configuration is invalid or missing."""
    pass


class Config:
    """
    Configuration manager for the EC2 API Client.
    Loads configuration from config.yaml and provides validated access to settings.
    Credentials may be supplied through EC2_ACCESS_KEY_ID / EC2_SECRET_ACCESS_KEY instead.
    """

    def __init__(self, config_path: str = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to config.yaml. If None, uses config/config.yaml in the project root.
        """
        if config_path is None:
            config_path = Path(__file__).parent.parent.parent / "config" / "config.yaml"
        else:
            config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigError(
                f"Configuration file not found: {config_path}\n"
                f"Please copy config/config.example.yaml to config/config.yaml and configure it."
            )

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file: {e}")
        except OSError as e:
            raise ConfigError(f"Error reading configuration file: {e}")

        if not isinstance(self._config, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level")

        self._validate_config()

    def _validate_config(self):
        """Validate that all required configuration is present."""
        missing_fields = []
        if not self.access_key_id:
            missing_fields.append(f'credentials.access_key_id (or {ACCESS_KEY_ENV})')
        if not self.secret_access_key:
            missing_fields.append(f'credentials.secret_access_key (or {SECRET_KEY_ENV})')

        if missing_fields:
            raise ConfigError(
                f"Missing required configuration fields:\n" +
                "\n".join(f"  - {field}" for field in missing_fields)
            )

        parsed = urlparse(self.endpoint_url)
        if parsed.scheme not in ('http', 'https') or not parsed.hostname:
            raise ConfigError(
                f"Invalid endpoint URL '{self.endpoint_url}'. Must be an http(s) URL with a host."
            )

        if self.signing_method not in SIGNING_METHODS:
            raise ConfigError(
                f"Invalid signing method '{self.signing_method}'. "
                f"Must be one of: {', '.join(SIGNING_METHODS)}."
            )

        if not isinstance(self.http_timeout, (int, float)) or self.http_timeout <= 0:
            raise ConfigError(f"Invalid http.timeout '{self.http_timeout}'. Must be a positive number.")

    def _get_nested(self, key: str, default=None) -> Any:
        """
        Get a nested configuration value using dot notation.

        Args:
            key: Dot-separated key (e.g., 'endpoint.url')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def endpoint_url(self) -> str:
        """Get the service endpoint URL."""
        return str(self._get_nested('endpoint.url', DEFAULT_ENDPOINT_URL))

    @property
    def api_version(self) -> str:
        """Get the API version sent with every request."""
        return str(self._get_nested('endpoint.api_version', DEFAULT_API_VERSION))

    @property
    def access_key_id(self) -> str:
        return os.environ.get(ACCESS_KEY_ENV) or self._get_nested('credentials.access_key_id', '')

    @property
    def secret_access_key(self) -> str:
        return os.environ.get(SECRET_KEY_ENV) or self._get_nested('credentials.secret_access_key', '')

    @property
    def credential(self) -> Credential:
        """Build the credential used to sign requests."""
        return Credential(str(self.access_key_id), str(self.secret_access_key))

    @property
    def signing_method(self) -> str:
        """Get the configured signature method (auto picks the strongest available)."""
        return self._get_nested('signing.method', 'auto')

    @property
    def http_timeout(self) -> float:
        """Get HTTP request timeout in seconds."""
        return self._get_nested('http.timeout', 10)

    @property
    def log_level(self) -> str:
        return self._get_nested('logging.level', 'INFO')

    @property
    def log_file(self) -> Path:
        """Get log file path."""
        return Path(self._get_nested('logging.file', './logs/ec2-api-client.log'))

    @property
    def log_max_size_mb(self) -> int:
        return self._get_nested('logging.max_size_mb', 10)

    @property
    def log_backup_count(self) -> int:
        return self._get_nested('logging.backup_count', 5)
