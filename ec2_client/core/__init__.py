"""Core infrastructure modules."""

from ec2_client.core.config import Config, ConfigError
from ec2_client.core.exceptions import (
    EC2ClientError,
    InvalidArgumentError,
    NetworkError,
    ProtocolError,
    SigningConfigurationError,
)
from ec2_client.core.logger import Logger, get_logger

__all__ = [
    'Config',
    'ConfigError',
    'EC2ClientError',
    'InvalidArgumentError',
    'NetworkError',
    'ProtocolError',
    'SigningConfigurationError',
    'Logger',
    'get_logger',
]
