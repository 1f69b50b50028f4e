"""
EC2 API Client Package
Signed requests against the EC2 query API, with responses mapped to instances and reservations.
"""

__version__ = '1.0.0'

from ec2_client.core.config import Config, ConfigError
from ec2_client.core.exceptions import (
    EC2ClientError,
    InvalidArgumentError,
    NetworkError,
    ProtocolError,
    SigningConfigurationError,
)
from ec2_client.core.logger import Logger, get_logger
from ec2_client.models import (
    ById,
    ByValue,
    Credential,
    Instance,
    InstanceState,
    InstanceType,
    Reservation,
    StateChange,
    Zones,
)
from ec2_client.handlers.api_client import APIClient
from ec2_client.handlers.instance_manager import InstanceManager
from ec2_client.handlers.instance_runner import InstanceRunner

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
    'ById',
    'ByValue',
    'Credential',
    'Instance',
    'InstanceState',
    'InstanceType',
    'Reservation',
    'StateChange',
    'Zones',
    'APIClient',
    'InstanceManager',
    'InstanceRunner',
]
