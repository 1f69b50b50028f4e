"""Domain value objects."""

from ec2_client.models.credential import Credential
from ec2_client.models.instance import (
    Instance,
    InstanceState,
    InstanceType,
    Reservation,
    StateChange,
)
from ec2_client.models.references import ById, ByValue, Reference, as_reference
from ec2_client.models.zones import Zones

__all__ = [
    'Credential',
    'Instance',
    'InstanceState',
    'InstanceType',
    'Reservation',
    'StateChange',
    'ById',
    'ByValue',
    'Reference',
    'as_reference',
    'Zones',
]
