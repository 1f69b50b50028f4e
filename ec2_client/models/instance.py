"""
Domain value objects for instances and reservations.
Built once from a parsed response and never mutated afterwards.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class InstanceState(str, Enum):
    """Lifecycle states reported by the service. Not enforced locally."""

    PENDING = 'pending'
    RUNNING = 'running'
    SHUTTING_DOWN = 'shutting-down'
    TERMINATED = 'terminated'


class InstanceType(str, Enum):
    """Instance classes accepted when launching."""

    SMALL = 'm1.small'
    LARGE = 'm1.large'
    EXTRA_LARGE = 'm1.xlarge'
    CPU_MEDIUM = 'c1.medium'
    CPU_EXTRA_LARGE = 'c1.xlarge'

    @classmethod
    def values(cls) -> Tuple[str, ...]:
        return tuple(member.value for member in cls)


@dataclass(frozen=True)
class Instance:
    """
    A compute instance as reported by the service.

    Reservation-scoped fields (owner_id, reservation_id, security_groups) are
    copied onto every instance, so an Instance is usable on its own. ``state``
    holds the server's state string verbatim; compare it against
    :class:`InstanceState` members.
    """

    id: str = ''
    instance_type: str = ''
    image_id: str = ''
    kernel_id: str = ''
    ramdisk_id: str = ''
    state: str = ''
    dns_name: str = ''
    private_dns_name: str = ''
    key_name: str = ''
    launch_time: Optional[datetime] = None
    launch_index: int = 0
    placement: str = ''
    product_codes: Tuple[str, ...] = ()
    security_groups: Tuple[str, ...] = ()
    owner_id: str = ''
    reservation_id: str = ''

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class Reservation:
    """A group of instances created by a single launch call."""

    id: str = ''
    owner_id: str = ''
    security_groups: Tuple[str, ...] = ()
    instances: Tuple[Instance, ...] = ()


@dataclass(frozen=True)
class StateChange:
    """Result of terminating one instance."""

    instance_id: str
    shutdown_state: str = ''
    previous_state: str = ''
