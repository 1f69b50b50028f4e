"""
References to remote entities, either by bare identifier or by a value already in hand.
"""

from dataclasses import dataclass
from typing import Union

from ec2_client.core.exceptions import InvalidArgumentError
from ec2_client.models.instance import Instance


def _check_identifier(identifier: str, kind: str) -> str:
    if not isinstance(identifier, str) or not identifier.strip():
        raise InvalidArgumentError(f"The {kind} identifier must be a non-empty string, got {identifier!r}.")
    if identifier != identifier.strip() or any(c.isspace() for c in identifier):
        raise InvalidArgumentError(f"Malformed {kind} identifier {identifier!r}: whitespace is not allowed.")
    return identifier


@dataclass(frozen=True)
class ById:
    """Reference to an entity known only by its identifier."""

    identifier: str
    kind: str = 'instance'

    def resolve_identifier(self) -> str:
        return _check_identifier(self.identifier, self.kind)


@dataclass(frozen=True)
class ByValue:
    """Reference to an entity whose full value is available."""

    entity: Instance

    def resolve_identifier(self) -> str:
        return _check_identifier(self.entity.id, 'instance')


Reference = Union[ById, ByValue]


def as_reference(value, kind: str = 'instance') -> Reference:
    """
    Wrap a caller-supplied value in a reference.

    Accepts an identifier string, an Instance, or an existing ById/ByValue.

    Raises:
        InvalidArgumentError: For any other kind of value
    """
    if isinstance(value, (ById, ByValue)):
        return value
    if isinstance(value, Instance):
        return ByValue(value)
    if isinstance(value, str):
        return ById(value, kind)
    raise InvalidArgumentError(
        f"{kind.capitalize()}s must be specified either as Instance objects "
        f"or {kind} identifier strings, got {type(value).__name__}."
    )
