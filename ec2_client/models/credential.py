"""Account credential used to sign requests."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credential:
    """
    Access key identifier and secret access key of an account.

    The secret key is only ever used to compute signatures. It is never
    transmitted and is excluded from repr() so it cannot leak into logs.
    """

    access_key_id: str
    secret_access_key: str = field(repr=False)
