"""
Request building module for EC2 API Client.
Merges protocol parameters into a caller's parameters and signs the result.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional

from ec2_client.handlers.signer import HTTP_METHOD, Signer, canonical_query, string_to_sign
from ec2_client.models.credential import Credential


API_VERSION = '2008-12-01'
SIGNATURE_VERSION = '2'

SIGNATURE_KEYS = ('Signature', 'SignatureVersion', 'SignatureMethod')
REDACTED_KEYS = ('Signature',)


@dataclass(frozen=True)
class SignedRequest:
    """A fully signed, transport-ready request."""

    url: str
    params: Dict[str, str]
    method: str = HTTP_METHOD

    @property
    def body(self) -> str:
        """Form-encoded body, using the same RFC 3986 encoding that was signed."""
        return canonical_query(self.params)

    @property
    def signature(self) -> str:
        return self.params['Signature']

    def redacted_params(self) -> Dict[str, str]:
        """Parameters safe to log."""
        return {
            key: ('***' if key in REDACTED_KEYS else value)
            for key, value in self.params.items()
        }


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a moment (default: now) as an ISO-8601 UTC timestamp."""
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime('%Y-%m-%dT%H:%M:%SZ')


def build_signed_request(params: Mapping[str, object], credential: Credential, url: str,
                         signer: Optional[Signer] = None,
                         api_version: str = API_VERSION) -> SignedRequest:
    """
    Build a signed request from caller parameters.

    AWSAccessKeyId, Timestamp and Version are filled in only when absent, so
    callers may pin a timestamp. Any caller-supplied Signature, SignatureVersion
    or SignatureMethod is discarded and recomputed. The input mapping is never
    modified; a fresh parameter dict is returned every call.

    Args:
        params: Action-specific parameters
        credential: Account credential
        url: Endpoint URL the request is sent to
        signer: Signer to use (default: strongest available digest)
        api_version: Value for the Version parameter

    Returns:
        SignedRequest with every value converted to str
    """
    if signer is None:
        signer = Signer()

    signed: Dict[str, str] = {
        str(key): str(value)
        for key, value in params.items()
        if key not in SIGNATURE_KEYS
    }

    signed.setdefault('AWSAccessKeyId', credential.access_key_id)
    signed.setdefault('Timestamp', format_timestamp())
    signed.setdefault('Version', api_version)

    signed['SignatureVersion'] = SIGNATURE_VERSION
    signed['SignatureMethod'] = signer.method
    signed['Signature'] = signer.sign(
        string_to_sign(signed, url, HTTP_METHOD),
        credential.secret_access_key
    )

    return SignedRequest(url=url, params=signed)
