"""
Request signing module for EC2 API Client.
Builds the canonical string to sign and computes Signature Version 2 HMAC signatures.
"""

import base64
from typing import Mapping, Optional, Tuple
from urllib.parse import quote, urlparse

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac

from ec2_client.core.exceptions import SigningConfigurationError
from ec2_client.core.logger import get_logger


HTTP_METHOD = 'POST'

# Strongest first
SIGNATURE_METHODS: Tuple[Tuple[str, type], ...] = (
    ('HmacSHA256', hashes.SHA256),
    ('HmacSHA1', hashes.SHA1),
)


def encode(value) -> str:
    """
    Percent-encode a value according to RFC 3986.

    Only unreserved characters (letters, digits, '-', '_', '.', '~') are left
    as-is. Space becomes %20, never '+'.
    """
    return quote(str(value), safe='~')


def sorted_keys(params: Mapping[str, object]):
    """Return parameter names in ascending byte order."""
    return sorted(params, key=lambda key: key.encode('utf-8'))


def canonical_query(params: Mapping[str, object]) -> str:
    """Encode parameters as sorted key=value pairs joined with '&'."""
    return '&'.join(
        f"{encode(key)}={encode(params[key])}" for key in sorted_keys(params)
    )


def string_to_sign(params: Mapping[str, object], url: str, method: str = HTTP_METHOD) -> str:
    """
    Build the canonical string the service recomputes to verify a signature.

    Format is four lines joined with '\\n': the HTTP method, the lower-cased
    host, the request path ('/' when empty) and the canonical query. Any query
    string or port in the URL is ignored.
    """
    parsed = urlparse(url)
    host = (parsed.hostname or '').lower()
    path = parsed.path or '/'
    return '\n'.join((method, host, path, canonical_query(params)))


def _hmac_available(algorithm: type) -> bool:
    try:
        hmac.HMAC(b'probe', algorithm())
    except UnsupportedAlgorithm:
        return False
    return True


class Signer:
    """
    Computes base64-encoded HMAC signatures over a canonical string.

    The digest is chosen once, at construction: HMAC-SHA256 when the runtime
    supports it, HMAC-SHA1 otherwise. A specific method may be pinned.
    """

    def __init__(self, method: Optional[str] = None):
        """
        Initialize the signer.

        Args:
            method: 'HmacSHA256', 'HmacSHA1', or None/'auto' for the strongest available

        Raises:
            SigningConfigurationError: If the requested (or any) digest is unavailable
        """
        self.method, self._algorithm = self._select(method)

    @staticmethod
    def _select(method: Optional[str]) -> Tuple[str, type]:
        if method in (None, 'auto'):
            candidates = SIGNATURE_METHODS
        else:
            candidates = tuple(c for c in SIGNATURE_METHODS if c[0] == method)
            if not candidates:
                raise SigningConfigurationError(
                    f"Unsupported signature method '{method}'. "
                    f"Must be one of: {', '.join(name for name, _ in SIGNATURE_METHODS)}."
                )

        for index, (name, algorithm) in enumerate(candidates):
            if _hmac_available(algorithm):
                if index > 0:
                    get_logger().warning(
                        f"{candidates[0][0]} is not available in this runtime, "
                        f"falling back to {name}"
                    )
                return name, algorithm

        raise SigningConfigurationError(
            "No supported HMAC digest available (tried "
            + ', '.join(name for name, _ in candidates) + ")"
        )

    def sign(self, canonical_string: str, secret_key: str) -> str:
        """
        Sign the canonical string with the secret key.

        Returns:
            Base64-encoded signature
        """
        mac = hmac.HMAC(secret_key.encode('utf-8'), self._algorithm())
        mac.update(canonical_string.encode('utf-8'))
        return base64.b64encode(mac.finalize()).decode('ascii')
