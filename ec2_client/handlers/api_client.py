"""
API client module for EC2 API Client.
Handles HTTP communication with the EC2 query API.
"""

from typing import Mapping, Optional

import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from ec2_client.core.exceptions import NetworkError, ProtocolError
from ec2_client.handlers.request_builder import API_VERSION, SignedRequest, build_signed_request
from ec2_client.handlers.response import ParsedResponse, check_for_errors, namespace_for
from ec2_client.handlers.signer import Signer
from ec2_client.models.credential import Credential


DEFAULT_ENDPOINT = 'https://ec2.amazonaws.com/'
DEFAULT_TIMEOUT = 10
USER_AGENT = f'ec2-api-client/{API_VERSION}'


class APIClient:
    """
    Sends signed requests to the EC2 query API and gates responses.
    One call is one request: no retries, no state kept between calls.
    """

    def __init__(self, credential: Credential, endpoint: str = DEFAULT_ENDPOINT,
                 api_version: str = API_VERSION, timeout: float = DEFAULT_TIMEOUT,
                 signer: Optional[Signer] = None):
        """
        Initialize API client.

        Args:
            credential: Account credential used to sign every request
            endpoint: Service endpoint URL
            api_version: API version sent with requests and used for the response namespace
            timeout: HTTP timeout in seconds
            signer: Signer to use (default: strongest available digest)
        """
        self.credential = credential
        self.endpoint = endpoint
        self.api_version = api_version
        self.timeout = timeout
        self.signer = signer or Signer()
        self.logger = None

    def _get_logger(self):
        """Lazy logger initialization."""
        if self.logger is None:
            from ec2_client.core.logger import get_logger
            self.logger = get_logger()
        return self.logger

    def build_request(self, params: Mapping[str, object]) -> SignedRequest:
        """Sign action parameters for this client's endpoint and credential."""
        return build_signed_request(
            params, self.credential, self.endpoint,
            signer=self.signer, api_version=self.api_version
        )

    def send(self, params: Mapping[str, object]) -> ParsedResponse:
        """
        Sign and send a request, then check the response for errors.

        Args:
            params: Action-specific parameters (Action plus its arguments)

        Returns:
            ParsedResponse that passed the error check

        Raises:
            NetworkError: If the HTTP call fails or the service answers 5xx without an error envelope
            ProtocolError: If the service reports an error or the body cannot be interpreted
        """
        request = self.build_request(params)
        action = request.params.get('Action', '?')

        headers = {
            'User-Agent': USER_AGENT,
            'Content-Type': 'application/x-www-form-urlencoded; charset=utf-8',
        }

        self._get_logger().info(f"Sending {action} request to {self.endpoint}")
        self._get_logger().debug(f"Request parameters: {request.redacted_params()}")

        try:
            http_response = requests.post(
                request.url,
                data=request.body.encode('utf-8'),
                headers=headers,
                timeout=self.timeout
            )
        except Timeout:
            raise NetworkError(f"Request timeout after {self.timeout} seconds")
        except ConnectionError as e:
            raise NetworkError(f"Connection error: {e}")
        except RequestException as e:
            raise NetworkError(f"HTTP request failed: {e}")

        status = http_response.status_code
        self._get_logger().info(f"Received response: HTTP {status}")

        response = ParsedResponse(
            http_response.content,
            status_code=status,
            headers=dict(http_response.headers),
            namespace=namespace_for(self.api_version)
        )

        check_for_errors(response)

        if status >= 500:
            raise NetworkError(
                f"Server error (HTTP {status}). Response: {http_response.text[:200]}",
                status_code=status
            )
        if status >= 400:
            raise ProtocolError(f"HTTP{status}", http_response.text[:500])
        if not response.is_available:
            raise ProtocolError(
                "MalformedResponse",
                f"Response body for {action} is not well-formed XML"
            )

        self._get_logger().debug(f"Response length: {len(http_response.content)} bytes")
        return response
