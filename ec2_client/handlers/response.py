"""
Response parsing module for EC2 API Client.
Wraps raw XML in a namespace-aware query interface and detects error envelopes.
"""

from typing import Dict, List, Optional

from lxml import etree

from ec2_client.core.exceptions import ProtocolError
from ec2_client.handlers.request_builder import API_VERSION


NAMESPACE_ALIAS = 'ec2'


def namespace_for(api_version: str = API_VERSION) -> str:
    """XML namespace of responses for the given API version."""
    return f'http://ec2.amazonaws.com/doc/{api_version}/'


XML_NAMESPACE = namespace_for(API_VERSION)

# Cache states
_NOT_PARSED = object()
UNAVAILABLE = object()


class ParsedResponse:
    """
    A service response with lazily parsed XML.

    The document is parsed on first query and cached. If the body is missing
    or malformed the cache holds UNAVAILABLE; every query then returns an
    empty result instead of raising.

    Query paths use the 'ec2' alias, e.g. ``//ec2:reservationSet/ec2:item``.
    """

    def __init__(self, body: Optional[bytes], status_code: int = 200,
                 headers: Optional[Dict[str, str]] = None,
                 namespace: str = XML_NAMESPACE):
        self.body = body
        self.status_code = status_code
        self.headers = dict(headers or {})
        self.namespaces = {NAMESPACE_ALIAS: namespace}
        self._document = _NOT_PARSED

    @property
    def document(self):
        """The parsed root element, or UNAVAILABLE."""
        if self._document is _NOT_PARSED:
            self._document = self._parse(self.body)
        return self._document

    @property
    def is_available(self) -> bool:
        return self.document is not UNAVAILABLE

    @staticmethod
    def _parse(body):
        if not body:
            return UNAVAILABLE
        if isinstance(body, str):
            body = body.encode('utf-8')

        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            return etree.fromstring(body, parser)
        except (etree.XMLSyntaxError, ValueError):
            return UNAVAILABLE

    def query(self, path: str, context=None) -> List:
        """
        Select nodes matching an XPath expression.

        Args:
            path: Namespace-qualified XPath
            context: Node to evaluate relative paths against (default: document root)

        Returns:
            List of matching nodes, empty if none match or the document is unavailable
        """
        node = self._context(context)
        if node is None:
            return []
        result = node.xpath(path, namespaces=self.namespaces)
        return result if isinstance(result, list) else []

    def evaluate(self, expression: str, context=None) -> str:
        """
        Evaluate an XPath expression to a string, e.g. ``string(ec2:instanceId/text())``.

        Returns an empty string if the document is unavailable.
        """
        node = self._context(context)
        if node is None:
            return ''
        result = node.xpath(expression, namespaces=self.namespaces)
        if isinstance(result, list):
            return str(result[0]) if result and isinstance(result[0], str) else ''
        if isinstance(result, bool):
            return 'true' if result else 'false'
        return str(result)

    def _context(self, context):
        if context is not None:
            return context
        document = self.document
        return None if document is UNAVAILABLE else document


def check_for_errors(response: ParsedResponse) -> None:
    """
    Raise if the response carries an error envelope.

    Only the first Error in document order is reported; the service does
    not order simultaneous errors.

    Raises:
        ProtocolError: With the service's error code and message
    """
    errors = response.query('//ec2:Error')
    if errors:
        node = errors[0]
        code = response.evaluate('string(ec2:Code/text())', node)
        message = response.evaluate('string(ec2:Message/text())', node)
        raise ProtocolError(code, message)
