"""
Location: nodeless_sdk/errors.py

Summary:
    Exception hierarchy for nodeless-sdk. Every failure surfaced by the
    client is a NodelessError subclass describing which layer failed.

Usage:
    Raised by codecs.py, envelope.py and client.py. Callers normally catch
    NodelessError, or one of the subclasses when they need to react to a
    specific failure kind.

Example:
    from nodeless_sdk.errors import NodelessError, TransportError

    try:
        store = await client.get_store("store_123")
    except TransportError as exc:
        print(exc.status_code)
    except NodelessError:
        raise
"""

from typing import Optional


class NodelessError(Exception):
    """Base exception for all nodeless-sdk errors."""
    pass


class InvalidUrlError(NodelessError, ValueError):
    """Exception raised when a base URL, path segment or URL field is malformed."""
    pass


class InvalidTimestampError(NodelessError, ValueError):
    """Exception raised when a timestamp cannot be parsed or formatted."""
    pass


class TransportError(NodelessError):
    """
    Exception raised when the HTTP exchange itself fails.

    Covers connection errors, timeouts, TLS failures and non-2xx
    responses. The underlying httpx exception is chained as __cause__.

    Attributes:
        status_code: HTTP status of the response, or None if no response
                     was received
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(NodelessError):
    """Exception raised when a response payload does not match the expected type."""
    pass


class InvalidResponseError(NodelessError):
    """Exception raised when a response body cannot be interpreted at all."""
    pass
