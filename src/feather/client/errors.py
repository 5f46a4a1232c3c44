"""Error taxonomy for typed API calls.

Everything deriving from :class:`ClientError` is a recoverable, per-call failure and is
raised to the caller of the request. :class:`MisconfigurationError` is deliberately kept
outside that hierarchy: it signals a broken client setup and is never caught by this package.
"""

from typing import Optional


class ClientError(Exception):
    """Base class for failures of a single API call."""


class Unauthorized(ClientError):
    """Reserved for status code mapping at the endpoint layer."""


class NotFound(ClientError):
    """Reserved for status code mapping at the endpoint layer."""


class ResponseError(ClientError):
    """Reserved for status code mapping at the endpoint layer."""


class InvalidResponse(ClientError):
    """The transport returned something that is not an HTTP response."""

    def __init__(self, message: str = "Transport reply is not an HTTP response"):
        super().__init__(message)


class UnknownError(ClientError):
    """The transport failed before a reply was received (DNS, connection, timeout, ...)."""

    def __init__(self, cause: BaseException):
        super().__init__(f"Transport failure: {cause!r}")
        self.cause = cause


class DecodingError(ClientError):
    """A response body was present but did not parse into the requested type."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EncodingError(ClientError):
    """A request body could not be serialized."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class MisconfigurationError(RuntimeError):
    """The client is configured in a way no request can succeed with, e.g. an invalid base URL."""
