"""Protocol definitions for transports, raw replies and client delegates."""

from typing import Any, List, Optional, Protocol, Tuple, Type, runtime_checkable


@runtime_checkable
class RawReply(Protocol):
    """Protocol for the reply objects transports hand back (httpx and requests responses)."""

    status_code: int
    headers: Any
    content: bytes


@runtime_checkable
class Transport(Protocol):
    """Protocol for the network primitive performing the actual HTTP exchange.

    ``transport_errors`` lists the exception types that signal a transport-level failure.
    """

    transport_errors: Tuple[Type[BaseException], ...]

    async def send(
        self,
        method: str,
        url: str,
        headers: List[Tuple[str, str]],
        body: Optional[bytes],
    ) -> RawReply:
        raise NotImplementedError


@runtime_checkable
class ClientDelegate(Protocol):
    """Protocol for objects owning the current bearer token."""

    token: Optional[str]
