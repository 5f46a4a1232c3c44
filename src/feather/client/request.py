"""Transport-ready request descriptor and normalization of raw transport replies."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from feather.client._protocols import Transport
from feather.client.errors import EncodingError, InvalidResponse, UnknownError
from feather.client.http import Header, Method, Response

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Request:
    url: str
    method: Method = Method.GET
    headers: Tuple[Header, ...] = ()
    body: Optional[bytes] = None

    def __post_init__(self):
        # Accept any sequence of headers but keep the descriptor immutable
        object.__setattr__(self, "headers", tuple(self.headers))
        object.__setattr__(self, "method", Method(self.method))

    def header_items(self) -> List[Tuple[str, str]]:
        """Headers as (key, value) pairs in the order given. Duplicates are kept."""
        return [header.as_tuple() for header in self.headers]

    async def perform(self, transport: Transport) -> Response:
        """Send the request through the transport and normalize the reply.

        The status code is not interpreted; 4xx and 5xx replies are returned like any other.

        Raises:
            UnknownError: If the transport failed before a reply was received
            EncodingError: If a header value cannot be encoded by the transport
            InvalidResponse: If the reply has no integer status code
        """
        logger.debug(f"Sending {self.method.value} {self.url}")
        try:
            reply = await transport.send(self.method.value, self.url, self.header_items(), self.body)
        except transport.transport_errors as e:
            raise UnknownError(e) from e
        except UnicodeEncodeError as e:
            raise EncodingError(f"Header value not encodable for {self.method.value} {self.url}: {e}", cause=e) from e

        response = normalize_reply(reply)
        logger.debug(f"Got status={response.status_code} for {self.method.value} {self.url}")
        return response


def normalize_reply(reply: Any) -> Response:
    """Convert an httpx/requests style reply into a :class:`Response`."""
    status_code = getattr(reply, "status_code", None)
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        raise InvalidResponse()

    data = getattr(reply, "content", None)
    if not isinstance(data, (bytes, bytearray)) or len(data) == 0:
        data = None

    return Response(
        status_code=status_code,
        headers=_text_headers(getattr(reply, "headers", None)),
        data=bytes(data) if data is not None else None,
    )


def _text_headers(headers: Any) -> Dict[str, str]:
    """Copy every header whose key and value are representable as text, keeping the key as received.

    Repeated keys are combined into one comma-separated value.
    """
    if headers is None:
        return {}

    # httpx lower-cases keys in items(), the raw byte pairs keep them as received
    raw = getattr(headers, "raw", None)
    if isinstance(raw, list):
        pairs: Iterable[Tuple[Any, Any]] = raw
    elif hasattr(headers, "items"):
        pairs = headers.items()
    else:
        pairs = headers

    result = {}
    for key, value in pairs:
        key, value = _as_text(key), _as_text(value)
        if key is None or value is None:
            continue
        result[key] = f"{result[key]}, {value}" if key in result else value
    return result


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            return None
    return None
