"""Wire-level vocabulary: methods, MIME types, headers and response envelopes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Generic, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"


class MIMEType(str, Enum):
    JSON = "application/json"


@dataclass(frozen=True)
class Header:
    """A single request header.

    Use the constructors rather than instantiating directly, e.g. ``Header.content_type(MIMEType.JSON)``
    or ``Header.authorization(token)``.
    """

    key: str
    value: str

    @classmethod
    def content_disposition(cls, disposition: str) -> "Header":
        return cls("Content-Disposition", disposition)

    @classmethod
    def accept(cls, types: Sequence[MIMEType]) -> "Header":
        return cls("Accept", ", ".join(MIMEType(t).value for t in types))

    @classmethod
    def content_type(cls, mime_type: MIMEType) -> "Header":
        return cls("Content-Type", MIMEType(mime_type).value)

    @classmethod
    def authorization(cls, token: str) -> "Header":
        return cls("Authorization", f"Bearer {token}")

    @classmethod
    def custom(cls, key: str, value: str) -> "Header":
        return cls(key, value)

    def as_tuple(self) -> Tuple[str, str]:
        return self.key, self.value


JSON_HEADERS = (Header.accept([MIMEType.JSON]), Header.content_type(MIMEType.JSON))


@dataclass(frozen=True)
class Response:
    """Raw HTTP response: status code, headers as received and the optional body."""

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    data: Optional[bytes] = None

    @property
    def text(self) -> Optional[str]:
        """Body decoded as UTF-8, or None if there is no body or it is not valid UTF-8."""
        if self.data is None:
            return None
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError:
            return None


@dataclass(frozen=True)
class Content(Generic[T]):
    """Typed response: status code, headers and the decoded body, if there was one.

    No success or failure semantics are attached to the status code; check ``status_code``
    (or ``ok``) to branch on it.
    """

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    content: Optional[T] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
