import logging
import os
from logging import NullHandler
from pathlib import Path

logging.getLogger(__name__).addHandler(NullHandler())

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0"

BASE_URL_ENV_VAR = "FEATHER_BASE_URL"

DEFAULT_ENV_CONFIG_FILE_PATH = (
    Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "feather" / "environments.json"
)

from feather.client.base_client import BaseApiClient  # noqa: E402
from feather.client.client import FeatherClient  # noqa: E402
from feather.client.errors import (  # noqa: E402
    ClientError,
    DecodingError,
    EncodingError,
    InvalidResponse,
    MisconfigurationError,
    NotFound,
    ResponseError,
    Unauthorized,
    UnknownError,
)
from feather.client.http import Content, Header, Method, MIMEType, Response  # noqa: E402

__all__ = [
    "BaseApiClient",
    "ClientError",
    "Content",
    "DecodingError",
    "EncodingError",
    "FeatherClient",
    "Header",
    "InvalidResponse",
    "Method",
    "MIMEType",
    "MisconfigurationError",
    "NotFound",
    "Response",
    "ResponseError",
    "Unauthorized",
    "UnknownError",
]
