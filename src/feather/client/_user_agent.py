"""User-Agent string handling for HTTP transports."""

import sys
from typing import Optional

from feather.client import __version__

_PY_VERSION = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"


def get_user_agent(lib_name: str, lib_version: str, client_name: Optional[str] = None) -> str:
    """User-Agent like "feather-client/0.1.0 python/3.12.0 python-httpx/0.28.1 FeatherClient".

    Blank client names are left out.
    """
    parts = [f"feather-client/{__version__}", f"python/{_PY_VERSION}", f"{lib_name}/{lib_version}"]
    if client_name and client_name.strip():
        parts.append(client_name.strip())
    return " ".join(parts)
