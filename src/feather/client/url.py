"""Request target assembly."""

from typing import Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

import httpx

from feather.client.errors import MisconfigurationError

QueryParams = Union[Sequence[Tuple[str, str]], Mapping[str, str]]

# Characters allowed unescaped in a path, besides alphanumerics
_PATH_SAFE = "/:@!$&'()*+,;=-._~%"


def build_url(
    base: str,
    path: str,
    query_params: Optional[QueryParams] = None,
    fragment: Optional[str] = None,
) -> str:
    """Join a base URL, a path, query parameters and a fragment into one request URL.

    The path is appended to the base URL's path with exactly one ``/`` between them, whether or not
    either side already has one. Query parameters keep the given order and the query component is
    omitted entirely when there are none.

    Raises:
        MisconfigurationError: If the base URL has no scheme or host, or the result does not parse
    """
    try:
        parts = urlsplit(base)
    except ValueError as e:
        raise MisconfigurationError(f"Invalid base url: {base!r}") from e
    if not parts.scheme or not parts.netloc:
        raise MisconfigurationError(f"Invalid base url: {base!r}")

    full_path = parts.path.rstrip("/") + "/" + quote(path.lstrip("/"), safe=_PATH_SAFE)

    if isinstance(query_params, Mapping):
        query_params = list(query_params.items())
    query = parts.query
    if query_params:
        encoded = urlencode(list(query_params))
        query = f"{query}&{encoded}" if query else encoded

    url = urlunsplit((parts.scheme, parts.netloc, full_path, query, fragment if fragment is not None else ""))
    try:
        httpx.URL(url)
    except httpx.InvalidURL as e:
        raise MisconfigurationError(f"Invalid url: {url!r}") from e
    return url
