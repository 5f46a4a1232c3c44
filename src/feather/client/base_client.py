"""Base API client: URL assembly and typed request dispatch over a pluggable transport."""

import logging
import os
import weakref
from typing import Any, Callable, List, Optional, Sequence, Type, TypeVar, Union

from feather.client import DEFAULT_ENV_CONFIG_FILE_PATH
from feather.client._protocols import ClientDelegate, Transport
from feather.client.env_config import load_env_config, resolve_environment
from feather.client.errors import DecodingError, EncodingError
from feather.client.http import Content, Header, Method, Response
from feather.client.httpx.transport import HttpxTransport
from feather.client.request import Request
from feather.client.serde import JSONDecoder, JSONEncoder
from feather.client.url import QueryParams, build_url

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseApiClient:
    """Base API client issuing typed calls against a JSON API.

    Provides:
    - URL assembly from the base URL, a path, query parameters and a fragment
    - Body encoding and typed response decoding through pluggable encoder/decoder factories
    - A non-owning reference to a delegate holding the bearer token

    Every call is independent; the client keeps no per-request state. Calls are coroutines and
    start when awaited or wrapped in a task.

    Example:
        async with BaseApiClient("https://api.example.com") as client:
            content = await client.send(list[Todo], "todos", headers=JSON_HEADERS)
            if content.ok:
                print(content.content)
    """

    def __init__(
        self,
        base_url: str,
        delegate: Optional[ClientDelegate] = None,
        *,
        transport: Optional[Transport] = None,
        encoder: Callable[[], JSONEncoder] = JSONEncoder,
        decoder: Callable[[], JSONDecoder] = JSONDecoder,
        client_name: Optional[str] = "auto",
    ):
        """Initialize the API client.

        Args:
            base_url: Scheme and host, optionally with a path prefix, every request path is appended to
            delegate: Object holding the bearer token. Only a weak reference is kept.
            transport: Network primitive to send requests with. Defaults to an HttpxTransport owned by the client.
            encoder: Factory returning the encoder used for request bodies, called once per request
            decoder: Factory returning the decoder used for response bodies, called once per request
            client_name: Name added to User-Agent. Use "auto" for class name, None for no name.
        """
        if client_name == "auto":
            client_name = self.__class__.__name__
        self._client_name = client_name

        self.base_url = base_url
        self.encoder = encoder
        self.decoder = decoder
        self._transport = transport
        self._owns_transport = transport is None
        self._delegate_ref: Optional[weakref.ref] = None
        self.delegate = delegate

    @property
    def delegate(self) -> Optional[ClientDelegate]:
        """The delegate, or None if none was set or it has been garbage collected."""
        if self._delegate_ref is None:
            return None
        return self._delegate_ref()

    @delegate.setter
    def delegate(self, delegate: Optional[ClientDelegate]) -> None:
        self._delegate_ref = weakref.ref(delegate) if delegate is not None else None

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = HttpxTransport(client_name=self._client_name)
        return self._transport

    def auth_headers(self) -> List[Header]:
        """Authorization header for the delegate's current token, empty if there is no token."""
        delegate = self.delegate
        token = delegate.token if delegate is not None else None
        return [Header.authorization(token)] if token else []

    def url(self, path: str, query_params: Optional[QueryParams] = None, fragment: Optional[str] = None) -> str:
        return build_url(self.base_url, path, query_params, fragment)

    async def request(
        self,
        path: str,
        *,
        method: Method = Method.GET,
        headers: Sequence[Header] = (),
        query_params: Optional[QueryParams] = None,
        body: Optional[bytes] = None,
    ) -> Response:
        """Send a request with a raw body and return the raw response.

        Raises:
            EncodingError: If a header value cannot be encoded by the transport
            UnknownError: If the transport failed
            InvalidResponse: If the transport reply is not an HTTP response
            MisconfigurationError: If the base URL is invalid
        """
        request = Request(url=self.url(path, query_params), method=method, headers=tuple(headers), body=body)
        return await request.perform(self.transport)

    async def send(
        self,
        cls: Optional[Type[T]],
        path: str,
        *,
        method: Method = Method.GET,
        headers: Sequence[Header] = (),
        query_params: Optional[QueryParams] = None,
        body: Any = None,
    ) -> Content[T]:
        """Send a request and decode the response body into ``cls``.

        The body, if not None, is encoded with a fresh encoder. The status code is not interpreted:
        any response with a decodable (or empty) body is returned as Content, check ``status_code``
        to branch on it. An empty response body gives ``content=None``.

        Args:
            cls: Type to decode the response body into. None returns the parsed JSON as-is.
            path: Path relative to the base URL
            method: HTTP method
            headers: Headers in the order they are applied
            query_params: Query parameters in the order they are rendered
            body: Value to encode as the request body

        Raises:
            EncodingError: If the body could not be encoded
            DecodingError: If the response body could not be decoded into ``cls``
            UnknownError: If the transport failed
            InvalidResponse: If the transport reply is not an HTTP response
            MisconfigurationError: If the base URL is invalid
        """
        encoded_body = None
        if body is not None:
            try:
                encoded_body = self.encoder().encode(body)
            except (TypeError, ValueError, RecursionError) as e:
                raise EncodingError(str(e), cause=e) from e

        response = await self.request(
            path, method=method, headers=headers, query_params=query_params, body=encoded_body
        )

        content = None
        if response.data is not None:
            try:
                content = self.decoder().decode(cls, response.data)
            except (TypeError, ValueError, KeyError, RecursionError) as e:
                raise DecodingError(str(e)) from e

        return Content(status_code=response.status_code, headers=response.headers, content=content)

    @classmethod
    def from_env(
        cls,
        env: Optional[str] = None,
        *,
        env_config_path: Union[str, os.PathLike] = "",
        **kwargs,
    ) -> "BaseApiClient":
        """Create a client from a named environment in the config file.

        Args:
            env: Environment name to look up in the config file. Defaults to the configured default
                environment, then the FEATHER_BASE_URL environment variable.
            env_config_path: Path to config file. Defaults to ~/.config/feather/environments.json.
            **kwargs: Additional arguments passed to the constructor (e.g. delegate, transport).

        Returns:
            Configured client instance.
        """
        config_file_path = env_config_path or DEFAULT_ENV_CONFIG_FILE_PATH
        cfg = load_env_config(config_file_path)
        try:
            resolved = resolve_environment(cfg, env)
        except ValueError as e:
            raise ValueError(f"{e} (config at {config_file_path})") from e
        logger.debug(f"Using environment {resolved.name} with base_url={resolved.base_url}")
        return cls(resolved.base_url, **kwargs)

    async def aclose(self) -> None:
        """Close the transport if the client created it."""
        if self._owns_transport and self._transport is not None:
            await self._transport.aclose()
            self._transport = None

    async def __aenter__(self) -> "BaseApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
