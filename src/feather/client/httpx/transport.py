"""Async transport backed by an httpx client."""

from typing import List, Optional, Tuple

import httpx

from feather.client._user_agent import get_user_agent


class HttpxTransport:
    """Performs requests with an ``httpx.AsyncClient``.

    The client is created lazily unless one is passed in. A client passed in is not closed by
    :meth:`aclose`, its owner stays responsible for it. No retries are performed.

    Example:
        async with HttpxTransport() as transport:
            client = FeatherClient("https://api.example.com", transport=transport)
            content = await client.todos()
    """

    transport_errors = (httpx.RequestError,)

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        client_name: Optional[str] = None,
        **kwargs,
    ):
        """
        Args:
            client: Existing client to send requests with
            client_name: Name added to User-Agent
            **kwargs: Additional arguments passed to the created httpx client (e.g. timeout, verify)
        """
        self._client = client
        self._owns_client = client is None
        self._client_name = client_name
        self._client_kwargs = kwargs

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs = dict(self._client_kwargs)
            kwargs.setdefault("transport", httpx.AsyncHTTPTransport(retries=0))
            headers = kwargs.pop("headers", {})
            headers.setdefault("User-Agent", get_user_agent("python-httpx", httpx.__version__, self._client_name))
            self._client = httpx.AsyncClient(headers=headers, **kwargs)
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        headers: List[Tuple[str, str]],
        body: Optional[bytes],
    ) -> httpx.Response:
        request = self.client.build_request(method, url, headers=headers, content=body)
        return await self.client.send(request)

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
