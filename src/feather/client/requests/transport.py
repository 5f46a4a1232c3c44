"""Transport backed by a requests session, run off the event loop."""

import asyncio
from threading import Lock
from typing import List, Optional, Tuple

import requests
from requests import Session

from feather.client._user_agent import get_user_agent


def create_session(client_name: Optional[str] = None) -> Session:
    """Create a requests session with the User-Agent header set. No retry adapters are mounted."""
    session = requests.Session()
    session.headers["User-Agent"] = get_user_agent("requests", requests.__version__, client_name)
    return session


class RequestsTransport:
    """Performs requests with a ``requests.Session`` on a worker thread.

    The blocking call runs through :func:`asyncio.to_thread`, so awaiting :meth:`send` never
    blocks the event loop. The session is lazily created unless one is passed in.
    """

    transport_errors = (requests.RequestException,)

    def __init__(
        self,
        session: Optional[Session] = None,
        *,
        client_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._session = session
        self._client_name = client_name
        self._timeout = timeout
        self._lock = Lock()

    @property
    def session(self) -> Session:
        """Get the requests Session.

        Session is lazily initialized on first access.
        """
        if self._session is None:
            with self._lock:
                if self._session is None:
                    self._session = create_session(self._client_name)
        return self._session

    async def send(
        self,
        method: str,
        url: str,
        headers: List[Tuple[str, str]],
        body: Optional[bytes],
    ) -> requests.Response:
        return await asyncio.to_thread(self._send, method, url, headers, body)

    def _send(
        self,
        method: str,
        url: str,
        headers: List[Tuple[str, str]],
        body: Optional[bytes],
    ) -> requests.Response:
        request = requests.Request(method, url, data=body)
        prepared = self.session.prepare_request(request)
        # Applied in order on top of the session defaults, a later duplicate key replaces an earlier one
        for key, value in headers:
            prepared.headers[key] = value
        return self.session.send(prepared, timeout=self._timeout)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
