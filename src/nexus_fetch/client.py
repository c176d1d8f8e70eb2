"""HTTP transport for the Nexus REST API."""

import asyncio
import base64
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

import aiohttp
from yarl import URL

from nexus_fetch.exceptions import TransportError
from nexus_fetch.models import NexusInstance

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


def basic_authorization(username: str, password: str) -> str:
    """Return a basic auth Authorization header value."""
    token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return f"Basic {token}"


@dataclass(frozen=True)
class HttpResponse:
    """A fully read HTTP response.

    Attributes:
        url: The requested URL.
        status: HTTP status code of the final response (after redirects).
        headers: Case-insensitive response headers.
        body: Raw response body.
        charset: Charset advertised by the server, if any.
    """

    url: str
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    charset: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode(self.charset or "utf-8", errors="replace")


class NexusClient:
    """Performs GET requests against one Nexus instance.

    Manages an aiohttp session carrying the instance credentials as basic
    auth. Redirects are followed. Status codes are returned, not checked;
    callers decide which statuses are acceptable.

    Use as an async context manager or call close() when done.
    """

    def __init__(self, instance: NexusInstance, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize the client.

        Args:
            instance: Nexus instance providing credentials.
            timeout: Total timeout per request, in seconds.
        """
        self.instance = instance
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> aiohttp.ClientSession:
        headers = {}
        if self.instance.auth is not None:
            headers["Authorization"] = basic_authorization(*self.instance.auth)
        return aiohttp.ClientSession(
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "NexusClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def get(self, url: str) -> HttpResponse:
        """GET a URL and read the whole body.

        Args:
            url: Fully built, already encoded request URL.

        Returns:
            The response, whatever its status.

        Raises:
            TransportError: If the request could not be completed.
        """
        logger.debug("Getting %s", url)
        session = await self._get_session()
        try:
            async with session.get(URL(url, encoded=True)) as response:
                body = await response.read()
                logger.debug("%s returns HTTP status code %d", url, response.status)
                logger.debug("Header: %s", dict(response.headers))
                return HttpResponse(
                    url=url,
                    status=response.status,
                    headers=response.headers.copy(),
                    body=body,
                    charset=response.charset,
                )
        except aiohttp.ClientError as e:
            raise TransportError(f"Cannot read url {url}", url=url, details=str(e)) from e
        except asyncio.TimeoutError as e:
            raise TransportError(f"Timed out reading url {url}", url=url) from e

    async def get_ok(self, url: str) -> HttpResponse:
        """GET a URL and require a 2xx status.

        Raises:
            TransportError: If the request fails or the status is not 2xx.
        """
        response = await self.get(url)
        if not response.ok:
            raise TransportError(
                f"Expected status 200 but got {response.status}",
                url=url,
                status=response.status,
            )
        return response
