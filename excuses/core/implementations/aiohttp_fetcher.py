"""
Aiohttp-based implementation of the Fetcher interface.

This module provides an asynchronous HTTP client implementation using aiohttp.
Each call issues exactly one GET; network failures and non-success statuses
are reported through ``FetchResult.error`` instead of being raised.

Example:
    ```python
    async with AiohttpFetcher() as fetcher:
        result = await fetcher.fetch("https://cyber.excusesecu.fr/")
        if not result.error:
            print(result.content)
    ```
"""
import asyncio
import logging
from typing import Optional
import aiohttp
from excuses.core.interfaces.fetcher import Fetcher, FetchResult

logger = logging.getLogger(__name__)

class AiohttpFetcher(Fetcher):
    """
    Asynchronous HTTP client using aiohttp.

    The fetcher either borrows a session owned by the caller (the server
    shares one session across requests) or creates its own when used as an
    async context manager.

    Attributes:
        session: The aiohttp client session
        timeout: Total request timeout in seconds, None for no limit
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None, timeout: Optional[float] = None):
        self.session = session
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._owns_session = False

    async def __aenter__(self):
        if self.session is None:
            self.session = aiohttp.ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the session if this fetcher created it."""
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None
            self._owns_session = False

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch a URL with a single GET request.

        Args:
            url: The URL to fetch

        Returns:
            FetchResult; ``error`` is set for transport failures and for
            any status outside 2xx
        """
        if self.session is None:
            self.session = aiohttp.ClientSession()
            self._owns_session = True

        try:
            async with self.session.get(url, timeout=self.timeout) as response:
                logger.debug(f"Received response status={response.status} url={url}")
                content_type = response.headers.get("content-type")
                if response.status < 200 or response.status >= 300:
                    return FetchResult(
                        url=url,
                        content="",
                        status_code=response.status,
                        content_type=content_type,
                        error=f"{response.status} {response.reason or 'Error'}",
                    )
                return FetchResult(
                    url=url,
                    content=await response.text(errors="replace"),
                    status_code=response.status,
                    content_type=content_type,
                )
        except asyncio.TimeoutError:
            return FetchResult(url=url, content="", status_code=0, error=f"Timeout fetching {url}")
        except aiohttp.ClientError as e:
            return FetchResult(url=url, content="", status_code=0, error=str(e) or type(e).__name__)
