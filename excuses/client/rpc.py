"""
RPC client for the quote server.

Holds one aiohttp session whose connector keeps the TCP connection to the
server alive between calls. Every failure of the call itself (connection
refused, timeout, non-200 status, malformed reply) is raised as ``RPCError``; a
content problem comes back inside the response's ``error`` field.

Example:
    ```python
    async with QuoteClient("localhost:1234") as client:
        reply = await client.fetch_quote("/?last")
        print(reply.quote)
    ```
"""
import asyncio
import logging
from typing import Optional

import aiohttp
from pydantic import ValidationError

from excuses.protocol.messages import (
    FETCH_QUOTE_ROUTE,
    HEALTH_ROUTE,
    FetchQuoteRequest,
    FetchQuoteResponse,
)

logger = logging.getLogger(__name__)

KEEPALIVE_SECONDS = 300

class RPCError(Exception):
    """The call itself failed."""

def server_url(address: str) -> str:
    """
    Example:
        >>> server_url("localhost:1234")
        'http://localhost:1234'
    """
    if address.startswith(("http://", "https://")):
        return address.rstrip("/")
    return f"http://{address}"

class QuoteClient:
    def __init__(self, address: str, timeout: Optional[float] = None):
        self.address = address
        self.base_url = server_url(address)
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self) -> None:
        """
        Open the session and probe the server once.

        Raises:
            RPCError: If the server cannot be reached
        """
        if self.session is None:
            connector = aiohttp.TCPConnector(keepalive_timeout=KEEPALIVE_SECONDS)
            self.session = aiohttp.ClientSession(connector=connector, timeout=self.timeout)
        try:
            async with self.session.get(self.base_url + HEALTH_ROUTE) as response:
                status = response.status
        except aiohttp.ClientError as e:
            await self.close()
            raise RPCError(f"cannot connect to {self.address}: {e}") from e
        if status != 200:
            await self.close()
            raise RPCError(f"unexpected status {status} from {self.base_url}")
        logger.info(f"Connected to quote server at {self.base_url}")

    async def close(self) -> None:
        if self.session is not None:
            await self.session.close()
            self.session = None

    async def fetch_quote(self, path: str) -> FetchQuoteResponse:
        if self.session is None:
            raise RPCError("client is not connected")

        body = FetchQuoteRequest(path=path).model_dump()
        logger.debug(f"Calling FetchQuote path={path!r}")
        try:
            async with self.session.post(self.base_url + FETCH_QUOTE_ROUTE, json=body) as response:
                if response.status != 200:
                    raise RPCError(await self._error_detail(response))
                data = await response.json()
        except asyncio.TimeoutError as e:
            raise RPCError(f"FetchQuote timed out after {self.timeout.total}s") from e
        except (aiohttp.ClientError, ValueError) as e:
            raise RPCError(str(e) or type(e).__name__) from e

        try:
            return FetchQuoteResponse.model_validate(data)
        except ValidationError as e:
            raise RPCError(f"malformed reply: {e}") from e

    @staticmethod
    async def _error_detail(response: aiohttp.ClientResponse) -> str:
        try:
            data = await response.json(content_type=None)
        except ValueError:
            data = None
        if isinstance(data, dict) and isinstance(data.get("detail"), str):
            return data["detail"]
        return f"server replied {response.status} {response.reason or ''}".strip()
