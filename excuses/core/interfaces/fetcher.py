"""
Page retrieval for the quote source.

The quote source asks a ``Fetcher`` for one excuses page at a time and gets
back the raw body plus what it needs to decide between a transport failure,
a page that is not HTML, and a page worth parsing. Tests plug in canned
pages through the same protocol.

Example:
    ```python
    class CannedPages:
        def __init__(self, pages):
            self.pages = pages

        async def fetch(self, url: str) -> FetchResult:
            return FetchResult(url=url, content=self.pages[url], status_code=200, content_type="text/html")
    ```
"""
from typing import Protocol, Optional
from dataclasses import dataclass

@dataclass
class FetchResult:
    """
    One excuses page as the source saw it.

    ``error`` is the only failure signal: it is set when no response came
    back (``status_code`` is then 0) or when the status is outside 2xx.
    A 2xx body is kept as text even if some bytes did not decode.

    Example:
        >>> page = FetchResult(
        ...     url="https://cyber.excusesecu.fr/?41",
        ...     content='<div class="quote">Le cache DNS se propage encore.</div>',
        ...     status_code=200,
        ...     content_type="text/html; charset=utf-8",
        ... )
        >>> page.error is None
        True
    """
    url: str
    content: str
    status_code: int
    content_type: Optional[str] = None
    error: Optional[str] = None

class Fetcher(Protocol):
    """One GET per call, no retry, no cache. Never raises for network or HTTP failures."""

    async def fetch(self, url: str) -> FetchResult:
        """
        Args:
            url: Absolute page URL, already resolved against the base origin
        """
        ...
