"""
Content source adapter.

Turns a page reference into a ``QuoteAssets`` value by resolving it against
the base origin, fetching it once, and handing the markup to the parser.

Example:
    ```python
    async with aiohttp.ClientSession() as session:
        source = QuoteSource(AiohttpFetcher(session), ExcuseParser())
        assets = await source.fetch("/?last")
        print(assets.quote)
    ```
"""
import logging
from typing import Optional
from excuses.config.settings import DEFAULT_BASE_URL
from excuses.core.errors import ContentError, FetchError
from excuses.core.interfaces.fetcher import Fetcher
from excuses.core.interfaces.parser import Parser, QuoteAssets

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")

def resolve_url(base_url: str, page_ref: str) -> str:
    """
    Resolve a page reference against the base origin.

    Example:
        >>> resolve_url("https://x.fr/", "")
        'https://x.fr/'
        >>> resolve_url("https://x.fr/", "/?42")
        'https://x.fr/?42'
        >>> resolve_url("https://x.fr/", "https://y.fr/z")
        'https://y.fr/z'
    """
    if not page_ref:
        return base_url
    if page_ref.startswith("/"):
        return base_url + page_ref[1:]
    return page_ref

def is_html(content_type: Optional[str]) -> bool:
    """An absent content type is given the benefit of the doubt."""
    if not content_type:
        return True
    mime = content_type.split(";", 1)[0].strip().lower()
    return mime in HTML_CONTENT_TYPES

class QuoteSource:
    """
    Stateless adapter over a Fetcher and a Parser.

    Safe to call concurrently: nothing is kept between calls.

    Attributes:
        fetcher: Performs the single GET
        parser: Extracts quote and links
        base_url: Origin that relative references are resolved against
    """

    def __init__(self, fetcher: Fetcher, parser: Parser, base_url: str = DEFAULT_BASE_URL):
        self.fetcher = fetcher
        self.parser = parser
        self.base_url = base_url or DEFAULT_BASE_URL

    def resolve(self, page_ref: str) -> str:
        return resolve_url(self.base_url, page_ref)

    async def fetch(self, page_ref: str) -> QuoteAssets:
        """
        Fetch and extract one page.

        Args:
            page_ref: Empty, a path starting with "/", or an absolute URL

        Returns:
            QuoteAssets; ``quote`` is empty when the page has no quote element

        Raises:
            FetchError: Network failure or non-success status
            ContentError: The response is not an HTML page
        """
        url = self.resolve(page_ref)
        logger.debug(f"Fetching URL {url}")

        result = await self.fetcher.fetch(url)
        if result.error:
            raise FetchError(result.error, url=url, status_code=result.status_code)
        if not is_html(result.content_type):
            raise ContentError(f"unexpected content type {result.content_type!r} for {url}", url=url)

        return self.parser.parse(url, result.content)
