"""
Parser interface for the excuses project.

This module defines the interface for extracting a quote and its navigation
links from a page of the content source, plus the classifier used to tell
"next" anchors from "previous" anchors.

Example:
    ```python
    class MyParser(Parser):
        def parse(self, url: str, html: str) -> QuoteAssets:
            # Implementation here
            return QuoteAssets(
                url=url,
                quote="It worked on my machine.",
                next_link="/?42",
                previous_link="/?40"
            )
    ```
"""
from typing import Protocol, NamedTuple, Optional

NEXT = "next"
PREVIOUS = "previous"

class QuoteAssets(NamedTuple):
    """
    Container for data extracted from one page.

    Any field may be empty: a page without a quote element yields an empty
    ``quote``, and the first/last page of the series lacks one of the links.

    Attributes:
        url: The URL of the parsed page
        quote: Text of the quote element, untrimmed
        next_link: href of the "next" anchor, as found in the markup
        previous_link: href of the "previous" anchor, as found in the markup

    Example:
        >>> assets = QuoteAssets(
        ...     url="https://example.com/?41",
        ...     quote="The firewall ate it.",
        ...     next_link="/?42",
        ...     previous_link="/?40"
        ... )
        >>> assets.next_link
        '/?42'
    """
    url: str
    quote: str
    next_link: str
    previous_link: str

class LinkClassifier(Protocol):
    """
    Classifies navigation anchors by their display text.

    Keeping this behind an interface lets the matched wording (and locale)
    change without touching the parser's control flow.
    """

    def classify(self, label: str) -> Optional[str]:
        """
        Return ``NEXT``, ``PREVIOUS`` or ``None`` for an anchor label.
        """
        ...

class Parser(Protocol):
    """
    Interface for parsing content source pages.

    Example:
        ```python
        class HTMLParser(Parser):
            def parse(self, url: str, html: str) -> QuoteAssets:
                soup = BeautifulSoup(html, "lxml")
                node = soup.select_one(".quote")
                return QuoteAssets(url, node.get_text() if node else "", "", "")
        ```
    """

    def parse(self, url: str, html: str) -> QuoteAssets:
        """
        Parse HTML into a QuoteAssets value.

        Args:
            url: The URL of the page being parsed
            html: The HTML content to parse

        Returns:
            QuoteAssets with whatever could be extracted
        """
        ...
