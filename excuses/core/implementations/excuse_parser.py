"""
BeautifulSoup-based implementation of the Parser interface.

This module extracts the quote text and the next/previous hrefs from a
content source page using CSS selectors.

A page with no quote element is not an error: the quote comes back empty
and the caller passes it on as a normal result.

Example:
    ```python
    parser = ExcuseParser()
    html = '''
        <div class="quote">C'est la faute du stagiaire.</div>
        <div class="links">
            <a href="/?40">Excuse précédente</a>
            <a href="/?42">Excuse suivante</a>
        </div>
    '''
    assets = parser.parse("https://cyber.excusesecu.fr/?41", html)
    print(assets.quote)      # "C'est la faute du stagiaire."
    print(assets.next_link)  # "/?42"
    ```
"""
import logging
from typing import Optional
from bs4 import BeautifulSoup
from excuses.config.settings import QUOTE_SELECTOR, LINKS_SELECTOR
from excuses.core.interfaces.parser import Parser, QuoteAssets, LinkClassifier, NEXT, PREVIOUS
from excuses.core.implementations.label_classifier import LabelLinkClassifier

logger = logging.getLogger(__name__)

class ExcuseParser(Parser):
    """
    Extracts the quote and navigation links from a page.

    The parser:
    1. Takes the text of the element matching ``quote_selector``
       (when several match, the last one wins)
    2. Walks every anchor inside ``links_selector`` containers
    3. Asks the classifier whether each anchor is "next" or "previous"
    4. Keeps the raw href of each classified anchor

    Attributes:
        classifier: Decides which anchor is which
        quote_selector: CSS selector of the quote container
        links_selector: CSS selector of the navigation container
    """

    def __init__(
        self,
        classifier: Optional[LinkClassifier] = None,
        quote_selector: str = QUOTE_SELECTOR,
        links_selector: str = LINKS_SELECTOR,
    ):
        self.classifier = classifier or LabelLinkClassifier()
        self.quote_selector = quote_selector
        self.links_selector = links_selector

    def parse(self, url: str, html: str) -> QuoteAssets:
        soup = BeautifulSoup(html, "lxml")

        quote = ""
        for node in soup.select(self.quote_selector):
            quote = node.get_text()
        if quote:
            logger.debug(f"Found quote url={url} quote={quote.strip()!r}")
        else:
            logger.debug(f"No quote element found url={url}")

        links = {NEXT: "", PREVIOUS: ""}
        for container in soup.select(self.links_selector):
            for a in container.find_all("a"):
                kind = self.classifier.classify(a.get_text())
                if kind is None:
                    continue
                links[kind] = a.get("href", "")
                logger.debug(f"Found {kind} link url={url} href={links[kind]!r}")

        return QuoteAssets(
            url=url,
            quote=quote,
            next_link=links[NEXT],
            previous_link=links[PREVIOUS],
        )
