"""
Error taxonomy of the content source adapter.

- ``FetchError``: the page could not be retrieved (network failure or
  non-success HTTP status). The RPC call itself fails.
- ``ContentError``: the page was retrieved but cannot be used. The RPC call
  succeeds and carries the message in the response's ``error`` field.

A page that loads but has no quote element raises neither.
"""


class QuoteSourceError(Exception):
    """Base class for adapter failures."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.message = message
        self.url = url


class FetchError(QuoteSourceError):
    """Network or HTTP status failure."""

    def __init__(self, message: str, url: str = "", status_code: int = 0):
        super().__init__(message, url)
        self.status_code = status_code


class ContentError(QuoteSourceError):
    """Page retrieved but not parseable."""
