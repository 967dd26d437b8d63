"""
Wire contract between the quote server and its clients.

The single operation is exposed as ``POST FETCH_QUOTE_ROUTE``. A reply with
status 200 carries a ``FetchQuoteResponse``; any other status carries an
``ErrorReply`` and means the call itself failed.
"""
from pydantic import BaseModel

SERVICE_NAME = "QuoteServer"
FETCH_QUOTE_ROUTE = f"/rpc/{SERVICE_NAME}.FetchQuote"
HEALTH_ROUTE = "/"
API_VERSION = "1.0.0"

class FetchQuoteRequest(BaseModel):
    path: str = ""

class FetchQuoteResponse(BaseModel):
    """``error`` non-empty means ``quote`` must not be used."""
    quote: str = ""
    next_link: str = ""
    previous_link: str = ""
    error: str = ""

class ErrorReply(BaseModel):
    detail: str

class HealthReply(BaseModel):
    message: str
    version: str
