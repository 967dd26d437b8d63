"""
Request handler for the FetchQuote operation.

Wraps the content source adapter with request correlation, logging and
metrics, and decides which error channel a failure travels on:

- ``FetchError`` is re-raised so the RPC call itself fails.
- ``ContentError`` is returned inside ``FetchQuoteResponse.error``.
- A page without a quote is a plain success with an empty quote.
"""
import logging
import time
import uuid
from datetime import datetime
from excuses.core.errors import ContentError, FetchError
from excuses.core.quote_source import QuoteSource
from excuses.protocol.messages import FetchQuoteRequest, FetchQuoteResponse
from excuses.server.metrics import ServerMetrics

logger = logging.getLogger(__name__)

def generate_request_id() -> str:
    """Timestamp plus 8 random hex chars, e.g. ``20261019-142501-3f9a0c1b``."""
    return datetime.now().strftime("%Y%m%d-%H%M%S") + "-" + uuid.uuid4().hex[:8]

class QuoteHandler:
    def __init__(self, source: QuoteSource, metrics: ServerMetrics):
        self.source = source
        self.metrics = metrics

    async def handle(self, request: FetchQuoteRequest) -> FetchQuoteResponse:
        """
        Serve one FetchQuote call.

        Raises:
            FetchError: When the page could not be retrieved
        """
        request_id = generate_request_id()
        logger.info(f"[{request_id}] Received fetch quote request path={request.path!r}")
        logger.debug(f"[{request_id}] Resolved url={self.source.resolve(request.path)}")
        start = time.perf_counter()

        try:
            assets = await self.source.fetch(request.path)
        except FetchError as e:
            duration = time.perf_counter() - start
            self.metrics.record_failure(duration)
            logger.error(f"[{request_id}] Failed to fetch quote url={e.url} error={e.message}")
            raise
        except ContentError as e:
            duration = time.perf_counter() - start
            self.metrics.record_failure(duration)
            logger.warning(f"[{request_id}] Could not extract quote url={e.url} error={e.message}")
            return FetchQuoteResponse(error=e.message)

        duration = time.perf_counter() - start
        self.metrics.record_success(duration)
        if not assets.quote.strip():
            logger.warning(f"[{request_id}] No quote found url={assets.url}")
        logger.info(f"[{request_id}] Request completed successfully duration={duration * 1000:.1f}ms")

        return FetchQuoteResponse(
            quote=assets.quote,
            next_link=assets.next_link,
            previous_link=assets.previous_link,
        )
