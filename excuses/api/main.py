"""
FastAPI server exposing the quote service.

This server provides:
1. ``GET /`` - health check, used by clients as their connection probe
2. ``POST /rpc/QuoteServer.FetchQuote`` - fetch and extract one page

A failed page retrieval answers 502 with ``{"detail": ...}``; a page that
was retrieved but could not be used answers 200 with ``error`` set.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import aiohttp
from fastapi import FastAPI, HTTPException

from excuses.config.settings import SERVER_CONFIG
from excuses.core.errors import FetchError
from excuses.core.implementations.aiohttp_fetcher import AiohttpFetcher
from excuses.core.implementations.excuse_parser import ExcuseParser
from excuses.core.quote_source import QuoteSource
from excuses.protocol.messages import (
    API_VERSION,
    FETCH_QUOTE_ROUTE,
    HEALTH_ROUTE,
    ErrorReply,
    FetchQuoteRequest,
    FetchQuoteResponse,
    HealthReply,
)
from excuses.server.handler import QuoteHandler
from excuses.server.metrics import ServerMetrics

logger = logging.getLogger(__name__)

def create_app(config: Optional[Dict[str, Any]] = None, handler: Optional[QuoteHandler] = None) -> FastAPI:
    """
    Build the application.

    Args:
        config: Effective server config (see ``SERVER_CONFIG``)
        handler: Pre-built handler; when omitted one is created at startup
            around a shared aiohttp session

    Returns:
        The FastAPI app; ``app.state.handler`` and ``app.state.metrics`` are
        set once the lifespan has started
    """
    cfg = dict(SERVER_CONFIG)
    cfg.update(config or {})

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        session = None
        if handler is None:
            session = aiohttp.ClientSession()
            source = QuoteSource(
                AiohttpFetcher(session, timeout=cfg["fetch_timeout"]),
                ExcuseParser(),
                base_url=cfg["base_url"],
            )
            app.state.handler = QuoteHandler(source, ServerMetrics())
        else:
            app.state.handler = handler
        app.state.metrics = app.state.handler.metrics

        reporter = asyncio.create_task(app.state.metrics.run_reporter(cfg["metrics_interval"]))
        logger.info(f"Server starting base_url={app.state.handler.source.base_url}")
        try:
            yield
        finally:
            reporter.cancel()
            try:
                await reporter
            except asyncio.CancelledError:
                pass
            if session is not None:
                await session.close()
            app.state.metrics.log_snapshot()
            logger.info("Server stopped")

    app = FastAPI(
        title="Excuses quote server",
        description="Fetches excuses from the content source on behalf of TUI clients",
        version=API_VERSION,
        lifespan=lifespan,
    )

    @app.get(HEALTH_ROUTE, response_model=HealthReply)
    async def root():
        """Health check endpoint."""
        return HealthReply(message="Excuses quote server is running", version=API_VERSION)

    @app.post(
        FETCH_QUOTE_ROUTE,
        response_model=FetchQuoteResponse,
        responses={502: {"model": ErrorReply}},
    )
    async def fetch_quote(request: FetchQuoteRequest):
        try:
            return await app.state.handler.handle(request)
        except FetchError as e:
            raise HTTPException(status_code=502, detail=e.message)

    return app
