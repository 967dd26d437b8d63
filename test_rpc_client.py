import asyncio

import pytest
from aiohttp import test_utils, web

from excuses.client.rpc import QuoteClient, RPCError, server_url
from excuses.protocol.messages import FETCH_QUOTE_ROUTE, HEALTH_ROUTE


def make_server_app(replies: dict, delay: float = 0) -> web.Application:
    """Mimics the quote server: replies[path] is (status, json body)."""

    async def health(request: web.Request) -> web.Response:
        return web.json_response({"message": "ok", "version": "test"})

    async def fetch_quote(request: web.Request) -> web.Response:
        body = await request.json()
        request.app["paths"].append(body["path"])
        if delay:
            await asyncio.sleep(delay)
        status, payload = replies[body["path"]]
        if isinstance(payload, str):
            return web.Response(status=status, text=payload)
        return web.json_response(payload, status=status)

    app = web.Application()
    app["paths"] = []
    app.router.add_get(HEALTH_ROUTE, health)
    app.router.add_post(FETCH_QUOTE_ROUTE, fetch_quote)
    return app


def address_of(server: test_utils.TestServer) -> str:
    return f"{server.host}:{server.port}"


def test_server_url() -> None:
    assert server_url("localhost:1234") == "http://localhost:1234"
    assert server_url("http://h:1/") == "http://h:1"


def test_fetch_quote_round_trip_is_byte_for_byte() -> None:
    payload = {
        "quote": "\n   C'est un problème de couche 8.  \n",
        "next_link": "/?43",
        "previous_link": "https://cyber.excusesecu.fr/?41",
        "error": "",
    }

    async def runner() -> None:
        app = make_server_app({"/?42": (200, payload)})
        server = test_utils.TestServer(app)
        await server.start_server()
        try:
            async with QuoteClient(address_of(server)) as client:
                first = await client.fetch_quote("/?42")
                second = await client.fetch_quote("/?42")
        finally:
            await server.close()

        assert first.model_dump() == payload
        assert second == first
        assert app["paths"] == ["/?42", "/?42"]

    asyncio.run(runner())


def test_content_error_is_returned_not_raised() -> None:
    async def runner() -> None:
        server = test_utils.TestServer(make_server_app({"/": (200, {"error": "unexpected content type"})}))
        await server.start_server()
        try:
            async with QuoteClient(address_of(server)) as client:
                reply = await client.fetch_quote("/")
        finally:
            await server.close()

        assert reply.error == "unexpected content type"

    asyncio.run(runner())


def test_server_failure_raises_rpc_error_with_detail() -> None:
    async def runner() -> None:
        server = test_utils.TestServer(make_server_app({"/": (502, {"detail": "503 Service Unavailable"})}))
        await server.start_server()
        try:
            async with QuoteClient(address_of(server)) as client:
                with pytest.raises(RPCError, match="503 Service Unavailable"):
                    await client.fetch_quote("/")
        finally:
            await server.close()

    asyncio.run(runner())


def test_non_json_reply_raises_rpc_error() -> None:
    async def runner() -> None:
        server = test_utils.TestServer(make_server_app({"/": (500, "Internal Server Error")}))
        await server.start_server()
        try:
            async with QuoteClient(address_of(server)) as client:
                with pytest.raises(RPCError, match="500"):
                    await client.fetch_quote("/")
        finally:
            await server.close()

    asyncio.run(runner())


def test_connect_to_unreachable_server_fails() -> None:
    async def runner() -> None:
        server = test_utils.TestServer(make_server_app({}))
        await server.start_server()
        address = address_of(server)
        await server.close()

        client = QuoteClient(address)
        with pytest.raises(RPCError, match="cannot connect"):
            await client.connect()
        assert client.session is None

    asyncio.run(runner())


def test_call_after_server_goes_away_raises_rpc_error() -> None:
    async def runner() -> None:
        server = test_utils.TestServer(make_server_app({}))
        await server.start_server()
        client = QuoteClient(address_of(server))
        await client.connect()
        await server.close()
        try:
            with pytest.raises(RPCError):
                await client.fetch_quote("/")
        finally:
            await client.close()

    asyncio.run(runner())


def test_fetch_without_connect_raises() -> None:
    with pytest.raises(RPCError):
        asyncio.run(QuoteClient("localhost:1").fetch_quote(""))


def test_slow_server_times_out_as_rpc_error() -> None:
    async def runner() -> None:
        server = test_utils.TestServer(make_server_app({"/": (200, {"quote": "late"})}, delay=1.0))
        await server.start_server()
        try:
            async with QuoteClient(address_of(server), timeout=0.2) as client:
                with pytest.raises(RPCError, match="timed out"):
                    await client.fetch_quote("/")
        finally:
            await server.close()

    asyncio.run(runner())
