# File: tests/test_fetcher.py
import asyncio

import pytest
from aiohttp import web

from site_harvest.crawler.fetcher import ACCEPT_HEADER, Fetcher, TransportError, build_session


@pytest.fixture()
def echo_app() -> web.Application:
    app = web.Application()

    async def headers(request):
        return web.json_response(
            {"ua": request.headers.get("User-Agent"), "accept": request.headers.get("Accept")}
        )

    async def html(_):
        return web.Response(text="<h1>Привет</h1>", content_type="text/html", charset="utf-8")

    async def no_content(_):
        return web.Response(status=204)

    async def error(_):
        return web.Response(status=500, text="boom")

    async def slow(_):
        await asyncio.sleep(1)
        return web.Response(text="late")

    app.router.add_get("/headers", headers)
    app.router.add_get("/html", html)
    app.router.add_get("/empty", no_content)
    app.router.add_get("/error", error)
    app.router.add_get("/slow", slow)
    return app


@pytest.mark.asyncio()
async def test_fetch_returns_text(serve_app, echo_app, make_config):
    base = await serve_app(echo_app)
    async with build_session(make_config(base)) as session:
        text = await Fetcher(session).fetch(f"{base}/html")
    assert text == "<h1>Привет</h1>"


@pytest.mark.asyncio()
async def test_fetch_sends_user_agent_and_accept(serve_app, echo_app, make_config):
    base = await serve_app(echo_app)
    config = make_config(base, user_agent="CustomBot/2.0")
    async with build_session(config) as session:
        text = await Fetcher(session).fetch(f"{base}/headers")
    assert '"ua": "CustomBot/2.0"' in text
    assert ACCEPT_HEADER in text


@pytest.mark.asyncio()
async def test_any_2xx_is_success(serve_app, echo_app, make_config):
    base = await serve_app(echo_app)
    async with build_session(make_config(base)) as session:
        assert await Fetcher(session).fetch(f"{base}/empty") == ""


@pytest.mark.asyncio()
@pytest.mark.parametrize("path,status", [("/error", 500), ("/nowhere", 404)])
async def test_non_2xx_raises_transport_error(serve_app, echo_app, make_config, path, status):
    base = await serve_app(echo_app)
    async with build_session(make_config(base)) as session:
        with pytest.raises(TransportError) as info:
            await Fetcher(session).fetch(f"{base}{path}")
    assert info.value.status == status
    assert info.value.url == f"{base}{path}"
    assert str(status) in str(info.value)


@pytest.mark.asyncio()
async def test_timeout_raises_transport_error(serve_app, echo_app, make_config):
    base = await serve_app(echo_app)
    async with build_session(make_config(base, timeout_ms=200)) as session:
        with pytest.raises(TransportError) as info:
            await Fetcher(session).fetch(f"{base}/slow")
    assert info.value.status is None


@pytest.mark.asyncio()
async def test_connection_refused_raises_transport_error(unused_tcp_port, make_config):
    base = f"http://127.0.0.1:{unused_tcp_port}"
    async with build_session(make_config(base)) as session:
        with pytest.raises(TransportError):
            await Fetcher(session).fetch(f"{base}/")
