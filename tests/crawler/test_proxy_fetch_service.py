# tests/crawler/test_proxy_fetch_service.py
import asyncio
import json

import aiohttp
import pytest

from crawler.exceptions import AllStrategiesExhausted, StrategyFailure, UNREACHABLE_MESSAGE
from crawler.model import FetchSettings
from crawler.services.proxy_fetch_service import ProxyFetchService
from crawler.services.relay_strategies import (
    AllOriginsStrategy,
    CodeTabsStrategy,
    CorsProxyStrategy,
    build_strategies,
)

TARGET = "https://example.com/page?x=1"
PAGE = "<html><body><h1>Hello</h1></body></html>"


class FakeResponse:
    def __init__(self, status=200, body=""):
        self.status = status
        self._body = body

    async def text(self):
        return self._body


class _FakeRequestContext:
    def __init__(self, outcome):
        self.outcome = outcome

    async def __aenter__(self):
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Maps relay endpoint prefixes to a response or an exception to raise."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append(url)
        for prefix, outcome in self.routes.items():
            if url.startswith(prefix):
                return _FakeRequestContext(outcome)
        return _FakeRequestContext(aiohttp.ClientConnectionError("no route"))

    async def close(self):
        self.closed = True


ALLORIGINS = AllOriginsStrategy.endpoint
CODETABS = CodeTabsStrategy.endpoint
CORSPROXY = CorsProxyStrategy.endpoint


def run_fetch(session, url=TARGET):
    service = ProxyFetchService(FetchSettings(user_agent="test-agent"), session=session)
    result = asyncio.run(service.fetch_html(url))
    return service, result


def test_first_strategy_success_skips_the_rest():
    session = FakeSession({
        ALLORIGINS: FakeResponse(200, json.dumps({"contents": PAGE})),
        CODETABS: FakeResponse(200, "never"),
        CORSPROXY: FakeResponse(200, "never"),
    })
    service, html = run_fetch(session)

    assert html == PAGE
    assert len(session.calls) == 1
    assert [a.strategy for a in service.last_attempts] == ["allorigins"]
    assert service.last_attempts[0].ok


def test_falls_through_on_error_status_and_bad_envelope():
    session = FakeSession({
        ALLORIGINS: FakeResponse(200, "<html>not json</html>"),
        CODETABS: FakeResponse(503, "Service Unavailable"),
        CORSPROXY: FakeResponse(200, PAGE),
    })
    service, html = run_fetch(session)

    assert html == PAGE
    assert len(session.calls) == 3
    assert [a.ok for a in service.last_attempts] == [False, False, True]
    assert service.last_attempts[1].status == 503


def test_timeout_and_empty_body_count_as_failures():
    session = FakeSession({
        ALLORIGINS: asyncio.TimeoutError(),
        CODETABS: FakeResponse(200, "   \n"),
        CORSPROXY: FakeResponse(200, PAGE),
    })
    service, html = run_fetch(session)

    assert html == PAGE
    assert "timed out" in service.last_attempts[0].error
    assert service.last_attempts[1].error == "empty body"


def test_envelope_without_contents_is_a_failure():
    session = FakeSession({
        ALLORIGINS: FakeResponse(200, json.dumps({"contents": None, "status": {"http_code": 404}})),
        CODETABS: FakeResponse(200, PAGE),
    })
    service, html = run_fetch(session)
    assert html == PAGE
    assert service.last_attempts[0].error == "envelope has no contents"


def test_all_strategies_failing_raises_single_exhausted_error():
    session = FakeSession({
        ALLORIGINS: aiohttp.ClientConnectionError("refused"),
        CODETABS: FakeResponse(500, "boom"),
        CORSPROXY: FakeResponse(200, ""),
    })
    service = ProxyFetchService(FetchSettings(user_agent="test-agent"), session=session)

    with pytest.raises(AllStrategiesExhausted) as exc_info:
        asyncio.run(service.fetch_html(TARGET))

    assert type(exc_info.value) is AllStrategiesExhausted
    assert not isinstance(exc_info.value, StrategyFailure)
    assert str(exc_info.value) == UNREACHABLE_MESSAGE
    assert len(session.calls) == 3
    assert not any(a.ok for a in service.last_attempts)


def test_relay_urls_carry_encoded_target():
    session = FakeSession({})
    service = ProxyFetchService(FetchSettings(user_agent="test-agent"), session=session)
    with pytest.raises(AllStrategiesExhausted):
        asyncio.run(service.fetch_html(TARGET))

    encoded = "https%3A%2F%2Fexample.com%2Fpage%3Fx%3D1"
    assert session.calls == [
        f"https://api.allorigins.win/get?url={encoded}&disableCache=true",
        f"https://api.codetabs.com/v1/proxy?quest={encoded}",
        f"https://corsproxy.io/?{encoded}",
    ]


def test_injected_session_is_not_closed():
    session = FakeSession({CODETABS: FakeResponse(200, PAGE)})

    async def scenario():
        async with ProxyFetchService(FetchSettings(user_agent="x"), session=session) as fetcher:
            return await fetcher.fetch_html(TARGET)

    assert asyncio.run(scenario()) == PAGE
    assert session.closed is False


def test_strategy_order_follows_settings():
    settings = FetchSettings(strategies=["CorsProxy", "unknown-relay", "allorigins"], user_agent="x")
    service = ProxyFetchService(settings, session=FakeSession({}))
    assert [s.name for s in service.strategies] == ["corsproxy", "allorigins"]


def test_build_strategies_defaults():
    assert [s.name for s in build_strategies(FetchSettings().strategies)] == [
        "allorigins", "codetabs", "corsproxy"
    ]


def test_fetch_settings_rejects_non_positive_timeout():
    with pytest.raises(ValueError):
        FetchSettings(timeout=0)
