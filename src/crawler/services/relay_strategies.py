# src/crawler/services/relay_strategies.py
import json
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Type

import aiohttp

from crawler.exceptions import StrategyFailure
from crawler.utils.url_utils import UrlUtils

logger = logging.getLogger(__name__)


class RelayStrategy(ABC):
    """
    One third-party relay endpoint able to return a page's markup.

    Subclasses only decide how the relay URL is built and how the body is
    unwrapped from the response; the chain owns timeouts and fallthrough.
    """

    name: str = ""

    @abstractmethod
    def build_request_url(self, url: str) -> str:
        """Returns the relay URL that proxies `url`."""

    @abstractmethod
    async def extract(self, response: aiohttp.ClientResponse) -> str:
        """Pulls the page body out of a successful relay response."""

    def check_status(self, response: aiohttp.ClientResponse) -> None:
        if not 200 <= response.status < 300:
            raise StrategyFailure(self.name, f"status {response.status}", status=response.status)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class AllOriginsStrategy(RelayStrategy):
    """Wraps the target body in a JSON envelope under 'contents'."""

    name = "allorigins"
    endpoint = "https://api.allorigins.win/get"

    def build_request_url(self, url: str) -> str:
        return f"{self.endpoint}?url={UrlUtils.encode_component(url)}&disableCache=true"

    async def extract(self, response: aiohttp.ClientResponse) -> str:
        self.check_status(response)
        raw = await response.text()
        try:
            envelope = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            raise StrategyFailure(self.name, f"malformed envelope ({e})") from e

        contents = envelope.get("contents") if isinstance(envelope, dict) else None
        if not contents or not isinstance(contents, str):
            raise StrategyFailure(self.name, "envelope has no contents")
        return contents


class RawTextStrategy(RelayStrategy):
    """Relays that echo the target body directly."""

    async def extract(self, response: aiohttp.ClientResponse) -> str:
        self.check_status(response)
        return await response.text()


class CodeTabsStrategy(RawTextStrategy):
    name = "codetabs"
    endpoint = "https://api.codetabs.com/v1/proxy"

    def build_request_url(self, url: str) -> str:
        return f"{self.endpoint}?quest={UrlUtils.encode_component(url)}"


class CorsProxyStrategy(RawTextStrategy):
    name = "corsproxy"
    endpoint = "https://corsproxy.io/"

    def build_request_url(self, url: str) -> str:
        return f"{self.endpoint}?{UrlUtils.encode_component(url)}"


STRATEGY_REGISTRY: Dict[str, Type[RelayStrategy]] = {
    cls.name: cls for cls in (AllOriginsStrategy, CodeTabsStrategy, CorsProxyStrategy)
}


def build_strategies(names: List[str]) -> List[RelayStrategy]:
    """Instantiates strategies in the given order, skipping unknown names."""
    strategies = []
    for name in names:
        cls = STRATEGY_REGISTRY.get(name)
        if cls is None:
            logger.warning("Unknown relay strategy '%s' ignored.", name)
            continue
        strategies.append(cls())
    return strategies
