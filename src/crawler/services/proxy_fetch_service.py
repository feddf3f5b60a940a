# src/crawler/services/proxy_fetch_service.py
import asyncio
import logging
import time
from typing import List, Optional

import aiohttp

from crawler.exceptions import AllStrategiesExhausted, StrategyFailure
from crawler.model import FetchSettings, StrategyAttempt
from crawler.services.generate_default_user_agent_service import generate_default_user_agent
from crawler.services.relay_strategies import RelayStrategy, build_strategies

logger = logging.getLogger(__name__)


class ProxyFetchService:
    """
    Retrieves raw page markup through an ordered chain of relay strategies.

    Strategies run strictly one after another, each under its own total
    timeout. The first non-empty body wins; individual failures are logged and
    only chain exhaustion is raised to the caller.
    """

    def __init__(
            self,
            settings: Optional[FetchSettings] = None,
            strategies: Optional[List[RelayStrategy]] = None,
            session: Optional[aiohttp.ClientSession] = None
    ):
        self.settings = settings or FetchSettings()
        self.strategies = strategies if strategies is not None else build_strategies(self.settings.strategies)
        self.user_agent = self.settings.user_agent or generate_default_user_agent()

        self.session = session
        self._owns_session = session is None
        self.last_attempts: List[StrategyAttempt] = []

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def initialize(self):
        if self._owns_session and (not self.session or self.session.closed):
            self.session = aiohttp.ClientSession(headers={'User-Agent': self.user_agent})
            logger.debug("ProxyFetchService: Session initialized.")

    async def close(self):
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
            logger.debug("ProxyFetchService: Session closed.")

    async def fetch_html(self, url: str) -> str:
        """
        Walks the strategy chain for `url`.

        Returns:
            str: The first non-empty body any relay produced.

        Raises:
            AllStrategiesExhausted: When every strategy failed or returned nothing.
        """
        await self.initialize()
        attempts: List[StrategyAttempt] = []

        try:
            for strategy in self.strategies:
                start_time = time.perf_counter()
                try:
                    body = await self._attempt(strategy, url)
                except StrategyFailure as e:
                    attempts.append(self._failed(strategy, e.reason, start_time, status=e.status))
                    continue
                except asyncio.TimeoutError:
                    attempts.append(self._failed(strategy, f"timed out after {self.settings.timeout}s", start_time))
                    continue
                except (aiohttp.ClientError, UnicodeDecodeError) as e:
                    attempts.append(self._failed(strategy, f"{type(e).__name__}: {e}", start_time))
                    continue

                if not body or not body.strip():
                    attempts.append(self._failed(strategy, "empty body", start_time))
                    continue

                elapsed = round(time.perf_counter() - start_time, 4)
                attempts.append(StrategyAttempt(strategy=strategy.name, ok=True, elapsed=elapsed))
                logger.info("Fetched %s via %s (%d chars, %.2fs)", url, strategy.name, len(body), elapsed)
                return body
        finally:
            self.last_attempts = attempts

        logger.error("All %d relay strategies failed for %s", len(self.strategies), url)
        raise AllStrategiesExhausted(url)

    async def _attempt(self, strategy: RelayStrategy, url: str) -> str:
        relay_url = strategy.build_request_url(url)
        timeout = aiohttp.ClientTimeout(total=self.settings.timeout)
        logger.debug("Trying %s -> %s", strategy.name, relay_url)

        # Leaving the context releases the connection, also on timeout.
        async with self.session.get(relay_url, timeout=timeout) as response:
            return await strategy.extract(response)

    @staticmethod
    def _failed(
            strategy: RelayStrategy, reason: str, start_time: float, status: Optional[int] = None
    ) -> StrategyAttempt:
        logger.warning("Proxy strategy '%s' failed, trying next: %s", strategy.name, reason)
        return StrategyAttempt(
            strategy=strategy.name,
            ok=False,
            error=reason,
            status=status,
            elapsed=round(time.perf_counter() - start_time, 4)
        )
