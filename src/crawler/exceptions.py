# src/crawler/exceptions.py
from typing import Optional

UNREACHABLE_MESSAGE = (
    "Unable to access this URL. The site may be blocking automated access or proxies. "
    "Please check the URL and try again."
)


class FetchFailure(Exception):
    """Base class for every network-level failure of the fetch layer."""


class StrategyFailure(FetchFailure):
    """
    A single relay strategy could not deliver a body.
    Raised inside the chain and recovered there; never reaches the caller.
    """

    def __init__(self, strategy: str, reason: str, status: Optional[int] = None):
        self.strategy = strategy
        self.reason = reason
        self.status = status
        super().__init__(f"{strategy}: {reason}")


class AllStrategiesExhausted(FetchFailure):
    """Every relay in the chain failed or returned an empty body."""

    def __init__(self, url: str, message: str = UNREACHABLE_MESSAGE):
        self.url = url
        self.message = message
        super().__init__(message)
