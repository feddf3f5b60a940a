# src/crawler/model.py (Fetch Layer)
import logging
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_STRATEGIES = ["allorigins", "codetabs", "corsproxy"]


class FetchSettings(BaseModel):
    timeout: float = Field(default=10.0, description="Per-strategy total timeout in seconds.")
    strategies: List[str] = Field(default_factory=lambda: list(DEFAULT_STRATEGIES))
    user_agent: Optional[str] = None

    @field_validator("timeout", mode="before")
    @classmethod
    def _positive_timeout(cls, v):
        v = float(v)
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("strategies", mode="before")
    @classmethod
    def _normalize_names(cls, v):
        if not v:
            return list(DEFAULT_STRATEGIES)
        return [str(name).strip().lower() for name in v if str(name).strip()]


class StrategyAttempt(BaseModel):
    """Diagnostic record of a single relay attempt."""
    strategy: str
    ok: bool
    error: Optional[str] = None
    status: Optional[int] = None
    elapsed: float = 0.0
