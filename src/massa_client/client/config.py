"""
Client configuration.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_PERIOD_OFFSET = 5


@dataclass
class ClientConfig:
    """Configuration for the Massa node clients."""

    provider_url: str
    timeout: float = 30.0
    retry_strategy_on: bool = True
    period_offset: int = DEFAULT_PERIOD_OFFSET
    max_retries: int = 3
    retry_delay: float = 1.0
    debug: bool = False
    user_agent: str = "massa-client-python/0.1.0"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ClientConfig":
        """
        Build a configuration from MASSA_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Field values that take precedence over the environment

        Raises:
            ValueError: If MASSA_PROVIDER_URL is missing and no provider_url override is given
        """
        env = os.environ if environ is None else environ
        values = {}

        if "MASSA_PROVIDER_URL" in env:
            values["provider_url"] = env["MASSA_PROVIDER_URL"]
        if "MASSA_RETRY_STRATEGY" in env:
            values["retry_strategy_on"] = env["MASSA_RETRY_STRATEGY"].strip().lower() in ("1", "true", "yes", "on")
        if "MASSA_PERIOD_OFFSET" in env:
            values["period_offset"] = int(env["MASSA_PERIOD_OFFSET"])
        if "MASSA_TIMEOUT" in env:
            values["timeout"] = float(env["MASSA_TIMEOUT"])

        values.update(overrides)
        if "provider_url" not in values:
            raise ValueError("MASSA_PROVIDER_URL is not set")
        return cls(**values)
