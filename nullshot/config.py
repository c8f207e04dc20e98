"""
Runtime configuration for the move chooser.

Defaults come from constants.py. A deployment overrides them through
environment variables read by EngineConfig.from_env(); tests build an
EngineConfig directly.
"""

import os
from dataclasses import dataclass

from nullshot.constants import (
    CACHE_SIZE,
    CANDIDATE_LIMIT,
    ORACLE_MODEL,
    ORACLE_TIMEOUT_MS,
    ORACLE_URL,
)

# Checked in order; the first non-empty value is the oracle credential.
_API_KEY_VARS = ("NULLSHOT_ORACLE_API_KEY", "AI_PROVIDER_API_KEY", "ANTHROPIC_API_KEY")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class EngineConfig:
    """
    Tunables for one MoveChooser.

    Attributes:
        cache_size:        Maximum number of cached answers.
        candidate_limit:   Leading ordered moves always searched at the root,
                           in addition to every capture and check.
        oracle_timeout_ms: Hard timeout for one oracle request.
        randomize:         Add difficulty-scaled noise to root scores. Off
                           makes move choice deterministic.
        seed:              Seed for the chooser's random source, or None.
        oracle_api_key:    Oracle credential. The oracle is only consulted
                           when this is set.
        oracle_url:        Messages endpoint of the oracle.
        oracle_model:      Model name sent to the oracle.
    """

    cache_size: int = CACHE_SIZE
    candidate_limit: int = CANDIDATE_LIMIT
    oracle_timeout_ms: int = ORACLE_TIMEOUT_MS
    randomize: bool = True
    seed: int | None = None
    oracle_api_key: str | None = None
    oracle_url: str = ORACLE_URL
    oracle_model: str = ORACLE_MODEL

    def __post_init__(self) -> None:
        if self.cache_size < 1:
            raise ValueError(f"cache_size must be positive, got {self.cache_size}")
        if self.candidate_limit < 1:
            raise ValueError(f"candidate_limit must be positive, got {self.candidate_limit}")
        if self.oracle_timeout_ms < 1:
            raise ValueError(f"oracle_timeout_ms must be positive, got {self.oracle_timeout_ms}")

    @property
    def oracle_configured(self) -> bool:
        return bool(self.oracle_api_key)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """
        Build a config from NULLSHOT_* environment variables.

        Recognised variables:
            NULLSHOT_CACHE_SIZE, NULLSHOT_CANDIDATE_LIMIT,
            NULLSHOT_ORACLE_TIMEOUT_MS, NULLSHOT_RANDOMIZE, NULLSHOT_SEED,
            NULLSHOT_ORACLE_URL, NULLSHOT_ORACLE_MODEL, and the API key from
            NULLSHOT_ORACLE_API_KEY, AI_PROVIDER_API_KEY or ANTHROPIC_API_KEY.

        Raises:
            ValueError: A numeric variable is not an integer.
        """
        api_key = next((os.getenv(var) for var in _API_KEY_VARS if os.getenv(var)), None)
        seed_raw = os.getenv("NULLSHOT_SEED")
        return cls(
            cache_size=_env_int("NULLSHOT_CACHE_SIZE", CACHE_SIZE),
            candidate_limit=_env_int("NULLSHOT_CANDIDATE_LIMIT", CANDIDATE_LIMIT),
            oracle_timeout_ms=_env_int("NULLSHOT_ORACLE_TIMEOUT_MS", ORACLE_TIMEOUT_MS),
            randomize=_env_bool("NULLSHOT_RANDOMIZE", True),
            seed=int(seed_raw) if seed_raw else None,
            oracle_api_key=api_key,
            oracle_url=os.getenv("NULLSHOT_ORACLE_URL") or ORACLE_URL,
            oracle_model=os.getenv("NULLSHOT_ORACLE_MODEL") or ORACLE_MODEL,
        )
