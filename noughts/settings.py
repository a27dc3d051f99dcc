"""
application settings, read from the environment

main.py applies command-line flags on top.
  NOUGHTS_THINK_DELAY_MS  computer "thinking" delay in ms (default 1000)
  NOUGHTS_SEED            seed for the random fallback move (default unset)
  NOUGHTS_LOG_LEVEL       logging level name (default INFO)
"""
import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .errors import ConfigurationError
from .session import DEFAULT_THINK_DELAY_MS


@dataclass(frozen=True)
class Settings:
    think_delay_ms: int = DEFAULT_THINK_DELAY_MS
    seed: Optional[int] = None
    log_level: str = "INFO"

    def with_overrides(self, **changes):
        """
        copy with the non-None values in changes applied
        """
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _int_env(env: Mapping[str, str], key: str) -> Optional[int]:
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    delay = _int_env(env, "NOUGHTS_THINK_DELAY_MS")
    if delay is not None and delay < 0:
        raise ConfigurationError("NOUGHTS_THINK_DELAY_MS must not be negative")
    level = env.get("NOUGHTS_LOG_LEVEL", "").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"unknown log level {level!r}")
    return Settings().with_overrides(
        think_delay_ms=delay,
        seed=_int_env(env, "NOUGHTS_SEED"),
        log_level=level,
    )
