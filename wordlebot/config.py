"""
Runtime settings.

Values come from the environment (so secrets stay out of the repo) and can be
overridden by CLI flags in apps/. Defaults target the public daily puzzle and
the DeepSeek chat-completions endpoint.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

DEFAULT_ORACLE_URL = "https://wordle.votee.dev:8000/daily"
DEFAULT_SUGGESTION_URL = "https://api.deepseek.com/chat/completions"
DEFAULT_SUGGESTION_MODEL = "deepseek-chat"

DEFAULT_WORD_SIZE = 6
DEFAULT_MAX_ATTEMPTS = 100


@dataclass(frozen=True)
class Settings:
    oracle_url: str = DEFAULT_ORACLE_URL
    suggestion_url: str = DEFAULT_SUGGESTION_URL
    suggestion_model: str = DEFAULT_SUGGESTION_MODEL
    api_key: Optional[str] = None      # DEEPSEEK_API_KEY; None -> suggestions always fail over
    word_size: int = DEFAULT_WORD_SIZE
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    request_timeout: float = 10.0      # seconds, per HTTP call
    batch_workers: int = 8             # thread pool size for the batch probe

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            oracle_url=env.get("WORDLE_API_URL", DEFAULT_ORACLE_URL),
            suggestion_url=env.get("SUGGESTION_API_URL", DEFAULT_SUGGESTION_URL),
            suggestion_model=env.get("SUGGESTION_MODEL", DEFAULT_SUGGESTION_MODEL),
            api_key=env.get("DEEPSEEK_API_KEY") or None,
            word_size=_int(env, "WORD_SIZE", DEFAULT_WORD_SIZE),
            max_attempts=_int(env, "MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
            request_timeout=_float(env, "REQUEST_TIMEOUT", 10.0),
            batch_workers=_int(env, "BATCH_WORKERS", 8),
        )

    def override(self, **changes) -> "Settings":
        """Copy with the non-None entries of `changes` applied (for CLI flags)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer; got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{key} must be positive; got {value}")
    return value


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be a number; got {raw!r}") from e


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Console logging for the apps; library modules only create loggers."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
