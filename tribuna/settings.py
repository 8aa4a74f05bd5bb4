"""Shared settings loaded from environment variables."""
from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_API_BIND_HOST = "0.0.0.0"
_DEFAULT_API_PORT = 8000
_DEFAULT_LOG_LEVEL = "INFO"
_TRUE_VALUES = {"1", "true", "yes", "on"}


def env_flag(name: str, default: bool) -> bool:
    """Interpret an environment variable as a boolean switch."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


@lru_cache(maxsize=None)
def get_api_port() -> int:
    """Port used to expose the highlighting API."""

    return int(os.getenv("TRIBUNA_API_PORT", os.getenv("PORT", _DEFAULT_API_PORT)))


@lru_cache(maxsize=None)
def get_api_bind_host() -> str:
    """Host uvicorn listens on."""

    return os.getenv("TRIBUNA_API_BIND_HOST", _DEFAULT_API_BIND_HOST)


@lru_cache(maxsize=None)
def get_log_level() -> str:
    return os.getenv("TRIBUNA_LOG_LEVEL", _DEFAULT_LOG_LEVEL)


__all__ = [
    "env_flag",
    "get_api_bind_host",
    "get_api_port",
    "get_log_level",
]
