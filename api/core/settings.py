"""
Environment-driven settings.

Values are read on every call so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os

DEFAULT_PORT = 5000
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def require(name: str) -> str:
    value = os.environ.get(name, "").strip()
    if not value:
        raise RuntimeError(f"{name} is not set.")
    return value


def supabase_url() -> str:
    return require("SUPABASE_URL").rstrip("/")


def supabase_key() -> str:
    return require("SUPABASE_KEY")


def supabase_timeout_s() -> float:
    return env_float("SUPABASE_TIMEOUT_S", 10.0)


def cors_origins() -> list[str]:
    return env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)


def host() -> str:
    return env_str("HOST", "0.0.0.0")


def port() -> int:
    return env_int("PORT", DEFAULT_PORT)


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()
