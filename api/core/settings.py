"""
Environment-backed settings.

Every value is read on call so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os

RANDOM_MODE_BERNOULLI = "bernoulli"
RANDOM_MODE_UNIFORM = "uniform"


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def db_pool_min_size() -> int:
    return max(0, _env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(1, db_pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 5))


def db_command_timeout_s() -> float:
    return _env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def random_quote_mode() -> str:
    mode = _env_str("RANDOM_QUOTE_MODE", RANDOM_MODE_BERNOULLI).lower()
    if mode not in (RANDOM_MODE_BERNOULLI, RANDOM_MODE_UNIFORM):
        return RANDOM_MODE_BERNOULLI
    return mode


def random_quote_probability() -> float:
    # Outside (0, 1] the predicate would never or always match.
    value = _env_float("RANDOM_QUOTE_PROBABILITY", 0.3)
    if not 0.0 < value <= 1.0:
        return 0.3
    return value


def cors_allow_origins() -> list[str]:
    raw = _env_str("CORS_ALLOW_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def api_host() -> str:
    return _env_str("API_HOST", "0.0.0.0")


def api_port() -> int:
    return _env_int("API_PORT", 8080)
