from __future__ import annotations

from dataclasses import dataclass
import os


@dataclass(frozen=True)
class RuntimeSettings:
    host: str = "0.0.0.0"
    port: int = 8080
    database_url: str | None = None
    transactions_api_url: str | None = None
    internal_api_key: str | None = None
    transactions_api_timeout_seconds: int = 10
    log_level: str = "INFO"


def runtime_settings_from_env() -> RuntimeSettings:
    return RuntimeSettings(
        host=os.getenv("APP_HOST", "0.0.0.0"),
        port=_env_int("APP_PORT", 8080),
        database_url=_env_str("DATABASE_URL"),
        transactions_api_url=_env_str("TRANSACTIONS_API_URL"),
        internal_api_key=_env_str("INTERNAL_API_KEY"),
        transactions_api_timeout_seconds=_env_int("TRANSACTIONS_API_TIMEOUT_SECONDS", 10),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default

    try:
        parsed = int(value)
    except ValueError:
        return default

    return parsed if parsed > 0 else default
