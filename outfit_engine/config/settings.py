"""Engine configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised engine settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    random_max_attempts: int = 200
    include_optional: bool = True
    query_debounce_seconds: float = 0.15

    def __post_init__(self) -> None:
        if self.random_max_attempts < 1:
            raise ValueError("OUTFIT_RANDOM_MAX_ATTEMPTS must be at least 1.")
        if self.query_debounce_seconds < 0:
            raise ValueError("OUTFIT_QUERY_DEBOUNCE_SECONDS cannot be negative.")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        random_max_attempts=int(os.getenv("OUTFIT_RANDOM_MAX_ATTEMPTS", "200")),
        include_optional=_env_bool("OUTFIT_INCLUDE_OPTIONAL", True),
        query_debounce_seconds=float(os.getenv("OUTFIT_QUERY_DEBOUNCE_SECONDS", "0.15")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
