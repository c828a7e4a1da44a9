# src/config.py
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_LANGUAGES = "go"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Startup configuration is unusable."""


@dataclass(frozen=True)
class Config:
    github_token: Optional[str] = None
    stars: int = 1
    languages: tuple[str, ...] = (DEFAULT_LANGUAGES,)
    port: int = 8000
    github_timeout: float = 10.0
    refresh_interval: float = 300.0
    log_level: str = "INFO"


def _int_env(name: str, default: int, minimum: int, maximum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value < minimum or (maximum is not None and value > maximum):
        raise ConfigError(f"{name} out of range: {value}")
    return value


def _seconds_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _log_level_env(name: str, default: str) -> str:
    level = os.getenv(name, default).strip().upper() or default
    if level not in LOG_LEVELS:
        raise ConfigError(f"{name} is not a logging level: {level!r}")
    return level


def parse_languages(raw: str) -> tuple[str, ...]:
    languages = []
    for part in raw.split(","):
        language = part.strip().lower()
        if language and language not in languages:
            languages.append(language)
    if not languages:
        raise ConfigError("GITHUB_LANGUAGES names no language")
    return tuple(languages)


def load_config() -> Config:
    """Read configuration from the environment (and .env, if present)."""
    load_dotenv()

    return Config(
        github_token=os.getenv("GITHUB_TOKEN") or None,
        stars=_int_env("GITHUB_STARS", 1, minimum=0),
        languages=parse_languages(os.getenv("GITHUB_LANGUAGES", DEFAULT_LANGUAGES)),
        port=_int_env("PORT", 8000, minimum=1, maximum=65535),
        github_timeout=_seconds_env("GITHUB_TIMEOUT", 10.0),
        refresh_interval=_seconds_env("REFRESH_INTERVAL", 300.0),
        log_level=_log_level_env("LOG_LEVEL", "INFO"),
    )
