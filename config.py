"""
Configuration management for the review sentiment service
"""

import os
from typing import Dict, List, Optional, Callable, Any
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

SENTIMENT_MODES = ("neutral_aware", "simple")


@dataclass
class Config:
    # Environment
    APP_ENV: str
    PORT: int
    LOG_LEVEL: str

    # Classifier
    SENTIMENT_MODE: str
    MIN_REVIEW_LENGTH: int

    # Network safety
    ALLOWED_ORIGINS: List[str]

    # Request observability
    REQUEST_ID_HEADER: str


ConfigListener = Callable[["Config", Dict[str, Any]], None]

_CONFIG_INSTANCE: Optional[Config] = None
_CONFIG_LISTENERS: List[ConfigListener] = []


def _parse_mode(raw: Optional[str]) -> str:
    mode = (raw or "").strip().lower()
    if mode not in SENTIMENT_MODES:
        return "neutral_aware"
    return mode


def _parse_int(var: str, default: int) -> int:
    try:
        return int(os.getenv(var, default))
    except ValueError:
        return default


def _build_config() -> Config:
    """Create a new ``Config`` instance from environment variables."""

    return Config(
        # Environment
        APP_ENV=os.getenv("APP_ENV", "prod"),
        PORT=_parse_int("PORT", 8000),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),

        # Classifier
        SENTIMENT_MODE=_parse_mode(os.getenv("SENTIMENT_MODE")),
        MIN_REVIEW_LENGTH=_parse_int("MIN_REVIEW_LENGTH", 10),

        # Network safety
        ALLOWED_ORIGINS=[origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()],

        # Request observability
        REQUEST_ID_HEADER=os.getenv("REQUEST_ID_HEADER", "X-Request-ID"),
    )


def _notify_listeners(changes: Dict[str, Any]) -> None:
    """Notify registered listeners of configuration changes."""

    if not changes:
        return

    cfg = get_config()
    for listener in list(_CONFIG_LISTENERS):
        try:
            listener(cfg, changes)
        except Exception:
            # Listeners should not break config updates; ignore failures.
            continue


def get_config() -> Config:
    """Return the shared configuration object."""

    global _CONFIG_INSTANCE
    if _CONFIG_INSTANCE is None:
        _CONFIG_INSTANCE = _build_config()
    return _CONFIG_INSTANCE


def update_config(**updates: Any) -> Config:
    """Mutate the shared config in place and notify listeners."""

    cfg = get_config()
    applied: Dict[str, Any] = {}

    for key, value in updates.items():
        if not hasattr(cfg, key):
            raise AttributeError(f"Config has no attribute '{key}'")
        if key == "SENTIMENT_MODE" and value not in SENTIMENT_MODES:
            raise ValueError(f"Unknown sentiment mode '{value}'")
        current = getattr(cfg, key)
        if current == value:
            continue
        setattr(cfg, key, value)
        applied[key] = value

    if applied:
        _notify_listeners(applied)
    return cfg


def subscribe_to_updates(listener: ConfigListener) -> Callable[[], None]:
    """Register a callback invoked when the configuration changes."""

    if listener not in _CONFIG_LISTENERS:
        _CONFIG_LISTENERS.append(listener)

    def _unsubscribe() -> None:
        try:
            _CONFIG_LISTENERS.remove(listener)
        except ValueError:
            pass

    return _unsubscribe


def reset_config() -> Config:
    """Reload configuration from the environment and notify listeners."""

    global _CONFIG_INSTANCE
    _CONFIG_INSTANCE = _build_config()
    _notify_listeners({"__reset__": True})
    return _CONFIG_INSTANCE
