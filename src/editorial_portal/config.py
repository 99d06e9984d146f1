"""Portal configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_bool(key: str, default: bool = False) -> bool:
    raw = _env(key)
    if not raw:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class BackendConfig:
    """Base URLs of the backend services the portal calls."""

    auth_url: str = field(default_factory=lambda: _env("PORTAL_AUTH_URL", "http://localhost:8081"))
    article_url: str = field(default_factory=lambda: _env("PORTAL_ARTICLE_URL", "http://localhost:8082"))
    timeout: float = field(default_factory=lambda: float(_env("PORTAL_HTTP_TIMEOUT", "10")))


@dataclass(frozen=True)
class SessionConfig:
    secret_key: str = field(default_factory=lambda: _env("PORTAL_SECRET_KEY"))
    cookie_name: str = field(default_factory=lambda: _env("PORTAL_SESSION_COOKIE", "portal_session"))
    require_expiry: bool = field(default_factory=lambda: _env_bool("PORTAL_REQUIRE_TOKEN_EXPIRY"))


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class Settings:
    """Top-level settings container."""

    backend: BackendConfig = field(default_factory=BackendConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    app: AppConfig = field(default_factory=AppConfig)


def load_settings() -> Settings:
    """Load settings from the environment, reading a local .env file first."""
    load_dotenv()
    return Settings()
