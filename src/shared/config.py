"""Application settings, loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the storefront services."""

    environment: str = "development"
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "shopdb"
    jwt_secret: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 7
    cart_ttl_days: int = 30
    log_level: str | None = None
    log_dir: str | None = None
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    admin_email: str = "admin@shop.com"
    admin_password: str = "admin123"

    @property
    def is_production(self) -> bool:
        return self.environment in ("production", "staging")

    @classmethod
    def load(cls) -> Settings:
        return cls(
            environment=os.getenv("STOREFRONT_ENV", "development").lower(),
            mongo_uri=os.getenv("MONGO_URI", cls.mongo_uri),
            mongo_db_name=os.getenv("MONGO_DB_NAME", cls.mongo_db_name),
            jwt_secret=os.getenv("JWT_SECRET", cls.jwt_secret),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", cls.jwt_algorithm),
            jwt_expires_days=int(os.getenv("JWT_EXPIRES_DAYS", cls.jwt_expires_days)),
            cart_ttl_days=int(os.getenv("CART_TTL_DAYS", cls.cart_ttl_days)),
            log_level=os.getenv("LOG_LEVEL"),
            log_dir=os.getenv("LOG_DIR"),
            cors_origins=_env_list("CORS_ORIGINS", "*"),
            admin_email=os.getenv("ADMIN_EMAIL", cls.admin_email),
            admin_password=os.getenv("ADMIN_PASSWORD", cls.admin_password),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
