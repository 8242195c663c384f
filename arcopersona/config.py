"""
Application configuration via pydantic-settings.
All config read from ARCO_-prefixed environment variables with defaults for local dev.
"""

import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "arcopersona"
    app_version: str = "1.0.0"
    log_level: str = Field(default="INFO", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Database (server-side persona records and quiz history)
    database_url: str = "sqlite:///arcopersona.db"

    # Persona cookies
    canonical_cookie_name: str = "arco_persona"
    legacy_cookie_name: str = "arco-brew-style"
    canonical_retention_days: int = Field(default=90, gt=0)
    legacy_retention_days: int = Field(default=30, gt=0)
    cookie_path: str = "/"
    cookie_samesite: str = Field(default="lax", pattern=r"^(lax|strict|none)$")

    # Homepage assembly
    homepage_product_limit: int = Field(default=3, ge=0)
    homepage_article_limit: int = Field(default=3, ge=0)

    model_config = {"env_prefix": "ARCO_", "env_file": ".env", "extra": "ignore"}


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
