"""
Configuration settings for todo-service.
Reads from environment variables (and ``.env`` at the repo root).
NEVER logs secret values.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url


_REPO_ROOT = Path(__file__).resolve().parents[1]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = Field(default="todo-service", validation_alias="APP_NAME")
    APP_VERSION: str = Field(default="1.0.0", validation_alias="APP_VERSION")
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Database
    DATABASE_URL: str = Field(
        default=f"sqlite:///{_REPO_ROOT / 'data' / 'todo.db'}",
        validation_alias="DATABASE_URL",
    )
    DB_POOL_SIZE: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    DB_MAX_OVERFLOW: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")
    DB_POOL_TIMEOUT: int = Field(default=30, validation_alias="DB_POOL_TIMEOUT")
    DB_ECHO: bool = Field(default=False, validation_alias="DB_ECHO")

    # Error behaviour
    STRICT_NOT_FOUND: bool = Field(default=False, validation_alias="STRICT_NOT_FOUND")
    EXPOSE_ERROR_DETAIL: bool = Field(default=False, validation_alias="EXPOSE_ERROR_DETAIL")

    # API Server
    CORS_ORIGINS: List[str] = Field(default=["*"], validation_alias="CORS_ORIGINS")
    SERVER_HOST: str = Field(default="0.0.0.0", validation_alias="SERVER_HOST")
    SERVER_PORT: int = Field(default=8000, validation_alias="SERVER_PORT")
    SERVER_RELOAD: bool = Field(default=False, validation_alias="SERVER_RELOAD")

    class Config:
        env_file = str(_REPO_ROOT / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    @property
    def safe_database_url(self) -> str:
        """DATABASE_URL with any password masked, for logging."""
        return make_url(self.DATABASE_URL).render_as_string(hide_password=True)


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
