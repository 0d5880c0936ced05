"""
Configuration management for the application, loading settings from environment variables with support for defaults, type conversion, and validation. This module defines a `Config` class that encapsulates the server settings, the database connection and pool tuning, and the pagination defaults applied by list endpoints when a client omits page, limit, or sort parameters.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

_SORT_ORDERS = frozenset({"asc", "desc"})


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _env_name() -> str:
    return (os.getenv("APP_ENV") or os.getenv("ENVIRONMENT") or "development").strip().lower()


def _is_production_env() -> bool:
    return _env_name() in {"prod", "production"}


class Config:
    DEV_DATABASE_URL = "sqlite:///./pagekit.db"

    def __init__(self) -> None:
        self.APP_ENV: str = _env_name()
        self.IS_PRODUCTION: bool = _is_production_env()

        # Server configuration
        self.HOST: str = os.getenv("HOST", "127.0.0.1")
        self.PORT: int = int(os.getenv("PORT", "4320"))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info")
        self.ENABLE_API_DOCS: bool = _to_bool(os.getenv("ENABLE_API_DOCS"), default=not self.IS_PRODUCTION)

        # Database
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", self.DEV_DATABASE_URL)
        self.DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
        self.DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "20"))
        self.DB_POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", "30"))
        self.DB_POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "1800"))

        # Pagination defaults for list endpoints (can be overridden by client)
        self.DEFAULT_PAGE_LIMIT: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))
        self.MAX_QUERY_LIMIT: int = int(os.getenv("MAX_QUERY_LIMIT", "1000"))
        self.DEFAULT_SORT_BY: str = os.getenv("DEFAULT_SORT_BY", "createdAt")
        self.DEFAULT_SORT_ORDER: str = os.getenv("DEFAULT_SORT_ORDER", "desc").strip().lower()
        # Column counted (distinct) for totalResults
        self.COUNT_COLUMN: str = os.getenv("COUNT_COLUMN", "id")

        self.validate()

    def validate(self) -> None:
        if self.IS_PRODUCTION and self.DATABASE_URL == self.DEV_DATABASE_URL:
            raise ValueError("DATABASE_URL must be configured in production")

        if self.MAX_QUERY_LIMIT <= 0:
            raise ValueError("MAX_QUERY_LIMIT must be greater than 0")
        if self.DEFAULT_PAGE_LIMIT <= 0:
            raise ValueError("DEFAULT_PAGE_LIMIT must be greater than 0")
        if self.DEFAULT_PAGE_LIMIT > self.MAX_QUERY_LIMIT:
            raise ValueError("DEFAULT_PAGE_LIMIT cannot exceed MAX_QUERY_LIMIT")

        if self.DEFAULT_SORT_ORDER not in _SORT_ORDERS:
            raise ValueError(
                f"Unsupported DEFAULT_SORT_ORDER '{self.DEFAULT_SORT_ORDER}'. Allowed values: {sorted(_SORT_ORDERS)}"
            )
        if not self.DEFAULT_SORT_BY.strip():
            raise ValueError("DEFAULT_SORT_BY cannot be empty")
        if not self.COUNT_COLUMN.strip():
            raise ValueError("COUNT_COLUMN cannot be empty")

        if self.DATABASE_URL.startswith("sqlite") and self.IS_PRODUCTION:
            logger.warning("SQLite DATABASE_URL configured for a production environment.")


config = Config()
