"""
Entrypoint for the pagekit catalog listing service.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config import config
from database import connection_test, ensure_database_exists, init_database, init_db
from middleware.error_handlers import (
    general_exception_handler,
    pagination_exception_handler,
    validation_exception_handler,
)
from routers.catalog import catalog_router
from services.paginator import PaginationError

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("pagekit")

ensure_database_exists(config.DATABASE_URL)
init_database(config.DATABASE_URL, config.LOG_LEVEL == "debug")
init_db()

app = FastAPI(
    title="pagekit",
    description="Paginated catalog listing service",
    version="1.0.0",
    docs_url="/docs" if config.ENABLE_API_DOCS else None,
    redoc_url="/redoc" if config.ENABLE_API_DOCS else None,
    openapi_url="/openapi.json" if config.ENABLE_API_DOCS else None,
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(PaginationError, pagination_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(catalog_router)


@app.get("/health")
async def health() -> dict:
    return {"status": "healthy", "service": "pagekit"}


@app.get("/ready")
async def ready():
    checks = {"database": connection_test()}
    ok = all(checks.values())
    payload = {"status": "ready" if ok else "not_ready", "checks": checks}
    if not ok:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=payload)
    return payload


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT, loop="uvloop", log_level=config.LOG_LEVEL)
