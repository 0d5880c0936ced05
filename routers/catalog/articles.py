"""
Catalog listing API endpoints for browsing and searching articles and authors with page-based pagination, free-text search, and filtering by status, author, or tag.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Query
from fastapi.concurrency import run_in_threadpool

from models.catalog.articles import Article, ArticleStatus, Author
from models.pagination import Page
from services.common.pagination import cap_query_limit, cap_query_page
from services.storage.catalog import CatalogStorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["catalog"])

storage_service = CatalogStorageService()


def _query_params(page: Optional[str], limit: Optional[str], sort_by: Optional[str], sort_order: Optional[str]) -> Dict[str, Any]:
    return cap_query_page(cap_query_limit({"page": page, "limit": limit, "sortBy": sort_by, "sortOrder": sort_order}))


@router.get("/articles", response_model=Page[Article])
async def list_articles(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    q: Optional[str] = Query(None, max_length=200),
    status_filter: Optional[ArticleStatus] = Query(None, alias="status"),
    author_id: Optional[str] = Query(None, alias="authorId"),
    tag: Optional[str] = Query(None, max_length=64),
):
    return await run_in_threadpool(
        storage_service.list_articles,
        query_params=_query_params(page, limit, sort_by, sort_order),
        search=q,
        status=status_filter.value if status_filter else None,
        author_id=author_id,
        tag=tag,
    )


@router.get("/authors", response_model=Page[Author])
async def list_authors(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    name: Optional[str] = Query(None, max_length=200),
    article_status: Optional[ArticleStatus] = Query(None, alias="articleStatus"),
):
    return await run_in_threadpool(
        storage_service.list_authors,
        query_params=_query_params(page, limit, sort_by, sort_order),
        name=name,
        article_status=article_status.value if article_status else None,
    )
