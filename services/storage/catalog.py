# services/storage/catalog.py
"""
Storage service for listing catalog authors and articles.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from database import get_db_session
from db_models import Article as ArticleDB
from db_models import Author as AuthorDB
from models.catalog.articles import Article, Author
from models.pagination import Page
from services.common.filters import Op
from services.common.includes import Include
from services.paginator import PaginationResult, paginate
from services.storage.serializers import article_to_pydantic, author_to_pydantic

logger = logging.getLogger(__name__)


def _like(term: str) -> str:
    return f"%{term}%"


def _page(result: PaginationResult, items: List[Any]) -> Dict[str, Any]:
    payload = result.to_dict()
    payload["results"] = items
    return payload


class CatalogStorageService:
    def list_articles(
        self,
        query_params: Optional[Dict[str, Any]] = None,
        search: Optional[str] = None,
        status: Optional[str] = None,
        author_id: Optional[str] = None,
        tag: Optional[str] = None,
        sub_query: bool = True,
    ) -> Page[Article]:
        filters: Dict[str, Any] = {}
        if search:
            pattern = _like(search.strip())
            filters[Op.OR] = [
                {"title": {Op.ILIKE: pattern}},
                {"body": {Op.ILIKE: pattern}},
            ]
        if status:
            filters["status"] = status
        if author_id:
            filters["authorId"] = author_id

        include = [
            Include("author"),
            Include("tags", where={"name": tag} if tag else None),
            Include("comments", attributes=["id"]),
        ]

        with get_db_session() as db:
            result = paginate(db, ArticleDB, query_params, filters, include, sub_query=sub_query)
            items = [article_to_pydantic(row) for row in result.results]

        logger.debug("Listed %d of %d articles", len(items), result.total_results)
        return Page[Article].model_validate(_page(result, items))

    def list_authors(
        self,
        query_params: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
        article_status: Optional[str] = None,
    ) -> Page[Author]:
        filters: Dict[str, Any] = {}
        if name:
            filters["name"] = {Op.ILIKE: _like(name.strip())}

        include = [
            Include(
                "articles",
                where={"status": article_status} if article_status else None,
                attributes=["id"],
            )
        ]

        with get_db_session() as db:
            result = paginate(db, AuthorDB, query_params, filters, include)
            items = [author_to_pydantic(row) for row in result.results]

        return Page[Author].model_validate(_page(result, items))
