"""
Serializers for the storage service, converting catalog ORM rows loaded by the paginator into the Pydantic models returned by the API layer. Relationships that a list query did not load are reported as empty rather than triggering a lazy load outside the session.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
from typing import Any, List

from sqlalchemy import inspect

from models.catalog.articles import Article as ArticlePydantic
from models.catalog.articles import Author as AuthorPydantic
from models.catalog.articles import AuthorSummary

logger = logging.getLogger(__name__)


def _loaded(obj, name: str, default: Any = None) -> Any:
    if name in inspect(obj).unloaded:
        return default
    return getattr(obj, name)


def article_to_pydantic(a) -> ArticlePydantic:
    author = _loaded(a, "author")
    tags: List[Any] = _loaded(a, "tags", [])
    comments: List[Any] = _loaded(a, "comments", [])
    payload = {
        "id": a.id,
        "title": a.title,
        "body": a.body,
        "status": a.status,
        "author": AuthorSummary(id=author.id, name=author.name) if author else None,
        "tags": sorted(t.name for t in tags),
        "commentCount": len(comments),
        "createdAt": a.created_at,
        "updatedAt": a.updated_at,
    }
    return ArticlePydantic.model_validate(payload)


def author_to_pydantic(au) -> AuthorPydantic:
    articles: List[Any] = _loaded(au, "articles", [])
    payload = {
        "id": au.id,
        "name": au.name,
        "email": au.email,
        "articleCount": len(articles),
        "createdAt": au.created_at,
    }
    return AuthorPydantic.model_validate(payload)
