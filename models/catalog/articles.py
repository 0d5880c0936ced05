"""
Module defines Pydantic models for catalog data structures used in the API layer.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ArticleStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class AuthorSummary(BaseModel):
    id: str
    name: str


class Author(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    article_count: int = Field(0, alias="articleCount")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class Article(BaseModel):
    id: str
    title: str
    body: Optional[str] = None
    status: ArticleStatus
    author: Optional[AuthorSummary] = None
    tags: List[str] = Field(default_factory=list)
    comment_count: int = Field(0, alias="commentCount")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)
