"""
SQLAlchemy models for the catalog served by the list endpoints, defining the schema for authors, articles, tags, and comments. The relationships cover the join shapes list queries have to paginate over: many-to-one (article author), one-to-many (article comments), and many-to-many (article tags).

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Table, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


_FK_AUTHORS  = "authors.id"
_FK_ARTICLES = "articles.id"
_CASCADE     = "all, delete-orphan"


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", String, ForeignKey(_FK_ARTICLES, ondelete="CASCADE"), primary_key=True),
    Column("tag_id",     String, ForeignKey("tags.id",    ondelete="CASCADE"), primary_key=True),
    Index("idx_article_tags_article", "article_id"),
    Index("idx_article_tags_tag",     "tag_id"),
)


class Author(Base):
    __tablename__ = "authors"

    id:         Mapped[str]           = mapped_column(String,      primary_key=True, default=_uuid)
    name:       Mapped[str]           = mapped_column(String(200), nullable=False, index=True)
    email:      Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    created_at: Mapped[datetime]      = mapped_column(DateTime,    default=_now, nullable=False)

    articles: Mapped[List["Article"]] = relationship("Article", back_populates="author", cascade=_CASCADE)
    comments: Mapped[List["Comment"]] = relationship("Comment", back_populates="author")


class Tag(Base):
    __tablename__ = "tags"

    id:         Mapped[str]      = mapped_column(String,     primary_key=True, default=_uuid)
    name:       Mapped[str]      = mapped_column(String(64), unique=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime,   default=_now, nullable=False)

    articles: Mapped[List["Article"]] = relationship("Article", secondary=article_tags, back_populates="tags")


class Article(Base):
    __tablename__ = "articles"

    id:         Mapped[str]           = mapped_column(String,      primary_key=True, default=_uuid)
    author_id:  Mapped[Optional[str]] = mapped_column(String,      ForeignKey(_FK_AUTHORS, ondelete="SET NULL"), index=True)
    title:      Mapped[str]           = mapped_column(String(300), nullable=False, index=True)
    body:       Mapped[Optional[str]] = mapped_column(Text)
    status:     Mapped[str]           = mapped_column(String(20),  nullable=False, default="draft", index=True)
    created_at: Mapped[datetime]      = mapped_column(DateTime,    default=_now, nullable=False)
    updated_at: Mapped[datetime]      = mapped_column(DateTime,    default=_now, onupdate=_now, nullable=False)

    author:   Mapped[Optional["Author"]] = relationship("Author",  back_populates="articles")
    tags:     Mapped[List["Tag"]]        = relationship("Tag",     secondary=article_tags, back_populates="articles")
    comments: Mapped[List["Comment"]]    = relationship("Comment", back_populates="article", cascade=_CASCADE)

    __table_args__ = (
        Index("idx_articles_status_created", "status", "created_at"),
    )


class Comment(Base):
    __tablename__ = "comments"

    id:         Mapped[str]           = mapped_column(String,   primary_key=True, default=_uuid)
    article_id: Mapped[str]           = mapped_column(String,   ForeignKey(_FK_ARTICLES, ondelete="CASCADE"), nullable=False, index=True)
    author_id:  Mapped[Optional[str]] = mapped_column(String,   ForeignKey(_FK_AUTHORS,  ondelete="SET NULL"), index=True)
    body:       Mapped[str]           = mapped_column(Text,     nullable=False)
    created_at: Mapped[datetime]      = mapped_column(DateTime, default=_now, nullable=False)

    article: Mapped["Article"]          = relationship("Article", back_populates="comments")
    author:  Mapped[Optional["Author"]] = relationship("Author",  back_populates="comments")
