"""
Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT in sys.path:
    sys.path.remove(ROOT)
sys.path.insert(0, ROOT)

from tests._env import ensure_test_env

ensure_test_env()


@pytest.fixture
def clean_db():
    from database import get_engine
    from db_models import Base

    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine


@pytest.fixture
def catalog(clean_db):
    """Seed 23 articles (createdAt one hour apart) across two authors and two tags.

    articles 00-14 published, 15-22 draft; 00-11 by Ada, 12-22 by Alan;
    python tag on 00-06, sql tag on 04-08; 00-02 carry two comments each
    (Grace and Alan).
    """
    from datetime import datetime, timedelta

    from database import get_db_session
    from db_models import Article, Author, Comment, Tag

    base = datetime(2025, 1, 1)
    with get_db_session() as db:
        ada = Author(id="author-ada", name="Ada Lovelace", email="ada@example.com", created_at=base)
        alan = Author(id="author-alan", name="Alan Turing", email="alan@example.com", created_at=base + timedelta(days=1))
        grace = Author(id="author-grace", name="Grace Hopper", created_at=base + timedelta(days=2))
        python = Tag(id="tag-python", name="python", created_at=base)
        sql = Tag(id="tag-sql", name="sql", created_at=base)
        db.add_all([ada, alan, grace, python, sql])

        for i in range(23):
            created = base + timedelta(hours=i)
            article = Article(
                id=f"article-{i:02d}",
                title=f"Article {i:02d}",
                body="Notes on databases" if i % 2 == 0 else "Notes on compilers",
                status="published" if i < 15 else "draft",
                author=ada if i < 12 else alan,
                created_at=created,
                updated_at=created,
            )
            if i < 7:
                article.tags.append(python)
            if 4 <= i < 9:
                article.tags.append(sql)
            if i < 3:
                article.comments.append(Comment(body="first", author=grace, created_at=created))
                article.comments.append(Comment(body="second", author=alan, created_at=created))
            db.add(article)
    yield
