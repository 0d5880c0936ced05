"""
Paginated list retrieval over the SQLAlchemy ORM. `paginate` normalizes the query parameters, issues a find query for one page of primary entities (optionally joined with related entities) and a separate distinct count query over the same filters, and returns a uniform envelope with the page rows plus page, limit, totalPages and totalResults metadata. Counting distinct primary identifiers in its own query keeps the total correct when a to-many join yields several rows per primary entity, independently of whether the find query paginates before or after the join expansion.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from sqlalchemy import Select, distinct, func, select
from sqlalchemy.orm import Session, aliased, contains_eager, selectinload

from config import config as app_config
from services.common.filters import compile_filters, has_filters, resolve_column
from services.common.includes import Include, normalize_includes
from services.common.pagination import PaginationOptions, build_pagination_options

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar("T")

FIND_STAGE = "find"
COUNT_STAGE = "count"


class PaginationError(Exception):
    """A find or count query failed.

    The message is the original failure's message; the original exception is
    chained as ``__cause__`` and ``stage`` tells which query failed.
    """

    def __init__(self, message: str, stage: str) -> None:
        super().__init__(message)
        self.stage = stage


@dataclass
class FindOptions:
    order: List[Tuple[str, str]]
    offset: int
    limit: int
    distinct: bool = True
    sub_query: bool = True
    where: Any = None
    include: List[Any] = field(default_factory=list)


@dataclass
class CountOptions:
    where: Any = field(default_factory=dict)
    distinct: bool = True
    col: str = "id"
    include: List[Include] = field(default_factory=list)


@dataclass
class PaginationResult(Generic[T]):
    results: List[T]
    page: int
    limit: int
    total_pages: int
    total_results: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": self.results,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
            "totalResults": self.total_results,
        }


def count_pages(total_results: int, limit: int) -> int:
    return -(-total_results // limit)


def build_find_options(
    options: PaginationOptions,
    filters: Any = None,
    include: Optional[Sequence[Any]] = None,
    sub_query: bool = True,
) -> FindOptions:
    find_options = FindOptions(
        order=list(options.order),
        offset=options.offset,
        limit=options.limit,
        distinct=True,
        sub_query=sub_query,
    )
    if has_filters(filters):
        find_options.where = filters
    if include:
        find_options.include = list(include)
    return find_options


def build_count_options(filters: Any = None, include: Optional[Sequence[Any]] = None) -> CountOptions:
    return CountOptions(
        where=filters if filters is not None else {},
        distinct=True,
        col=app_config.COUNT_COLUMN,
        include=[descriptor.for_count() for descriptor in normalize_includes(include)],
    )


def _order_clauses(model, order: Sequence[Tuple[str, str]]) -> List[Any]:
    clauses = []
    for sort_by, sort_order in order:
        column = resolve_column(model, sort_by)
        direction = str(sort_order).strip().lower()
        if direction == "asc":
            clauses.append(column.asc())
        elif direction == "desc":
            clauses.append(column.desc())
        else:
            raise ValueError(f"Invalid sort order '{sort_order}'")
    return clauses


def _join_includes(stmt: Select, parent, includes: Sequence[Include], *, only_required: bool, eager: bool):
    """Join ``includes`` onto ``stmt`` through aliases of the related entities.

    With ``eager`` the joined rows also populate the relationships
    (``contains_eager``); the returned loader options must be applied to the
    statement by the caller.
    """
    loaders = []
    for descriptor in includes:
        required = descriptor.is_required
        if only_required and not required:
            continue

        relationship = getattr(parent, descriptor.association)
        target = aliased(descriptor.target(parent))
        path = relationship.of_type(target)
        criteria = compile_filters(target, descriptor.where)
        if criteria:
            path = path.and_(*criteria)
        stmt = stmt.join(path) if required else stmt.outerjoin(path)

        stmt, child_loaders = _join_includes(
            stmt, target, descriptor.include, only_required=only_required, eager=eager
        )
        if not (eager and descriptor.loads_columns):
            continue

        loader = contains_eager(relationship.of_type(target))
        if descriptor.attributes:
            loader = loader.load_only(*[resolve_column(target, name) for name in descriptor.attributes])
        if child_loaders:
            loader = loader.options(*child_loaders)
        loaders.append(loader)
    return stmt, loaders


def _select_loaders(parent, includes: Sequence[Include]) -> List[Any]:
    loaders = []
    for descriptor in includes:
        if not descriptor.loads_columns:
            continue

        relationship = getattr(parent, descriptor.association)
        target = descriptor.target(parent)
        criteria = compile_filters(target, descriptor.where)
        loader = selectinload(relationship.and_(*criteria) if criteria else relationship)
        if descriptor.attributes:
            loader = loader.load_only(*[resolve_column(target, name) for name in descriptor.attributes])
        children = _select_loaders(target, descriptor.include)
        if children:
            loader = loader.options(*children)
        loaders.append(loader)
    return loaders


def build_find_statement(model, options: FindOptions) -> Select:
    stmt = select(model)
    conditions = compile_filters(model, options.where)
    if conditions:
        stmt = stmt.where(*conditions)

    includes = normalize_includes(options.include)
    if options.sub_query:
        # Only filtering joins touch the paginated query; relations load separately.
        stmt, _ = _join_includes(stmt, model, includes, only_required=True, eager=False)
        loaders = _select_loaders(model, includes)
    else:
        stmt, loaders = _join_includes(stmt, model, includes, only_required=False, eager=True)
    if loaders:
        stmt = stmt.options(*loaders)

    if options.distinct:
        stmt = stmt.distinct()
    return stmt.order_by(*_order_clauses(model, options.order)).offset(options.offset).limit(options.limit)


def build_count_statement(model, options: CountOptions) -> Select:
    column = resolve_column(model, options.col)
    counted = func.count(distinct(column)) if options.distinct else func.count(column)
    stmt = select(counted).select_from(model)
    conditions = compile_filters(model, options.where)
    if conditions:
        stmt = stmt.where(*conditions)
    stmt, _ = _join_includes(stmt, model, options.include, only_required=True, eager=False)
    return stmt


@contextmanager
def _query_stage(stage: str, model) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        logger.warning("Pagination %s query failed for %s: %s", stage, getattr(model, "__name__", model), exc)
        raise PaginationError(str(exc), stage) from exc


def _prepare_find(model, query_params, filters, include, sub_query) -> Tuple[PaginationOptions, Select]:
    options = build_pagination_options(query_params)
    logger.debug(
        "Paginating %s page=%s limit=%s order=%s",
        getattr(model, "__name__", model),
        options.page,
        options.limit,
        options.order,
    )
    return options, build_find_statement(model, build_find_options(options, filters, include, sub_query))


def _result(options: PaginationOptions, rows: Sequence[T], count: Optional[int]) -> PaginationResult[T]:
    total_results = int(count or 0)
    return PaginationResult(
        results=list(rows),
        page=options.page,
        limit=options.limit,
        total_pages=count_pages(total_results, options.limit),
        total_results=total_results,
    )


def paginate(
    db: Session,
    model,
    query_params: Optional[Dict[str, Any]] = None,
    filters: Any = None,
    include: Optional[Sequence[Any]] = None,
    sub_query: bool = True,
) -> PaginationResult:
    with _query_stage(FIND_STAGE, model):
        options, find_stmt = _prepare_find(model, query_params, filters, include, sub_query)
        rows = db.scalars(find_stmt).unique().all()

    with _query_stage(COUNT_STAGE, model):
        count = db.scalar(build_count_statement(model, build_count_options(filters, include)))

    return _result(options, rows, count)


async def paginate_async(
    session: "AsyncSession",
    model,
    query_params: Optional[Dict[str, Any]] = None,
    filters: Any = None,
    include: Optional[Sequence[Any]] = None,
    sub_query: bool = True,
) -> PaginationResult:
    with _query_stage(FIND_STAGE, model):
        options, find_stmt = _prepare_find(model, query_params, filters, include, sub_query)
        rows = (await session.scalars(find_stmt)).unique().all()

    with _query_stage(COUNT_STAGE, model):
        count = await session.scalar(build_count_statement(model, build_count_options(filters, include)))

    return _result(options, rows, count)
