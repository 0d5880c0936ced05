"""
Pagination option helpers for list endpoints. This module turns loosely typed query parameters (raw query-string values, integers, or nothing at all) into normalized page, limit, offset and ordering options, degrading every invalid value to the configured default instead of failing. It also provides the caller-side helpers that cap a client-requested limit at the configured maximum and keep the derived offset within the database integer range before the parameters reach the paginator.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from config import config as app_config

DEFAULT_PAGE = 1
MAX_OFFSET = 2**63 - 1

_INT_PREFIX = re.compile(r"^\s*([+-]?[0-9]+)")


@dataclass
class PaginationOptions:
    order: List[Tuple[str, str]] = field(default_factory=list)
    offset: int = 0
    limit: int = 0
    page: int = DEFAULT_PAGE


def parse_with_default(raw: Any, default: int) -> int:
    """Coerce ``raw`` to a positive base-10 integer, or return ``default``.

    Strings parse their leading integer (``"12abc"`` -> 12, ``"3.9"`` -> 3),
    floats truncate toward zero. ``None``, booleans, unparseable values,
    zero and negative results all fall back to ``default``.
    """
    if raw is None or isinstance(raw, bool):
        return default

    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return default
        value = int(raw)
    elif isinstance(raw, str):
        match = _INT_PREFIX.match(raw)
        if not match:
            return default
        value = int(match.group(1))
    else:
        return default

    return value if value > 0 else default


def build_pagination_options(query_params: Optional[Mapping[str, Any]] = None) -> PaginationOptions:
    params = query_params or {}
    page = parse_with_default(params.get("page"), DEFAULT_PAGE)
    limit = parse_with_default(params.get("limit"), int(app_config.DEFAULT_PAGE_LIMIT))
    sort_by = params.get("sortBy") or app_config.DEFAULT_SORT_BY
    sort_order = params.get("sortOrder") or app_config.DEFAULT_SORT_ORDER

    return PaginationOptions(
        order=[(sort_by, sort_order)],
        offset=(page - 1) * limit,
        limit=limit,
        page=page,
    )


def cap_query_limit(query_params: Optional[Mapping[str, Any]], max_limit: Optional[int] = None) -> Dict[str, Any]:
    maximum = int(max_limit if max_limit is not None else app_config.MAX_QUERY_LIMIT)
    capped = dict(query_params or {})
    limit = parse_with_default(capped.get("limit"), 0)
    if limit > maximum:
        capped["limit"] = maximum
    return capped


def cap_query_page(query_params: Optional[Mapping[str, Any]], max_offset: int = MAX_OFFSET) -> Dict[str, Any]:
    """Clamp ``page`` so the derived offset fits a signed 64-bit integer."""
    capped = dict(query_params or {})
    page = parse_with_default(capped.get("page"), DEFAULT_PAGE)
    limit = parse_with_default(capped.get("limit"), int(app_config.DEFAULT_PAGE_LIMIT))
    max_page = max_offset // limit + 1
    if page > max_page:
        capped["page"] = max_page
    return capped
