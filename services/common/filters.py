"""
Filter translation for list queries. Callers describe which rows they want with a plain mapping (column equality, set membership, pattern match, comparison operators, and `$and` / `$or` / `$not` disjunction trees) or hand over ready-made SQLAlchemy clauses; this module resolves column names against a mapped entity or alias and produces the boolean clauses the statement builders attach to a query.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import re
from typing import Any, Callable, Dict, List, Mapping, Sequence

from sqlalchemy import and_, inspect, not_, or_, true
from sqlalchemy.sql.elements import ColumnElement

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class Op:
    AND = "$and"
    OR = "$or"
    NOT = "$not"

    EQ = "$eq"
    NE = "$ne"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"
    LIKE = "$like"
    NOT_LIKE = "$notLike"
    ILIKE = "$iLike"
    IN = "$in"
    NOT_IN = "$notIn"
    IS = "$is"
    BETWEEN = "$between"


def _between(column, operand):
    low, high = operand
    return column.between(low, high)


_COLUMN_OPERATORS: Dict[str, Callable[[Any, Any], ColumnElement]] = {
    Op.EQ: lambda column, operand: column.is_(None) if operand is None else column == operand,
    Op.NE: lambda column, operand: column.is_not(None) if operand is None else column != operand,
    Op.GT: lambda column, operand: column > operand,
    Op.GTE: lambda column, operand: column >= operand,
    Op.LT: lambda column, operand: column < operand,
    Op.LTE: lambda column, operand: column <= operand,
    Op.LIKE: lambda column, operand: column.like(operand),
    Op.NOT_LIKE: lambda column, operand: column.not_like(operand),
    Op.ILIKE: lambda column, operand: column.ilike(operand),
    Op.IN: lambda column, operand: column.in_(list(operand)),
    Op.NOT_IN: lambda column, operand: column.not_in(list(operand)),
    Op.IS: lambda column, operand: column.is_(operand),
    Op.NOT: lambda column, operand: column.is_not(operand),
    Op.BETWEEN: _between,
}


def snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def resolve_column(entity, name: str):
    """Return the mapped column attribute ``name`` on a class or alias.

    ``createdAt`` style names fall back to their snake_case attribute.
    """
    mapper = inspect(entity).mapper
    for candidate in (name, snake_case(name)):
        if candidate in mapper.column_attrs:
            return getattr(entity, candidate)
    raise ValueError(f"Unknown column '{name}' for {mapper.class_.__name__}")


def has_filters(spec: Any) -> bool:
    if spec is None:
        return False
    if isinstance(spec, ColumnElement):
        return True
    if isinstance(spec, (Mapping, list, tuple)):
        return len(spec) > 0
    return True


def _conjoin(clauses: List[ColumnElement]) -> ColumnElement:
    if not clauses:
        return true()
    if len(clauses) == 1:
        return clauses[0]
    return and_(*clauses)


def _alternatives(value: Any) -> Sequence[Any]:
    if isinstance(value, Mapping):
        return [{key: item} for key, item in value.items()]
    return value


def _column_conditions(column, value: Any) -> List[ColumnElement]:
    if isinstance(value, ColumnElement):
        return [column == value]
    if isinstance(value, Mapping):
        conditions = []
        for op, operand in value.items():
            builder = _COLUMN_OPERATORS.get(op)
            if builder is None:
                raise ValueError(f"Unsupported filter operator '{op}'")
            conditions.append(builder(column, operand))
        return conditions
    if value is None:
        return [column.is_(None)]
    if isinstance(value, (list, tuple, set, frozenset)):
        return [column.in_(list(value))]
    return [column == value]


def compile_filters(entity, spec: Any) -> List[ColumnElement]:
    if not has_filters(spec):
        return []
    if isinstance(spec, ColumnElement):
        return [spec]
    if isinstance(spec, (list, tuple)):
        clauses: List[ColumnElement] = []
        for item in spec:
            clauses.extend(compile_filters(entity, item))
        return clauses
    if not isinstance(spec, Mapping):
        raise ValueError(f"Unsupported filter specification of type {type(spec).__name__}")

    clauses = []
    for key, value in spec.items():
        if key == Op.AND:
            clauses.append(_conjoin(compile_filters(entity, list(_alternatives(value)))))
        elif key == Op.OR:
            alternatives = [_conjoin(compile_filters(entity, item)) for item in _alternatives(value)]
            if alternatives:
                clauses.append(or_(*alternatives))
        elif key == Op.NOT:
            clauses.append(not_(_conjoin(compile_filters(entity, value))))
        else:
            clauses.extend(_column_conditions(resolve_column(entity, key), value))
    return clauses
