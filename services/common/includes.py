"""
Relation inclusion descriptors for list queries.

An ``Include`` names a relationship on the parent entity (the association
alias), an optional filter evaluated against the related entity, nested
includes, and how the relation takes part in the query: ``required`` turns
the join into an inner join that narrows the parent rows, ``attributes``
restricts (or with ``[]`` suppresses) the loaded columns, and
``duplicating`` records whether the join may multiply parent rows.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, List, Mapping, Optional, Union

from services.common.filters import has_filters

_DESCRIPTOR_KEYS = frozenset({"association", "as", "model", "where", "include", "required", "attributes", "duplicating"})


@dataclass
class Include:
    association: str
    model: Optional[type] = None
    where: Any = None
    include: List["Include"] = field(default_factory=list)
    required: Optional[bool] = None
    attributes: Optional[List[str]] = None
    duplicating: bool = True

    @property
    def is_required(self) -> bool:
        if self.required is not None:
            return self.required
        return has_filters(self.where) or any(child.is_required for child in self.include)

    @property
    def loads_columns(self) -> bool:
        return self.attributes is None or len(self.attributes) > 0

    def target(self, parent):
        if self.model is not None:
            return self.model
        return getattr(parent, self.association).property.mapper.class_

    def for_count(self) -> "Include":
        """Copy used by count queries: joined for filtering only, never projected."""
        return replace(
            self,
            attributes=[],
            duplicating=False,
            required=self.is_required,
            include=[child.for_count() for child in self.include],
        )

    @classmethod
    def coerce(cls, value: Union["Include", Mapping[str, Any]]) -> "Include":
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"Include descriptor must be an Include or a mapping, got {type(value).__name__}")

        unknown = set(value) - _DESCRIPTOR_KEYS
        if unknown:
            raise TypeError(f"Unknown include descriptor keys: {sorted(unknown)}")
        association = value.get("association") or value.get("as")
        if not association:
            raise TypeError("Include descriptor requires an 'association' (or 'as') name")

        attributes = value.get("attributes")
        return cls(
            association=association,
            model=value.get("model"),
            where=value.get("where"),
            include=normalize_includes(value.get("include")),
            required=value.get("required"),
            attributes=list(attributes) if attributes is not None else None,
            duplicating=value.get("duplicating", True),
        )


def normalize_includes(include: Optional[Iterable[Union[Include, Mapping[str, Any]]]]) -> List[Include]:
    return [Include.coerce(item) for item in include or []]
