"""Compile a :class:`FilterResult` into SQLAlchemy ``Select`` clauses."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select, String, and_, cast, inspect, or_
from sqlalchemy.sql.elements import ColumnElement

from powerbill.filters.types import (
    AnyOf,
    Constraint,
    Contains,
    Equals,
    FilterConfigurationError,
    FilterResult,
    OneOf,
    Predicate,
    Range,
    SortSpec,
)

Aliases = Mapping[str, Any]

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class InvalidSortFieldError(ValueError):
    """The caller asked to sort by a field the entity does not have."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Cannot sort by unknown field: {field}")
        self.field = field


def snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def resolve_column(model: type, name: str, aliases: Aliases | None = None) -> Any | None:
    """Find the column for ``name`` on ``model``.

    ``aliases`` wins (used for columns of joined tables such as
    ``customer.name``), then the mapped attribute, then its snake_case form
    so ``createdAt`` resolves to ``created_at``.
    """
    if aliases and name in aliases:
        return aliases[name]
    column_attrs = inspect(model).column_attrs
    for candidate in (name, snake_case(name)):
        if candidate in column_attrs:
            return getattr(model, candidate)
    return None


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _condition(column: Any, constraint: Constraint) -> ColumnElement[bool]:
    if isinstance(constraint, Equals):
        return column == constraint.value
    if isinstance(constraint, OneOf):
        return column.in_(constraint.values)
    if isinstance(constraint, Range):
        bounds = []
        if constraint.gte is not None:
            bounds.append(column >= constraint.gte)
        if constraint.lt is not None:
            bounds.append(column < constraint.lt)
        if constraint.lte is not None:
            bounds.append(column <= constraint.lte)
        return and_(*bounds)
    if isinstance(constraint, Contains):
        target = column if isinstance(column.type, String) else cast(column, String)
        return target.ilike(f"%{_escape_like(constraint.text)}%", escape="\\")
    raise FilterConfigurationError(f"Unsupported constraint: {constraint!r}")


def _column_or_error(model: type, name: str, aliases: Aliases | None) -> Any:
    column = resolve_column(model, name, aliases)
    if column is None:
        raise FilterConfigurationError(f"{model.__name__} has no filterable field {name!r}")
    return column


def predicate_conditions(
    model: type, predicate: Predicate, aliases: Aliases | None = None
) -> list[ColumnElement[bool]]:
    conditions = [
        _condition(_column_or_error(model, name, aliases), constraint)
        for name, constraint in predicate.constraints.items()
    ]
    if predicate.any_of is not None:
        conditions.append(_any_of(model, predicate.any_of, aliases))
    return conditions


def _any_of(model: type, group: AnyOf, aliases: Aliases | None) -> ColumnElement[bool]:
    return or_(
        *(
            _condition(_column_or_error(model, name, aliases), constraint)
            for name, constraint in group.conditions
        )
    )


def apply_predicate(
    stmt: Select, model: type, predicate: Predicate, aliases: Aliases | None = None
) -> Select:
    conditions = predicate_conditions(model, predicate, aliases)
    return stmt.where(*conditions) if conditions else stmt


def apply_sort(stmt: Select, model: type, sort: SortSpec, aliases: Aliases | None = None) -> Select:
    column = resolve_column(model, sort.field, aliases)
    if column is None:
        raise InvalidSortFieldError(sort.field)
    return stmt.order_by(column.desc() if sort.descending else column.asc())


def apply_filters(
    stmt: Select, model: type, result: FilterResult, aliases: Aliases | None = None
) -> Select:
    """Apply predicate, sort and pagination of ``result`` to ``stmt``."""
    stmt = apply_predicate(stmt, model, result.predicate, aliases)
    stmt = apply_sort(stmt, model, result.sort, aliases)
    return stmt.offset(result.skip).limit(result.limit)
