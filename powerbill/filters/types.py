"""Declarative filter configuration and the store-neutral query it produces.

A :class:`FilterModule` describes which query parameters an entity listing
accepts.  The translator turns raw parameters into a :class:`FilterResult`
whose :class:`Predicate` is expressed with the small constraint vocabulary
below; storage adapters translate it into their own query language.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Union


class FilterKind(enum.StrEnum):
    text = "text"
    select = "select"
    multiselect = "multiselect"
    date = "date"
    daterange = "daterange"
    number = "number"
    boolean = "boolean"


class SortDirection(enum.StrEnum):
    asc = "asc"
    desc = "desc"


class FilterError(Exception):
    """Base class for filter configuration problems."""


class UnknownModuleError(FilterError, LookupError):
    """Raised when a caller asks for a module that is not registered."""

    def __init__(self, module_name: str) -> None:
        super().__init__(f"Unknown module: {module_name}")
        self.module_name = module_name


class FilterConfigurationError(FilterError):
    """A module's filters reference something that cannot be resolved."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FilterOption:
    value: str
    label: str


@dataclass(frozen=True)
class FilterValidation:
    required: bool = False
    min: float | None = None
    max: float | None = None
    pattern: str | None = None


@dataclass(frozen=True)
class FilterConfig:
    """One filterable attribute of an entity.

    ``key`` is the query-parameter name; ``field`` is the entity attribute
    the resulting constraint applies to and defaults to ``key``.
    """

    key: str
    label: str
    kind: FilterKind
    options: tuple[FilterOption, ...] = ()
    search_fields: tuple[str, ...] = ()
    mapping: Mapping[str, Any] | None = None
    validation: FilterValidation | None = None
    field: str | None = None
    placeholder: str | None = None

    def __post_init__(self) -> None:
        if self.mapping is not None and not isinstance(self.mapping, MappingProxyType):
            object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))

    @property
    def target(self) -> str:
        return self.field or self.key

    @property
    def option_values(self) -> tuple[str, ...]:
        return tuple(option.value for option in self.options)

    def translate(self, value: str) -> Any:
        """Map an external value to its stored representation."""
        if self.mapping is not None and value in self.mapping:
            return self.mapping[value]
        return value


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: SortDirection = SortDirection.desc

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.desc


@dataclass(frozen=True)
class FilterModule:
    """Filter configuration for one entity type."""

    name: str
    endpoint: str
    filters: tuple[FilterConfig, ...] = ()
    default_sort: SortSpec | None = None
    # fields clients may pass as ``sortBy``; empty means any mapped column
    sort_fields: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        keys = [config.key for config in self.filters]
        duplicates = sorted({key for key in keys if keys.count(key) > 1})
        if duplicates:
            raise FilterConfigurationError(
                f"Duplicate filter keys in module {self.name}: {', '.join(duplicates)}"
            )
        if (
            self.sort_fields
            and self.default_sort is not None
            and self.default_sort.field not in self.sort_fields
        ):
            raise FilterConfigurationError(
                f"Default sort field {self.default_sort.field!r} of module {self.name} "
                "is not sortable"
            )


# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Equals:
    value: Any


@dataclass(frozen=True)
class OneOf:
    values: tuple[Any, ...]


@dataclass(frozen=True)
class Range:
    """Interval constraint; ``lt`` and ``lte`` are mutually exclusive."""

    gte: datetime | float | None = None
    lt: datetime | float | None = None
    lte: datetime | float | None = None


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match."""

    text: str


@dataclass(frozen=True)
class AnyOf:
    """Logical OR over ``(field, constraint)`` pairs."""

    conditions: tuple[tuple[str, Constraint], ...]


Constraint = Union[Equals, OneOf, Range, Contains, AnyOf]


@dataclass(frozen=True)
class Predicate:
    """Attribute constraints combined with AND, plus an optional OR group."""

    constraints: Mapping[str, Constraint] = field(default_factory=dict)
    any_of: AnyOf | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.constraints, MappingProxyType):
            object.__setattr__(self, "constraints", MappingProxyType(dict(self.constraints)))

    def __hash__(self) -> int:
        return hash((tuple(self.constraints.items()), self.any_of))

    @property
    def is_empty(self) -> bool:
        return not self.constraints and self.any_of is None


@dataclass(frozen=True)
class FilterResult:
    predicate: Predicate
    sort: SortSpec
    skip: int
    limit: int

    @property
    def page(self) -> int:
        return self.skip // self.limit + 1 if self.limit else 1


@dataclass(frozen=True)
class ValidationOutcome:
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors
