"""Translate raw query-string parameters into a :class:`FilterResult`.

Query building is lenient: a value that cannot be interpreted for its
filter kind simply adds no constraint.  Validation is a separate, strict
pass that reports every problem it finds; callers are expected to run it
first and reject the request when it fails.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

from powerbill.filters.registry import FILTER_MODULES, get_module
from powerbill.filters.types import (
    AnyOf,
    Constraint,
    Contains,
    Equals,
    FilterConfig,
    FilterKind,
    FilterModule,
    FilterResult,
    OneOf,
    Predicate,
    Range,
    SortDirection,
    SortSpec,
    ValidationOutcome,
)
from powerbill.utils.logging import get_logger

logger = get_logger(__name__)

SORT_BY_PARAM = "sortBy"
SORT_ORDER_PARAM = "sortOrder"
PAGE_PARAM = "page"
LIMIT_PARAM = "limit"

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
FALLBACK_SORT = SortSpec(field="created_at", direction=SortDirection.desc)

ParsedValue = str | list[str]


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _scalar(value: Any) -> str | None:
    """First usable value of a raw parameter, as a string."""
    if isinstance(value, (list, tuple)):
        value = next((v for v in value if v is not None and v != ""), None)
    if value is None or value == "":
        return None
    return _to_str(value)


def parse_date(value: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip())
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_number(value: ParsedValue) -> int | float | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _positive_int(value: Any, default: int) -> int:
    text = _scalar(value)
    if text is None:
        return default
    try:
        number = int(text.strip())
    except ValueError:
        return default
    return number if number >= 1 else default


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def parse_filter_params(raw: Mapping[str, Any]) -> dict[str, ParsedValue]:
    """Normalise raw parameters.

    Empty values are dropped, comma-separated strings become lists (empty
    segments discarded) and every other value is coerced to ``str``.
    """
    parsed: dict[str, ParsedValue] = {}
    for key, value in raw.items():
        if value is None or value == "":
            continue

        if isinstance(value, (list, tuple)):
            items = [_to_str(v) for v in value if v is not None and v != ""]
            if items:
                parsed[key] = items
        elif isinstance(value, str):
            if "," in value:
                items = [part for part in value.split(",") if part != ""]
                if items:
                    parsed[key] = items
            else:
                parsed[key] = value
        else:
            parsed[key] = _to_str(value)
    return parsed


def _constraint_for(config: FilterConfig, value: ParsedValue) -> Constraint | None:
    kind = config.kind

    if kind == FilterKind.select:
        # a single select always compares for equality, even on a split value
        text = ",".join(value) if isinstance(value, list) else value
        return Equals(config.translate(text))

    if kind == FilterKind.multiselect:
        if not isinstance(value, list):
            return None
        return OneOf(tuple(config.translate(v) for v in value))

    if kind == FilterKind.date:
        if isinstance(value, list):
            return None
        parsed = parse_date(value)
        if parsed is None:
            return None
        start = parsed.replace(hour=0, minute=0, second=0, microsecond=0)
        return Range(gte=start, lt=start + timedelta(days=1))

    if kind == FilterKind.daterange:
        if not isinstance(value, list) or len(value) != 2:
            return None
        start, end = parse_date(value[0]), parse_date(value[1])
        if start is None or end is None:
            return None
        return Range(gte=start, lte=end)

    if kind == FilterKind.number:
        number = parse_number(value)
        return None if number is None else Equals(number)

    if kind == FilterKind.boolean:
        return Equals(value == "true" or value is True)

    return None


def build_filter_query(
    filters: Mapping[str, ParsedValue], filter_configs: Sequence[FilterConfig]
) -> Predicate:
    """Build the predicate for every configured filter present in ``filters``."""
    constraints: dict[str, Constraint] = {}
    any_of: AnyOf | None = None

    for config in filter_configs:
        value = filters.get(config.key)
        if value is None or value == "":
            continue

        if config.kind == FilterKind.text:
            if not config.search_fields:
                continue
            text = ",".join(value) if isinstance(value, list) else value
            # A later text filter replaces an earlier one's OR group.
            any_of = AnyOf(tuple((name, Contains(text)) for name in config.search_fields))
            continue

        constraint = _constraint_for(config, value)
        if constraint is not None:
            constraints[config.target] = constraint

    return Predicate(constraints=constraints, any_of=any_of)


def build_sort(
    sort_by: str | None = None,
    sort_order: str | None = None,
    default_sort: SortSpec | None = None,
) -> SortSpec:
    if sort_by and sort_order:
        direction = SortDirection.desc if sort_order == "desc" else SortDirection.asc
        return SortSpec(field=sort_by, direction=direction)
    if default_sort is not None:
        return default_sort
    return FALLBACK_SORT


def build_pagination(
    page: Any = None, page_size: Any = None, max_page_size: int | None = None
) -> tuple[int, int]:
    """Return ``(skip, limit)`` for a 1-based page number."""
    page_num = _positive_int(page, DEFAULT_PAGE)
    limit = _positive_int(page_size, DEFAULT_PAGE_SIZE)
    if max_page_size is not None and limit > max_page_size:
        logger.debug("Page size %d capped to %d", limit, max_page_size)
        limit = max_page_size
    return (page_num - 1) * limit, limit


def validate_filters(
    filters: Mapping[str, ParsedValue], filter_configs: Sequence[FilterConfig]
) -> ValidationOutcome:
    """Check parsed values against their configuration.

    Every violation yields one message; a failing filter never prevents
    the remaining ones from being checked.
    """
    errors: list[str] = []

    for config in filter_configs:
        value = filters.get(config.key)
        rules = config.validation

        if value is None or value == "" or value == []:
            if rules is not None and rules.required:
                errors.append(f"{config.label} is required")
            continue

        values = value if isinstance(value, list) else [value]

        if config.kind == FilterKind.select:
            if config.options and value not in config.option_values:
                errors.append(f"Invalid value for {config.label}")

        elif config.kind == FilterKind.multiselect:
            if config.options:
                invalid = [v for v in values if v not in config.option_values]
                if invalid:
                    errors.append(f"Invalid values for {config.label}: {', '.join(invalid)}")

        elif config.kind == FilterKind.number:
            number = parse_number(value)
            if number is None:
                errors.append(f"{config.label} must be a valid number")
            elif rules is not None:
                if rules.min is not None and number < rules.min:
                    errors.append(f"{config.label} must be at least {rules.min:g}")
                if rules.max is not None and number > rules.max:
                    errors.append(f"{config.label} must be at most {rules.max:g}")

        elif config.kind in (FilterKind.date, FilterKind.daterange):
            for item in values:
                if parse_date(item) is None:
                    errors.append(f"Invalid date format for {config.label}")

        if rules is not None and rules.pattern:
            pattern = re.compile(rules.pattern)
            for item in values:
                if not pattern.search(item):
                    errors.append(f"{config.label} has an invalid format")

    return ValidationOutcome(errors=tuple(errors))


# ---------------------------------------------------------------------------
# Module-level entry points
# ---------------------------------------------------------------------------


def translate_module(
    params: Mapping[str, Any], module: FilterModule, max_page_size: int | None = None
) -> FilterResult:
    parsed = parse_filter_params(params)
    predicate = build_filter_query(parsed, module.filters)
    sort = build_sort(
        _scalar(params.get(SORT_BY_PARAM)),
        _scalar(params.get(SORT_ORDER_PARAM)),
        module.default_sort,
    )
    skip, limit = build_pagination(
        params.get(PAGE_PARAM), params.get(LIMIT_PARAM), max_page_size=max_page_size
    )
    logger.debug(
        "Translated filters for %s: %d constraint(s), search=%s, sort=%s %s, skip=%d, limit=%d",
        module.name,
        len(predicate.constraints),
        predicate.any_of is not None,
        sort.field,
        sort.direction,
        skip,
        limit,
    )
    return FilterResult(predicate=predicate, sort=sort, skip=skip, limit=limit)


def translate(
    params: Mapping[str, Any],
    module_name: str,
    *,
    registry: Mapping[str, FilterModule] = FILTER_MODULES,
    max_page_size: int | None = None,
) -> FilterResult:
    """Translate ``params`` for the named module.

    Raises :class:`UnknownModuleError` when ``module_name`` is not registered.
    """
    return translate_module(params, get_module(module_name, registry), max_page_size)


def validate(
    params: Mapping[str, Any],
    module_name: str,
    *,
    registry: Mapping[str, FilterModule] = FILTER_MODULES,
) -> ValidationOutcome:
    module = get_module(module_name, registry)
    return validate_filters(parse_filter_params(params), module.filters)
