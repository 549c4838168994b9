"""FastAPI dependency that validates and translates list query parameters."""

from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import Depends, HTTPException, Request, status

from powerbill.config import get_settings
from powerbill.filters.registry import get_module
from powerbill.filters.sql import InvalidSortFieldError, snake_case
from powerbill.filters.translator import translate_module, validate
from powerbill.filters.types import FilterModule, FilterResult
from powerbill.utils.logging import get_logger

logger = get_logger(__name__)


def query_params_to_dict(request: Request) -> dict[str, str | list[str]]:
    """Collapse repeated query keys into lists, keep single values as strings."""
    params: dict[str, str | list[str]] = {}
    for key in request.query_params.keys():
        values = request.query_params.getlist(key)
        params[key] = values if len(values) > 1 else values[0]
    return params


def is_sortable(module: FilterModule, field: str) -> bool:
    """Whether clients may sort ``module`` by ``field`` (camelCase accepted)."""
    if not module.sort_fields:
        return True
    return field in module.sort_fields or snake_case(field) in module.sort_fields


def filter_dependency(
    module_name: str,
) -> Callable[[Request], Coroutine[Any, Any, FilterResult]]:
    async def _resolve(request: Request) -> FilterResult:
        params = query_params_to_dict(request)
        outcome = validate(params, module_name)
        if not outcome.is_valid:
            logger.info(
                "Rejected %s filters on %s: %s",
                module_name,
                request.url.path,
                "; ".join(outcome.errors),
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"message": "Invalid filter parameters", "errors": list(outcome.errors)},
            )
        module = get_module(module_name)
        result = translate_module(params, module, max_page_size=get_settings().max_page_size)
        if not is_sortable(module, result.sort.field):
            raise InvalidSortFieldError(result.sort.field)
        return result

    return _resolve


def FilterDepends(module_name: str) -> Any:  # noqa: N802
    """Route parameter default, e.g. ``filters: FilterResult = FilterDepends("bills")``."""
    return Depends(filter_dependency(module_name))
