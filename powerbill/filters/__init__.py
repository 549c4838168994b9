"""Declarative, per-module filtering of list endpoints."""

from .dependencies import FilterDepends
from .registry import FILTER_MODULES, available_modules, get_filter_config, get_module
from .translator import translate, validate
from .types import FilterResult, UnknownModuleError, ValidationOutcome

__all__ = [
    "FILTER_MODULES",
    "FilterDepends",
    "FilterResult",
    "UnknownModuleError",
    "ValidationOutcome",
    "available_modules",
    "get_filter_config",
    "get_module",
    "translate",
    "validate",
]
