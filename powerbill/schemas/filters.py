"""Schemas describing the filter registry to UI clients."""

from typing import Any

from pydantic import BaseModel

from powerbill.filters.types import FilterConfig, FilterModule


class FilterOptionSchema(BaseModel):
    value: str
    label: str


class FilterValidationSchema(BaseModel):
    required: bool = False
    min: float | None = None
    max: float | None = None
    pattern: str | None = None


class FilterConfigSchema(BaseModel):
    key: str
    label: str
    type: str
    options: list[FilterOptionSchema] = []
    search_fields: list[str] = []
    placeholder: str | None = None
    validation: FilterValidationSchema | None = None

    @classmethod
    def from_config(cls, config: FilterConfig) -> "FilterConfigSchema":
        validation = None
        if config.validation is not None:
            rules = config.validation
            validation = FilterValidationSchema(
                required=rules.required, min=rules.min, max=rules.max, pattern=rules.pattern
            )
        return cls(
            key=config.key,
            label=config.label,
            type=config.kind.value,
            options=[FilterOptionSchema(value=o.value, label=o.label) for o in config.options],
            search_fields=list(config.search_fields),
            placeholder=config.placeholder,
            validation=validation,
        )


class FilterModuleSchema(BaseModel):
    module: str
    name: str
    endpoint: str
    filters: list[FilterConfigSchema]
    default_sort: dict[str, Any] | None = None
    sort_fields: list[str] = []

    @classmethod
    def from_module(cls, module_name: str, module: FilterModule) -> "FilterModuleSchema":
        default_sort = None
        if module.default_sort is not None:
            default_sort = {
                "field": module.default_sort.field,
                "order": module.default_sort.direction.value,
            }
        return cls(
            module=module_name,
            name=module.name,
            endpoint=module.endpoint,
            filters=[FilterConfigSchema.from_config(c) for c in module.filters],
            default_sort=default_sort,
            sort_fields=list(module.sort_fields),
        )
