"""Expose the filter registry so clients can render filter controls."""

from fastapi import APIRouter, Depends, HTTPException, status

from powerbill.auth.dependencies import get_current_user
from powerbill.filters import UnknownModuleError, available_modules, get_module
from powerbill.schemas.filters import FilterModuleSchema

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/modules", response_model=list[str])
async def list_filter_modules() -> list[str]:
    return available_modules()


@router.get("/{module_name}", response_model=FilterModuleSchema)
async def get_filter_module(module_name: str) -> FilterModuleSchema:
    try:
        module = get_module(module_name)
    except UnknownModuleError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    return FilterModuleSchema.from_module(module_name, module)
