"""Tariff rate API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from powerbill.auth.dependencies import get_current_user, require_role
from powerbill.dependencies import RateRepo
from powerbill.filters import FilterDepends, FilterResult
from powerbill.schemas.common import MessageResponse
from powerbill.schemas.rate import RateCreate, RateListResponse, RateResponse, RateUpdate
from powerbill.utils.audit import audit_logged
from powerbill.utils.status import UserRole

router = APIRouter(dependencies=[Depends(get_current_user)])

_WRITERS = (UserRole.admin, UserRole.manager)


@router.get("", response_model=RateListResponse)
async def list_rates(
    repo: RateRepo,
    filters: FilterResult = FilterDepends("rates"),
) -> RateListResponse:
    rates, total = await repo.get_all(filters)
    return RateListResponse.from_filter_result(
        items=[RateResponse.model_validate(r) for r in rates],
        total=total,
        result=filters,
    )


@router.get("/active", response_model=RateResponse)
async def get_active_rate(repo: RateRepo) -> RateResponse:
    rate = await repo.get_active()
    if not rate:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active rate found",
        )
    return RateResponse.model_validate(rate)


@router.get("/{code}", response_model=RateResponse)
async def get_rate(code: str, repo: RateRepo) -> RateResponse:
    rate = await repo.get_by_code(code)
    if not rate:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Rate not found",
        )
    return RateResponse.model_validate(rate)


@router.post(
    "",
    response_model=RateResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(*_WRITERS)), Depends(audit_logged("create_rate"))],
)
async def create_rate(data: RateCreate, repo: RateRepo) -> RateResponse:
    """Create a rate; an active rate deactivates every other rate."""
    rate = await repo.create(data)
    return RateResponse.model_validate(rate)


@router.put(
    "/{code}",
    response_model=RateResponse,
    dependencies=[Depends(require_role(*_WRITERS)), Depends(audit_logged("update_rate"))],
)
async def update_rate(code: str, data: RateUpdate, repo: RateRepo) -> RateResponse:
    rate = await repo.update(code, data)
    if not rate:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Rate not found",
        )
    return RateResponse.model_validate(rate)


@router.delete(
    "/{code}",
    response_model=MessageResponse,
    dependencies=[Depends(require_role(UserRole.admin)), Depends(audit_logged("delete_rate"))],
)
async def delete_rate(code: str, repo: RateRepo) -> MessageResponse:
    rate = await repo.get_by_code(code)
    if not rate:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Rate not found",
        )
    if rate.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete the active rate",
        )

    await repo.delete(rate)
    return MessageResponse(message="Rate deleted successfully")
