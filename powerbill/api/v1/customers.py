"""Customer API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from powerbill.auth.dependencies import get_current_user, require_role
from powerbill.dependencies import CustomerRepo
from powerbill.filters import FilterDepends, FilterResult
from powerbill.schemas.customer import (
    CustomerCreate,
    CustomerListResponse,
    CustomerResponse,
    CustomerUpdate,
)
from powerbill.utils.audit import audit_logged
from powerbill.utils.status import UserRole

router = APIRouter(dependencies=[Depends(get_current_user)])

_WRITERS = (UserRole.admin, UserRole.manager)


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    repo: CustomerRepo,
    filters: FilterResult = FilterDepends("customers"),
) -> CustomerListResponse:
    """List customers with filtering, sorting and pagination."""
    customers, total = await repo.get_all(filters)
    return CustomerListResponse.from_filter_result(
        items=[CustomerResponse.model_validate(c) for c in customers],
        total=total,
        result=filters,
    )


@router.get("/{code}", response_model=CustomerResponse)
async def get_customer(code: str, repo: CustomerRepo) -> CustomerResponse:
    customer = await repo.get_by_code(code)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )
    return CustomerResponse.model_validate(customer)


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(*_WRITERS)), Depends(audit_logged("create_customer"))],
)
async def create_customer(data: CustomerCreate, repo: CustomerRepo) -> CustomerResponse:
    """Register a customer; the customer code is generated."""
    customer = await repo.create(data)
    return CustomerResponse.model_validate(customer)


@router.put(
    "/{code}",
    response_model=CustomerResponse,
    dependencies=[Depends(require_role(*_WRITERS)), Depends(audit_logged("update_customer"))],
)
async def update_customer(code: str, data: CustomerUpdate, repo: CustomerRepo) -> CustomerResponse:
    customer = await repo.update(code, data)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )
    return CustomerResponse.model_validate(customer)
