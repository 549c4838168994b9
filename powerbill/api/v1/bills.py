"""Bill API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from powerbill.auth.dependencies import CurrentUser, get_current_user, require_role
from powerbill.dependencies import BillingSvc, BillRepo, CustomerRepo
from powerbill.filters import FilterDepends, FilterResult
from powerbill.schemas.bill import BillCreate, BillListResponse, BillResponse, BillUpdate
from powerbill.services.billing_service import EntityNotFoundError, NoActiveRateError
from powerbill.utils.audit import audit_logged
from powerbill.utils.status import UserRole

router = APIRouter(dependencies=[Depends(get_current_user)])

_WRITERS = (UserRole.admin, UserRole.manager)


@router.get("", response_model=BillListResponse)
async def list_bills(
    repo: BillRepo,
    filters: FilterResult = FilterDepends("bills"),
) -> BillListResponse:
    """List bills; searching also matches the customer's name, phone and watch ID."""
    rows, total = await repo.get_all(filters)
    return BillListResponse.from_filter_result(
        items=[BillResponse.from_row(bill, customer) for bill, customer in rows],
        total=total,
        result=filters,
    )


@router.get("/customer/{customer_code}", response_model=list[BillResponse])
async def get_customer_bills(
    customer_code: str,
    customer_repo: CustomerRepo,
    bill_repo: BillRepo,
) -> list[BillResponse]:
    customer = await customer_repo.get_by_code(customer_code)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )

    bills = await bill_repo.get_by_customer(customer.id)
    return [BillResponse.from_row(b, customer) for b in bills]


@router.get("/{code}", response_model=BillResponse)
async def get_bill(code: str, repo: BillRepo) -> BillResponse:
    row = await repo.get_with_customer(code)
    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bill not found",
        )
    return BillResponse.from_row(*row)


@router.post(
    "",
    response_model=BillResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(*_WRITERS)), Depends(audit_logged("create_bill"))],
)
async def create_bill(
    data: BillCreate,
    service: BillingSvc,
    current_user: CurrentUser,
) -> BillResponse:
    """Generate a bill priced at the currently active rate."""
    try:
        bill, customer = await service.create_bill(data, created_by=current_user.id)
    except EntityNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    except NoActiveRateError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    return BillResponse.from_row(bill, customer)


@router.put(
    "/{code}",
    response_model=BillResponse,
    dependencies=[Depends(require_role(*_WRITERS)), Depends(audit_logged("update_bill"))],
)
async def update_bill(code: str, data: BillUpdate, repo: BillRepo) -> BillResponse:
    bill = await repo.update(code, data)
    if not bill:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bill not found",
        )
    return BillResponse.from_row(bill)
