"""Payment API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from powerbill.auth.dependencies import CurrentUser, get_current_user, require_role
from powerbill.dependencies import BillingSvc, CustomerRepo, PaymentRepo
from powerbill.filters import FilterDepends, FilterResult
from powerbill.schemas.payment import PaymentCreate, PaymentListResponse, PaymentResponse
from powerbill.services.billing_service import EntityNotFoundError
from powerbill.utils.audit import audit_logged
from powerbill.utils.status import UserRole

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=PaymentListResponse)
async def list_payments(
    repo: PaymentRepo,
    filters: FilterResult = FilterDepends("payments"),
) -> PaymentListResponse:
    rows, total = await repo.get_all(filters)
    return PaymentListResponse.from_filter_result(
        items=[PaymentResponse.from_row(payment, customer) for payment, customer in rows],
        total=total,
        result=filters,
    )


@router.get("/customer/{customer_code}", response_model=list[PaymentResponse])
async def get_customer_payments(
    customer_code: str,
    customer_repo: CustomerRepo,
    payment_repo: PaymentRepo,
) -> list[PaymentResponse]:
    customer = await customer_repo.get_by_code(customer_code)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )

    payments = await payment_repo.get_by_customer(customer.id)
    return [PaymentResponse.from_row(p, customer) for p in payments]


@router.get("/{code}", response_model=PaymentResponse)
async def get_payment(code: str, repo: PaymentRepo) -> PaymentResponse:
    row = await repo.get_with_customer(code)
    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Payment not found",
        )
    return PaymentResponse.from_row(*row)


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[
        Depends(require_role(UserRole.admin, UserRole.manager, UserRole.operator)),
        Depends(audit_logged("record_payment")),
    ],
)
async def record_payment(
    data: PaymentCreate,
    service: BillingSvc,
    current_user: CurrentUser,
) -> PaymentResponse:
    """Record a completed payment and settle the bill it pays."""
    try:
        payment, customer = await service.record_payment(data, processed_by=current_user.id)
    except EntityNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    return PaymentResponse.from_row(payment, customer)
