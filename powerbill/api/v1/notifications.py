"""Notification endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from powerbill.auth.dependencies import get_current_user, require_role
from powerbill.dependencies import NotificationRepo
from powerbill.schemas.common import MessageResponse, PaginatedResponse
from powerbill.schemas.notification import NotificationCreate, NotificationResponse
from powerbill.utils.status import UserRole

router = APIRouter(dependencies=[Depends(get_current_user)])


class NotificationListResponse(PaginatedResponse):
    items: list[NotificationResponse]


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    repo: NotificationRepo,
    page: int = Query(1, ge=1),
    size: int = Query(10, ge=1, le=100),
) -> NotificationListResponse:
    notifications, total = await repo.get_all(page=page, size=size)
    return NotificationListResponse.paginate(
        items=[NotificationResponse.model_validate(n) for n in notifications],
        total=total,
        page=page,
        size=size,
    )


@router.get("/unread", response_model=list[NotificationResponse])
async def list_unread(repo: NotificationRepo) -> list[NotificationResponse]:
    return [NotificationResponse.model_validate(n) for n in await repo.get_unread()]


@router.put("/read-all", response_model=MessageResponse)
async def mark_all_read(repo: NotificationRepo) -> MessageResponse:
    count = await repo.mark_all_read()
    return MessageResponse(message=f"{count} notification(s) marked as read")


@router.put("/{code}/read", response_model=NotificationResponse)
async def mark_read(code: str, repo: NotificationRepo) -> NotificationResponse:
    notification = await repo.mark_read(code)
    if not notification:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )
    return NotificationResponse.model_validate(notification)


@router.post(
    "",
    response_model=NotificationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(UserRole.admin, UserRole.manager))],
)
async def create_notification(
    data: NotificationCreate, repo: NotificationRepo
) -> NotificationResponse:
    notification = await repo.create(data)
    return NotificationResponse.model_validate(notification)
