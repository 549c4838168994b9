"""Dashboard endpoints."""

from fastapi import APIRouter, Depends

from powerbill.auth.dependencies import get_current_user
from powerbill.dependencies import DashboardSvc
from powerbill.schemas.dashboard import DashboardStats

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(service: DashboardSvc) -> DashboardStats:
    """Customer counts, recent activity and unread alerts (briefly cached)."""
    return await service.get_stats()
