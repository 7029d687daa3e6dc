"""/dashboard"""

from fastapi import APIRouter, Depends

from university_erp.api.dependencies import get_current_user, get_dashboard_service
from university_erp.api.v1.schemas.common import ApiResponse, ok
from university_erp.api.v1.schemas.dashboard import DashboardStats
from university_erp.services.dashboard import DashboardService

router = APIRouter(prefix="/dashboard", dependencies=[Depends(get_current_user)])


@router.get("/stats", response_model=ApiResponse[DashboardStats])
def get_stats(service: DashboardService = Depends(get_dashboard_service)):
    return ok(service.get_stats())
