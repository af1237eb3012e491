# gallery/routers/admin_stats.py
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from gallery.core.auth import require_admin
from gallery.database import get_session
from gallery.repositories.stats_repo import StatsRepository
from gallery.schemas.common import APIResponse, ok
from gallery.schemas.stats import AdminDashboardStats
from gallery.services.stats_service import StatsService

router = APIRouter(prefix="/admin/stats", tags=["Admin Stats"])

repo = StatsRepository()
service = StatsService(repo)


@router.get(
    "",
    response_model=APIResponse[AdminDashboardStats],
    dependencies=[Depends(require_admin)],
)
def get_admin_dashboard_stats(
    latest: int = Query(default=5, ge=0, le=50),
    session: Session = Depends(get_session),
):
    """
    Aggregated statistics for the admin dashboard.

    Query params (optional):
      - latest: how many recent transactions to include (default 5)

    Only accessible to users with role='ADMIN'.
    """
    return ok(
        service.get_admin_dashboard_stats(
            session=session,
            latest_n_transactions=latest,
        )
    )
