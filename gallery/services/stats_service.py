from sqlmodel import Session

from gallery.repositories.stats_repo import StatsRepository
from gallery.schemas.payment import TransactionRead
from gallery.schemas.stats import AdminDashboardStats


class StatsService:
    """
    Orchestrates aggregated admin dashboard statistics.
    """

    def __init__(self, repo: StatsRepository):
        self.repo = repo

    def get_admin_dashboard_stats(
        self,
        session: Session,
        latest_n_transactions: int = 5,
    ) -> AdminDashboardStats:
        total_artworks = self.repo.count_artworks(session)
        available = self.repo.count_artworks(session, is_available=True)

        latest = self.repo.latest_transactions(session, limit=latest_n_transactions)

        return AdminDashboardStats(
            total_artworks=total_artworks,
            available_artworks=available,
            sold_artworks=total_artworks - available,
            total_series=self.repo.count_series(session),
            total_customers=self.repo.count_customers(session),
            completed_transactions=self.repo.count_completed_transactions(session),
            total_revenue=self.repo.total_revenue(session),
            latest_transactions=[TransactionRead.model_validate(t) for t in latest],
        )
