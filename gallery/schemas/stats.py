from pydantic import ConfigDict

from gallery.schemas.common import CamelModel
from gallery.schemas.payment import TransactionRead


class AdminDashboardStats(CamelModel):
    """
    Full payload for the admin dashboard.
    """
    model_config = ConfigDict(extra="forbid")

    total_artworks: int
    available_artworks: int
    sold_artworks: int
    total_series: int
    total_customers: int
    completed_transactions: int
    total_revenue: float
    latest_transactions: list[TransactionRead]
