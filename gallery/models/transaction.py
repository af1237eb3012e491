import json
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Transaction(SQLModel, table=True):
    """
    Record of a (simulated) mobile-payment attempt.

    One row per checkout attempt; rows are never deleted.

    Lifecycle:
      pending   -> completed (gateway accepted the charge)
      pending   -> failed    (gateway declined; artworks released)
    """

    __tablename__ = "transactions"

    id: str = Field(
        primary_key=True,
        max_length=64,
        description="TXN<epoch-ms><8 hex digits>",
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    amount: Decimal = Field(
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Total computed server-side from artwork prices",
    )

    phone_number: str = Field(
        description="Phone number the STK push was sent to",
    )

    # pending | completed | failed
    status: str = Field(
        default="pending",
        index=True,
    )

    # JSON-encoded list of artwork ids, e.g. "[1, 4]"
    artwork_ids: str = Field(
        description="JSON-encoded list of purchased artwork ids",
    )

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    def artwork_id_list(self) -> list[int]:
        return [int(i) for i in json.loads(self.artwork_ids)]
