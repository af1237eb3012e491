import json
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field, StrictInt, field_validator

from gallery.schemas.common import CamelModel, not_blank

TransactionStatus = Literal["pending", "completed", "failed"]


class PaymentRequest(CamelModel):
    """
    Checkout payload.

    The client never sends an amount; it is computed from current
    artwork prices on the server.
    """

    model_config = ConfigDict(extra="forbid")

    phone_number: str = Field(max_length=32)
    artwork_ids: list[StrictInt] = Field(min_length=1)

    @field_validator("phone_number")
    @classmethod
    def phone_not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("artwork_ids")
    @classmethod
    def no_duplicates(cls, v: list[int]) -> list[int]:
        if len(set(v)) != len(v):
            raise ValueError("artworkIds must not contain duplicates")
        return v


class PaymentSuccessData(CamelModel):
    transaction_id: str
    artwork_ids: list[int]
    status: TransactionStatus
    amount: float
    phone_number: str
    timestamp: datetime


class TransactionRead(CamelModel):
    id: str
    user_id: uuid.UUID
    amount: float
    phone_number: str
    status: TransactionStatus
    artwork_ids: list[int]
    timestamp: datetime

    @field_validator("artwork_ids", mode="before")
    @classmethod
    def decode_ids(cls, v):
        # Stored as a JSON string on the model
        if isinstance(v, str):
            return json.loads(v)
        return v
