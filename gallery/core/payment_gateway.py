"""
Mobile-payment (STK push) gateway used by checkout.

The real gateway is a third-party service. `SimulatedStkGateway` stands in
for it: it waits a configurable delay and then accepts or declines the
charge at random. Tests swap it out through the `get_payment_gateway`
dependency.
"""

import logging
import random
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from gallery.core.config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class ChargeResult:
    """Outcome of a single charge request."""

    success: bool
    reference: str
    error_code: str | None = None


class PaymentGateway(Protocol):
    def charge(self, reference: str, phone_number: str, amount: Decimal) -> ChargeResult:
        ...


class SimulatedStkGateway:
    """
    Simulates an STK-push round trip.

    Args:
        delay_seconds: how long the simulated customer takes to respond.
        success_rate: probability (0..1) that the charge is accepted.
        rng: random source; injectable for deterministic runs.
    """

    def __init__(
        self,
        delay_seconds: float = 2.0,
        success_rate: float = 0.9,
        rng: random.Random | None = None,
    ):
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError("success_rate must be between 0 and 1")
        self.delay_seconds = delay_seconds
        self.success_rate = success_rate
        self.rng = rng or random.Random()

    def charge(self, reference: str, phone_number: str, amount: Decimal) -> ChargeResult:
        logger.info("STK push %s: %s to %s", reference, amount, phone_number)
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)

        if self.rng.random() < self.success_rate:
            return ChargeResult(success=True, reference=reference)

        return ChargeResult(
            success=False,
            reference=reference,
            error_code="INSUFFICIENT_FUNDS",
        )


def get_payment_gateway() -> PaymentGateway:
    """FastAPI dependency returning the configured gateway."""
    settings = get_settings()
    return SimulatedStkGateway(
        delay_seconds=settings.PAYMENT_SIMULATION_DELAY_SECONDS,
        success_rate=settings.PAYMENT_SUCCESS_RATE,
    )
