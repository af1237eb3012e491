"""
Checkout from a CartStore against the gallery API.

The flow posts the cart's artwork ids and the customer's phone number to
`/payment/simulate`. The server recomputes the amount and re-checks
availability; the checks here only spare a pointless round trip.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

import httpx

from gallery.client.cart import CartStore

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error. Please try again."


class CheckoutError(Exception):
    """Checkout cannot start (empty cart, no login)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass
class CheckoutResult:
    """Outcome of a checkout attempt."""

    success: bool
    data: dict[str, Any] | None = None
    message: str | None = None
    error: str | None = None


class CheckoutFlow:
    """
    Args:
        cart: the visitor's cart.
        client: httpx client whose base_url points at the API prefix
            (e.g. ``http://localhost:8000/api``).
        access_token: bearer token of the logged-in user, if any.
    """

    def __init__(
        self,
        cart: CartStore,
        client: httpx.Client,
        access_token: str | None = None,
    ):
        self.cart = cart
        self.client = client
        self.access_token = access_token

    def ensure_ready(self) -> None:
        """
        Raises:
            CheckoutError: if the cart is empty or nobody is logged in.
        """
        if self.cart.count == 0:
            raise CheckoutError("Your cart is empty")
        if not self.access_token:
            raise CheckoutError("Please log in to continue")

    def submit(
        self,
        phone_number: str,
        on_success: Callable[[dict[str, Any]], None] | None = None,
    ) -> CheckoutResult:
        """
        Pay for everything in the cart.

        On success `on_success` receives the payment data and the cart is
        cleared. On failure the cart is kept so the customer can retry.
        """
        self.ensure_ready()

        payload = {"phoneNumber": phone_number, "artworkIds": self.cart.artwork_ids}
        try:
            response = self.client.post(
                "/payment/simulate",
                json=payload,
                headers={"Authorization": f"Bearer {self.access_token}"},
            )
            body = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Payment request failed")
            return CheckoutResult(success=False, message=NETWORK_ERROR_MESSAGE)

        if body.get("success") and body.get("data"):
            data = body["data"]
            if on_success is not None:
                on_success(data)
            self.cart.clear_cart()
            return CheckoutResult(success=True, data=data, message=body.get("message"))

        return CheckoutResult(
            success=False,
            message=body.get("message") or "An unknown error occurred.",
            error=body.get("error"),
        )
