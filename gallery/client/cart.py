"""
In-memory shopping cart for a single visitor.

Each artwork is unique, so the cart holds at most one entry per artwork id
and has no quantities. Nothing is persisted; callers pass the store to
whatever needs it (the checkout flow, a UI layer, tests).
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

logger = logging.getLogger(__name__)


def _field(artwork: Any, name: str) -> Any:
    if isinstance(artwork, Mapping):
        return artwork.get(name)
    return getattr(artwork, name, None)


def parse_price(raw: Any) -> Decimal:
    """Price as a Decimal; anything non-numeric or negative counts as 0."""
    if raw is None or isinstance(raw, bool):
        return Decimal("0")
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not value.is_finite() or value < 0:
        return Decimal("0")
    return value


class CartStore:
    """
    Cart items plus the drawer's open/closed state.

    Items are artwork records as returned by the API (dicts with at least
    `id` and `price`) or any object exposing those attributes.
    """

    def __init__(self):
        self._items: list[Any] = []
        self._total = Decimal("0")
        self._is_open = False

    # ----- Items -----

    def add_item(self, artwork: Any) -> None:
        """Add `artwork` unless an item with the same id is already present."""
        artwork_id = _field(artwork, "id")
        if any(_field(item, "id") == artwork_id for item in self._items):
            return
        self._items.append(artwork)
        self._total += parse_price(_field(artwork, "price"))
        logger.debug("Added artwork %s to cart", artwork_id)

    def remove_item(self, artwork_id: int) -> None:
        for index, item in enumerate(self._items):
            if _field(item, "id") == artwork_id:
                del self._items[index]
                self._total -= parse_price(_field(item, "price"))
                return

    def clear_cart(self) -> None:
        self._items = []
        self._total = Decimal("0")

    # ----- Drawer -----

    def open_cart(self) -> None:
        self._is_open = True

    def close_cart(self) -> None:
        self._is_open = False

    def toggle_cart(self) -> None:
        self._is_open = not self._is_open

    @property
    def is_open(self) -> bool:
        return self._is_open

    # ----- Views -----

    @property
    def items(self) -> tuple[Any, ...]:
        return tuple(self._items)

    @property
    def total(self) -> Decimal:
        return self._total

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def artwork_ids(self) -> list[int]:
        return [_field(item, "id") for item in self._items]
