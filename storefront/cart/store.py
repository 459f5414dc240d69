# storefront/cart/store.py

"""In-memory shopping cart owned by a single storefront session."""

import logging
import time
from collections.abc import Callable
from dataclasses import replace
from decimal import Decimal

from storefront.config.settings import Settings
from storefront.models.cart import (
    CartLineItem,
    CartOutcome,
    Notification,
    Severity,
)
from storefront.models.product import Product

logger = logging.getLogger("storefront.cart")


def _valid_quantity(quantity: object) -> bool:
    return (
        isinstance(quantity, int)
        and not isinstance(quantity, bool)
        and quantity > 0
    )


class CartStore:
    """Authoritative list of cart line items plus one current notification.

    Consumers receive the store by reference and mutate it only through
    its methods. Line items keep insertion order and there is at most one
    line per product id. Every mutation returns a :class:`CartOutcome`
    so callers can tell a no-op from a change.
    """

    def __init__(
        self,
        notification_duration: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._items: list[CartLineItem] = []
        self._notification = Notification()
        self._duration = (
            Settings.NOTIFICATION_DURATION
            if notification_duration is None
            else notification_duration
        )
        self._clock = clock

    # ── Read side ────────────────────────────────────────

    @property
    def items(self) -> list[CartLineItem]:
        """Line items in the order they were first added."""
        return list(self._items)

    @property
    def subtotal(self) -> Decimal:
        """Sum of price x quantity, recomputed on every read."""
        return sum(
            (item.line_total for item in self._items), Decimal("0")
        )

    @property
    def item_count(self) -> int:
        """Total units across all lines."""
        return sum(item.quantity for item in self._items)

    @property
    def line_count(self) -> int:
        return len(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def notification(self) -> Notification:
        """The current notification, hidden once its duration elapses."""
        note = self._notification
        if note.is_open and note.expired(self._clock(), self._duration):
            note.is_open = False
        return note

    def _index_of(self, product_id: str) -> int | None:
        for idx, item in enumerate(self._items):
            if item.product.id == product_id:
                return idx
        return None

    def get_item(self, product_id: str) -> CartLineItem | None:
        """Return the line for *product_id*, or ``None``."""
        idx = self._index_of(product_id)
        return None if idx is None else self._items[idx]

    # ── Mutations ────────────────────────────────────────

    def add_to_cart(
        self, product: Product, quantity: int = 1
    ) -> CartOutcome:
        """Add *quantity* units of *product*, merging with an existing line."""
        if not _valid_quantity(quantity):
            logger.warning(
                "Rejected add of %s with quantity %r",
                product.id,
                quantity,
            )
            return CartOutcome.INVALID_QUANTITY

        idx = self._index_of(product.id)
        if idx is not None:
            existing = self._items[idx]
            self._items[idx] = replace(
                existing, quantity=existing.quantity + quantity
            )
            outcome = CartOutcome.INCREMENTED
        else:
            self._items.append(CartLineItem(product=product, quantity=quantity))
            outcome = CartOutcome.ADDED

        self._notify(f"{product.name} added to cart", Severity.SUCCESS)
        logger.debug(
            "Cart %s: %s x%d (lines=%d)",
            outcome.value,
            product.id,
            quantity,
            len(self._items),
        )
        return outcome

    def remove_from_cart(self, product_id: str) -> CartOutcome:
        """Drop the line for *product_id*; absent ids are reported, not raised."""
        before = len(self._items)
        self._items = [
            item for item in self._items if item.product.id != product_id
        ]
        if len(self._items) == before:
            logger.debug("Remove ignored, %s not in cart", product_id)
            return CartOutcome.NOT_FOUND
        logger.debug("Cart removed %s", product_id)
        return CartOutcome.REMOVED

    def update_quantity(
        self, product_id: str, quantity: int
    ) -> CartOutcome:
        """Set the quantity for *product_id*.

        A quantity of zero or less removes the line.
        """
        idx = self._index_of(product_id)
        if idx is None:
            logger.debug("Update ignored, %s not in cart", product_id)
            return CartOutcome.NOT_FOUND

        if isinstance(quantity, bool) or not isinstance(quantity, int):
            logger.warning(
                "Rejected quantity %r for %s", quantity, product_id
            )
            return CartOutcome.INVALID_QUANTITY

        if quantity <= 0:
            return self.remove_from_cart(product_id)

        self._items[idx] = replace(self._items[idx], quantity=quantity)
        logger.debug("Cart updated %s to x%d", product_id, quantity)
        return CartOutcome.UPDATED

    def clear_cart(self) -> CartOutcome:
        """Empty the cart unconditionally."""
        removed = len(self._items)
        self._items = []
        logger.debug("Cart cleared (%d lines removed)", removed)
        return CartOutcome.CLEARED

    def close_notification(self) -> None:
        """Hide the notification but keep its text."""
        self._notification.is_open = False

    def _notify(self, message: str, severity: Severity) -> None:
        self._notification = Notification(
            message=message,
            severity=severity,
            is_open=True,
            shown_at=self._clock(),
        )
