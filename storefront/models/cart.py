# storefront/models/cart.py

"""Cart line items, notifications and mutation outcomes."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from storefront.models.product import Product


class CartOutcome(str, Enum):
    """What a cart mutation actually did."""

    ADDED = "added"
    INCREMENTED = "incremented"
    UPDATED = "updated"
    REMOVED = "removed"
    NOT_FOUND = "not_found"
    INVALID_QUANTITY = "invalid_quantity"
    CLEARED = "cleared"

    @property
    def changed(self) -> bool:
        """True when the cart contents were modified."""
        return self not in (
            CartOutcome.NOT_FOUND,
            CartOutcome.INVALID_QUANTITY,
        )


class Severity(str, Enum):
    """Notification severity levels."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class CartLineItem:
    """A (product, quantity) pairing in the cart."""

    product: Product
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


@dataclass
class Notification:
    """The single pending cart notice. Replaced, never queued."""

    message: str = ""
    severity: Severity = Severity.SUCCESS
    is_open: bool = False
    shown_at: float = 0.0

    def expired(self, now: float, duration: float) -> bool:
        """True once *duration* seconds have passed since it was shown."""
        return now - self.shown_at >= duration
