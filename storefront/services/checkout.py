# storefront/services/checkout.py

"""Checkout totals and order placement."""

import logging
from decimal import Decimal
from typing import Protocol

from storefront.cart.store import CartStore
from storefront.config.settings import Settings
from storefront.models.order import Customer, OrderItem, OrderSummary

logger = logging.getLogger("storefront.checkout")


class CheckoutError(Exception):
    """Base class for checkout failures shown to the shopper."""


class EmptyCartError(CheckoutError):
    def __init__(self) -> None:
        super().__init__("Your cart is empty.")


class NotAuthenticatedError(CheckoutError):
    def __init__(self) -> None:
        super().__init__("You must be logged in to place an order.")


class OrderFailedError(CheckoutError):
    def __init__(self, detail: str = "") -> None:
        message = "There was an error placing your order. Please try again."
        super().__init__(f"{message} ({detail})" if detail else message)


class OrderGateway(Protocol):
    """Anything that can persist an order and hand back its id."""

    def create_order(
        self,
        customer: Customer,
        items: list[OrderItem],
        total: Decimal,
    ) -> str | None: ...


def summarize(cart: CartStore) -> OrderSummary:
    """Subtotal, shipping, taxes and total for the current cart."""
    return OrderSummary.from_subtotal(
        cart.subtotal,
        Settings.SHIPPING_FLAT_RATE,
        Settings.TAX_RATE,
    )


class CheckoutService:
    """Turns the cart into an order through an :class:`OrderGateway`."""

    def __init__(self, gateway: OrderGateway) -> None:
        self.gateway = gateway

    def place_order(
        self, cart: CartStore, customer: Customer | None
    ) -> str:
        """Place an order for the cart contents and clear the cart.

        Returns the new order id.

        Raises:
            EmptyCartError: if the cart has no items.
            NotAuthenticatedError: if no customer is signed in.
            OrderFailedError: if the gateway fails or returns no id.
        """
        if cart.is_empty:
            raise EmptyCartError()
        if customer is None:
            raise NotAuthenticatedError()

        items = [
            OrderItem.from_product(line.product, line.quantity)
            for line in cart.items
        ]
        summary = summarize(cart)

        try:
            order_id = self.gateway.create_order(
                customer, items, summary.total
            )
        except Exception as exc:
            logger.error(
                "Order placement failed for %s", customer.id, exc_info=True
            )
            raise OrderFailedError(str(exc)) from exc

        if not order_id:
            raise OrderFailedError()

        cart.clear_cart()
        logger.info(
            "Placed order %s for %s (%d lines, total %s)",
            order_id,
            customer.id,
            len(items),
            summary.total,
        )
        return order_id


def current_customer() -> Customer | None:
    """The shopper configured for this session, if any."""
    if not Settings.CUSTOMER_ID:
        return None
    return Customer(
        id=Settings.CUSTOMER_ID,
        name=Settings.CUSTOMER_NAME or Settings.CUSTOMER_ID,
    )
