# storefront/models/order.py

"""Order and checkout totals models."""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

from storefront.models.product import Product, to_decimal

_CENTS = Decimal("0.01")


def round_cents(amount: Decimal) -> Decimal:
    """Round a money amount to two decimal places."""
    return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)


class OrderStatus(str, Enum):
    """Fulfilment states for an order."""

    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


@dataclass(frozen=True)
class Customer:
    """The signed-in shopper placing an order."""

    id: str
    name: str


@dataclass
class OrderItem:
    """A product snapshot taken at order time."""

    product_id: str
    name: str
    category: str
    price: Decimal
    quantity: int
    image_url: str = ""

    @classmethod
    def from_product(cls, product: Product, quantity: int) -> "OrderItem":
        return cls(
            product_id=product.id,
            name=product.name,
            category=product.category.value,
            price=product.price,
            quantity=quantity,
            image_url=product.image_url,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.product_id,
            "name": self.name,
            "category": self.category,
            "price": float(self.price),
            "imageUrl": self.image_url,
            "quantity": self.quantity,
        }


@dataclass
class Order:
    """A placed order."""

    id: str
    date: str
    customer_name: str
    user_id: str
    items: list[OrderItem] = field(default_factory=lambda: list[OrderItem]())
    total: Decimal = Decimal("0")
    status: OrderStatus = OrderStatus.PROCESSING

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "customerName": self.customer_name,
            "userId": self.user_id,
            "status": self.status.value,
            "items": [item.to_dict() for item in self.items],
            "total": float(self.total),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Order":
        return cls(
            id=str(data["id"]),
            date=data.get("date", ""),
            customer_name=data.get("customerName", ""),
            user_id=str(data.get("userId", "")),
            items=[
                OrderItem(
                    product_id=str(item.get("id", "")),
                    name=item.get("name", ""),
                    category=item.get("category", ""),
                    price=to_decimal(item.get("price", 0)),
                    quantity=int(item.get("quantity", 0)),
                    image_url=item.get("imageUrl", ""),
                )
                for item in data.get("items", [])
            ],
            total=to_decimal(data.get("total", 0)),
            status=OrderStatus(data.get("status", "Processing")),
        )


@dataclass(frozen=True)
class OrderSummary:
    """Checkout totals: subtotal, flat shipping, tax and grand total."""

    subtotal: Decimal
    shipping: Decimal
    taxes: Decimal
    total: Decimal

    @classmethod
    def from_subtotal(
        cls,
        subtotal: Decimal,
        shipping_rate: Decimal,
        tax_rate: Decimal,
    ) -> "OrderSummary":
        """Shipping applies only to a non-empty order."""
        shipping = shipping_rate if subtotal > 0 else Decimal("0")
        taxes = subtotal * tax_rate
        return cls(
            subtotal=round_cents(subtotal),
            shipping=round_cents(shipping),
            taxes=round_cents(taxes),
            total=round_cents(subtotal + shipping + taxes),
        )
