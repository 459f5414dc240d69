# storefront/models/product.py

"""Product data model shared by the catalog, cart and search."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any


class Category(str, Enum):
    """Product categories offered by the store."""

    SMARTPHONES = "Smartphones"
    LAPTOPS = "Laptops"
    AUDIO = "Audio"
    ACCESSORIES = "Accessories"
    APPAREL = "Apparel"


class StockStatus(str, Enum):
    """Inventory availability shown on product cards."""

    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"


@dataclass(frozen=True)
class ProductColor:
    """A selectable colour swatch."""

    name: str
    css_class: str = ""


@dataclass(frozen=True)
class ProductReview:
    """A single customer review."""

    author: str
    rating: float
    text: str


@dataclass(frozen=True)
class ProductDetails:
    """Long-form product page content."""

    description: str = ""
    additional_info: tuple[str, ...] = ()
    reviews: tuple[ProductReview, ...] = ()


def to_decimal(value: Any) -> Decimal:
    """Convert a JSON number (or numeric string) to a Decimal price.

    Raises:
        ValueError: if the value is NaN or infinite.
    """
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if not amount.is_finite():
        raise ValueError(f"Non-finite amount: {value!r}")
    return amount


@dataclass(frozen=True)
class Product:
    """A catalog product. Immutable from the cart's point of view."""

    id: str
    name: str
    category: Category
    price: Decimal
    description: str = ""
    original_price: Decimal | None = None
    image_url: str = ""
    images: tuple[str, ...] = ()
    rating: float = 0.0
    review_count: int = 0
    tags: tuple[str, ...] = ()
    colors: tuple[ProductColor, ...] = ()
    sizes: tuple[str, ...] = ()
    stock_status: StockStatus = StockStatus.IN_STOCK
    details: ProductDetails | None = field(default=None, compare=False)

    @property
    def discount_percent(self) -> int:
        """Whole-percent markdown from the original price, 0 if none."""
        if self.original_price is None or self.original_price <= self.price:
            return 0
        saved = (self.original_price - self.price) / self.original_price
        return int((saved * 100).to_integral_value())

    @property
    def in_stock(self) -> bool:
        """True unless the product is marked out of stock."""
        return self.stock_status is not StockStatus.OUT_OF_STOCK

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Build a Product from a camelCase content API record."""
        details_data = data.get("details")
        details = None
        if isinstance(details_data, dict):
            details = ProductDetails(
                description=details_data.get("description") or "",
                additional_info=tuple(
                    details_data.get("additionalInfo") or ()
                ),
                reviews=tuple(
                    ProductReview(
                        author=r.get("author", ""),
                        rating=float(r.get("rating", 0)),
                        text=r.get("text", ""),
                    )
                    for r in details_data.get("reviews") or ()
                ),
            )

        original = data.get("originalPrice")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            category=Category(data["category"]),
            price=to_decimal(data.get("price", 0)),
            description=data.get("description") or "",
            original_price=(
                to_decimal(original) if original is not None else None
            ),
            image_url=data.get("imageUrl") or "",
            images=tuple(data.get("images") or ()),
            rating=float(data.get("rating", 0)),
            review_count=int(data.get("reviewCount", 0)),
            tags=tuple(data.get("tags") or ()),
            colors=tuple(
                ProductColor(name=c.get("name", ""), css_class=c.get("class", ""))
                for c in data.get("colors") or ()
            ),
            sizes=tuple(data.get("sizes") or ()),
            stock_status=StockStatus(
                data.get("stockStatus") or StockStatus.IN_STOCK.value
            ),
            details=details,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise back to the content API's camelCase shape."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "price": float(self.price),
            "imageUrl": self.image_url,
            "images": list(self.images),
            "description": self.description,
            "rating": self.rating,
            "reviewCount": self.review_count,
            "tags": list(self.tags),
            "stockStatus": self.stock_status.value,
            "colors": [
                {"name": c.name, "class": c.css_class} for c in self.colors
            ],
            "sizes": list(self.sizes),
        }
        if self.original_price is not None:
            data["originalPrice"] = float(self.original_price)
        if self.details is not None:
            data["details"] = {
                "description": self.details.description,
                "additionalInfo": list(self.details.additional_info),
                "reviews": [
                    {"author": r.author, "rating": r.rating, "text": r.text}
                    for r in self.details.reviews
                ],
            }
        return data
