# storefront/models/content.py

"""Blog and software records served by the content collaborator.

Text fields are optional because records arrive from an external source
and search must tolerate missing values.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from storefront.models.product import Product, to_decimal


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _price_or_none(value: Any) -> Decimal | None:
    if value is None:
        return None
    try:
        return to_decimal(value)
    except (ValueError, ArithmeticError):
        return None


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


@dataclass
class BlogPost:
    """A blog article."""

    id: str | None = None
    title: str | None = None
    author: str | None = None
    date: str | None = None  # YYYY-MM-DD
    content: str | None = None
    excerpt: str | None = None
    image_url: str | None = None
    author_avatar_url: str | None = None
    tags: list[str] = field(default_factory=lambda: list[str]())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BlogPost":
        return cls(
            id=_str_or_none(data.get("id")),
            title=_str_or_none(data.get("title")),
            author=_str_or_none(data.get("author")),
            date=_str_or_none(data.get("date")),
            content=_str_or_none(data.get("content")),
            excerpt=_str_or_none(data.get("excerpt")),
            image_url=_str_or_none(data.get("imageUrl")),
            author_avatar_url=_str_or_none(data.get("authorAvatarUrl")),
            tags=_str_list(data.get("tags")),
        )


@dataclass
class SoftwareProduct:
    """A software offering listed alongside physical products."""

    id: str | None = None
    name: str | None = None
    description: str | None = None
    category: str | None = None
    price: Decimal | None = None
    pricing_model: str | None = None
    image_url: str | None = None
    logo_url: str | None = None
    features: list[str] = field(default_factory=lambda: list[str]())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SoftwareProduct":
        return cls(
            id=_str_or_none(data.get("id")),
            name=_str_or_none(data.get("name")),
            description=_str_or_none(data.get("description")),
            category=_str_or_none(data.get("category")),
            price=_price_or_none(data.get("price")),
            pricing_model=_str_or_none(data.get("pricingModel")),
            image_url=_str_or_none(data.get("imageUrl")),
            logo_url=_str_or_none(data.get("logoUrl")),
            features=_str_list(data.get("features")),
        )


@dataclass
class Catalog:
    """The three content collections the storefront reads."""

    products: list[Product] = field(default_factory=lambda: list[Product]())
    blog_posts: list[BlogPost] = field(
        default_factory=lambda: list[BlogPost]()
    )
    software: list[SoftwareProduct] = field(
        default_factory=lambda: list[SoftwareProduct]()
    )

    def find_product(self, product_id: str) -> Product | None:
        """Return the product with *product_id*, or ``None``."""
        for product in self.products:
            if product.id == product_id:
                return product
        return None
