# tests/test_models.py

"""Tests for the product, content and order models."""

import unittest
from decimal import Decimal
from typing import Any

from storefront.models.content import BlogPost, Catalog, SoftwareProduct
from storefront.models.order import Order, OrderStatus, OrderSummary
from storefront.models.product import Category, Product, StockStatus


def _product_record(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": "prod_001",
        "name": "Cotton Jersey Top",
        "category": "Apparel",
        "price": 24.99,
        "originalPrice": 35.00,
        "imageUrl": "https://example.com/top.jpg",
        "images": ["https://example.com/top-1.jpg"],
        "description": "Relaxed silhouette.",
        "rating": 4.8,
        "reviewCount": 215,
        "tags": ["Best Seller"],
        "stockStatus": "Low Stock",
        "colors": [{"name": "Black", "class": "bg-black"}],
        "sizes": ["S", "M"],
        "details": {
            "description": "Long copy",
            "additionalInfo": ["Fit: relaxed"],
            "reviews": [{"author": "Jane", "rating": 5, "text": "Love it"}],
        },
    }
    record.update(overrides)
    return record


class TestProductModel(unittest.TestCase):
    """Product parsing and derived values."""

    def test_from_dict_all_fields(self) -> None:
        product = Product.from_dict(_product_record())
        self.assertEqual(product.id, "prod_001")
        self.assertEqual(product.category, Category.APPAREL)
        self.assertEqual(product.price, Decimal("24.99"))
        self.assertEqual(product.original_price, Decimal("35.0"))
        self.assertEqual(product.review_count, 215)
        self.assertEqual(product.stock_status, StockStatus.LOW_STOCK)
        self.assertEqual(product.colors[0].css_class, "bg-black")
        assert product.details is not None
        self.assertEqual(product.details.reviews[0].author, "Jane")

    def test_price_parsed_without_float_noise(self) -> None:
        product = Product.from_dict(_product_record(price=0.1))
        self.assertEqual(product.price, Decimal("0.1"))

    def test_defaults_for_optional_fields(self) -> None:
        product = Product.from_dict(
            {"id": "p", "name": "Bare", "category": "Audio", "price": 5}
        )
        self.assertIsNone(product.original_price)
        self.assertEqual(product.tags, ())
        self.assertEqual(product.stock_status, StockStatus.IN_STOCK)
        self.assertIsNone(product.details)

    def test_non_finite_price_raises(self) -> None:
        for price in ("NaN", "Infinity", "-inf"):
            with self.subTest(price=price):
                with self.assertRaises(ValueError):
                    Product.from_dict(_product_record(price=price))

    def test_non_finite_original_price_raises(self) -> None:
        with self.assertRaises(ValueError):
            Product.from_dict(_product_record(originalPrice="NaN"))

    def test_unknown_category_raises(self) -> None:
        with self.assertRaises(ValueError):
            Product.from_dict(_product_record(category="Furniture"))

    def test_discount_percent(self) -> None:
        product = Product.from_dict(
            _product_record(price=75, originalPrice=100)
        )
        self.assertEqual(product.discount_percent, 25)

    def test_no_discount_without_original_price(self) -> None:
        product = Product.from_dict(_product_record(originalPrice=None))
        self.assertEqual(product.discount_percent, 0)

    def test_in_stock(self) -> None:
        product = Product.from_dict(
            _product_record(stockStatus="Out of Stock")
        )
        self.assertFalse(product.in_stock)

    def test_to_dict_round_trips_key_fields(self) -> None:
        original = Product.from_dict(_product_record())
        again = Product.from_dict(original.to_dict())
        self.assertEqual(again, original)

    def test_products_are_hashable(self) -> None:
        product = Product.from_dict(_product_record())
        self.assertIn(product, {product})


class TestContentModels(unittest.TestCase):
    """BlogPost and SoftwareProduct tolerate malformed records."""

    def test_blog_post_non_string_fields_become_none(self) -> None:
        post = BlogPost.from_dict(
            {"id": "b1", "title": 42, "author": None, "tags": ["ok", 7]}
        )
        self.assertIsNone(post.title)
        self.assertIsNone(post.author)
        self.assertEqual(post.tags, ["ok"])

    def test_software_price_decimal(self) -> None:
        entry = SoftwareProduct.from_dict(
            {"id": "sw", "name": "Flow", "price": 9, "features": "nope"}
        )
        self.assertEqual(entry.price, Decimal("9"))
        self.assertEqual(entry.features, [])

    def test_software_bad_price_becomes_none(self) -> None:
        for price in ("NaN", "free"):
            with self.subTest(price=price):
                entry = SoftwareProduct.from_dict({"id": "sw", "price": price})
                self.assertIsNone(entry.price)

    def test_catalog_find_product(self) -> None:
        product = Product.from_dict(_product_record())
        catalog = Catalog(products=[product])
        self.assertIs(catalog.find_product("prod_001"), product)
        self.assertIsNone(catalog.find_product("missing"))


class TestOrderModels(unittest.TestCase):
    """OrderSummary arithmetic and Order serialisation."""

    def test_summary_with_items(self) -> None:
        summary = OrderSummary.from_subtotal(
            Decimal("35.00"), Decimal("5.00"), Decimal("0.08")
        )
        self.assertEqual(summary.subtotal, Decimal("35.00"))
        self.assertEqual(summary.shipping, Decimal("5.00"))
        self.assertEqual(summary.taxes, Decimal("2.80"))
        self.assertEqual(summary.total, Decimal("42.80"))

    def test_summary_empty_has_no_shipping(self) -> None:
        summary = OrderSummary.from_subtotal(
            Decimal("0"), Decimal("5.00"), Decimal("0.08")
        )
        self.assertEqual(summary.shipping, Decimal("0.00"))
        self.assertEqual(summary.total, Decimal("0.00"))

    def test_summary_rounds_to_cents(self) -> None:
        summary = OrderSummary.from_subtotal(
            Decimal("24.99"), Decimal("5.00"), Decimal("0.08")
        )
        self.assertEqual(summary.taxes, Decimal("2.00"))
        self.assertEqual(summary.total, Decimal("31.99"))

    def test_order_dict_round_trip(self) -> None:
        order = Order.from_dict(
            {
                "id": "o1",
                "date": "2024-07-28",
                "customerName": "Jane",
                "userId": "u1",
                "status": "Shipped",
                "items": [
                    {"id": "p1", "name": "Top", "category": "Apparel",
                     "price": 24.99, "quantity": 2}
                ],
                "total": 54.99,
            }
        )
        self.assertEqual(order.status, OrderStatus.SHIPPED)
        self.assertEqual(order.items[0].price, Decimal("24.99"))
        self.assertEqual(Order.from_dict(order.to_dict()), order)


if __name__ == "__main__":
    unittest.main()
