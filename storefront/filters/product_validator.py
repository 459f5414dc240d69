# storefront/filters/product_validator.py

"""Product validation for the admin editor and catalog loading."""

import logging

from storefront.models.product import Product

logger = logging.getLogger("storefront.filters")


class ProductValidator:
    """Validate products before they are saved or shown."""

    @staticmethod
    def validate_product(product: Product) -> list[str]:
        """Return human-readable problems with *product*; empty if valid."""
        problems: list[str] = []
        if not product.name.strip():
            problems.append("Name is required")
        if not product.price.is_finite():
            problems.append("Price must be a number")
        elif product.price < 0:
            problems.append("Price cannot be negative")
        elif product.original_price is not None:
            if not product.original_price.is_finite():
                problems.append("Original price must be a number")
            elif product.original_price < product.price:
                problems.append("Original price cannot be below the price")
        if not 0 <= product.rating <= 5:
            problems.append("Rating must be between 0 and 5")
        if product.review_count < 0:
            problems.append("Review count cannot be negative")
        return problems

    @staticmethod
    def validate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Drop invalid products.

        Returns the valid products and the count of dropped items.
        """
        valid: list[Product] = []
        dropped = 0

        for product in products:
            problems = ProductValidator.validate_product(product)
            if problems:
                logger.debug(
                    "Dropped product %s (%s): %s",
                    product.id,
                    product.name,
                    "; ".join(problems),
                )
                dropped += 1
                continue
            valid.append(product)

        if dropped:
            logger.info(
                "Validation dropped %d invalid products",
                dropped,
            )

        return valid, dropped
