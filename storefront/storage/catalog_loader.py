# storefront/storage/catalog_loader.py

"""Loads the bundled catalog of products, blog posts and software."""

import json
import logging
from pathlib import Path
from typing import Any

from storefront.config.settings import Settings
from storefront.filters.product_validator import ProductValidator
from storefront.models.content import BlogPost, Catalog, SoftwareProduct
from storefront.models.product import Product

logger = logging.getLogger("storefront.storage")


class CatalogLoader:
    """Reads a catalog JSON file with ``products``, ``blogPosts`` and ``software`` lists."""

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path or Settings.CATALOG_PATH

    def load(self) -> Catalog:
        """Parse the catalog file.

        Malformed product records are logged and skipped; a missing or
        unreadable file raises.
        """
        with open(self.path, encoding="utf-8") as f:
            raw: dict[str, Any] = json.load(f)

        products: list[Product] = []
        for record in raw.get("products", []):
            try:
                products.append(Product.from_dict(record))
            except (KeyError, ValueError, TypeError, ArithmeticError):
                logger.warning(
                    "Skipping malformed product record %r",
                    record.get("id") if isinstance(record, dict) else record,
                )
        products, _dropped = ProductValidator.validate(products)

        catalog = Catalog(
            products=products,
            blog_posts=[
                BlogPost.from_dict(r)
                for r in raw.get("blogPosts", [])
                if isinstance(r, dict)
            ],
            software=[
                SoftwareProduct.from_dict(r)
                for r in raw.get("software", [])
                if isinstance(r, dict)
            ],
        )
        logger.info(
            "Loaded catalog from %s: %d products, %d posts, %d software",
            self.path,
            len(catalog.products),
            len(catalog.blog_posts),
            len(catalog.software),
        )
        return catalog
