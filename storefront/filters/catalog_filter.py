# storefront/filters/catalog_filter.py

"""Product listing filters and sort orders for the browse page."""

import logging
from collections.abc import Callable, Iterable
from decimal import Decimal
from enum import Enum

from storefront.config.settings import Settings
from storefront.models.product import Product

logger = logging.getLogger("storefront.filters")


class SortKey(str, Enum):
    """Sort orders offered on the product listing."""

    FEATURED = "featured"
    NAME = "name"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"


def available_categories(products: Iterable[Product]) -> list[str]:
    """Return ``All`` followed by each category in first-seen order."""
    seen: list[str] = [Settings.ALL_CATEGORIES]
    for product in products:
        name = product.category.value
        if name not in seen:
            seen.append(name)
    return seen


class CatalogFilter:
    """Filter products by category and free-text query."""

    @staticmethod
    def matches(product: Product, query: str, category: str) -> bool:
        """Category match AND query found in the name or description."""
        if (
            category != Settings.ALL_CATEGORIES
            and product.category.value != category
        ):
            return False
        term = query.lower()
        return (
            term in product.name.lower()
            or term in product.description.lower()
        )

    @staticmethod
    def filter_products(
        products: list[Product],
        query: str = "",
        category: str = Settings.ALL_CATEGORIES,
    ) -> list[Product]:
        """Keep products that match *category* and contain *query*."""
        kept = [
            p for p in products if CatalogFilter.matches(p, query, category)
        ]
        logger.debug(
            "Catalog filter query=%r category=%s kept %d of %d",
            query,
            category,
            len(kept),
            len(products),
        )
        return kept


_SORTERS: dict[SortKey, tuple[Callable[[Product], str | Decimal], bool]] = {
    SortKey.NAME: (lambda p: p.name, False),
    SortKey.PRICE_LOW: (lambda p: p.price, False),
    SortKey.PRICE_HIGH: (lambda p: p.price, True),
}


class CatalogSorter:
    """Stable product orderings."""

    @staticmethod
    def sort(
        products: list[Product], sort_key: SortKey | str
    ) -> list[Product]:
        """Return a new list ordered by *sort_key*.

        ``featured`` keeps the source order exactly. Ties in every other
        order keep their relative source order.

        Raises:
            ValueError: if *sort_key* is not a known sort order.
        """
        key = SortKey(sort_key)
        if key is SortKey.FEATURED:
            return list(products)
        key_func, descending = _SORTERS[key]
        return sorted(products, key=key_func, reverse=descending)


def browse(
    products: list[Product],
    query: str = "",
    category: str = Settings.ALL_CATEGORIES,
    sort_key: SortKey | str = SortKey.FEATURED,
) -> list[Product]:
    """Filter then sort, as the product listing page does."""
    return CatalogSorter.sort(
        CatalogFilter.filter_products(products, query, category),
        sort_key,
    )
