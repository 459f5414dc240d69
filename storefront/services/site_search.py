# storefront/services/site_search.py

"""Cross-collection site search over products, blog posts and software."""

import hashlib
import logging
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Any

from storefront.models.content import BlogPost, Catalog, SoftwareProduct
from storefront.models.product import Product
from storefront.models.search_result import (
    ResultType,
    SearchOutcome,
    SearchResult,
)

logger = logging.getLogger("storefront.search")

SEARCH_ERROR_MESSAGE = "An error occurred while searching. Please try again."


def _contains(value: Any, term: str) -> bool:
    """Case-insensitive substring test; non-strings never match."""
    return isinstance(value, str) and term in value.lower()


def _any_contains(values: Any, term: str) -> bool:
    if not isinstance(values, (list, tuple)):
        return False
    return any(_contains(v, term) for v in values)


def fallback_id(result_type: ResultType, index: int) -> str:
    """Deterministic id for a record that arrived without one."""
    digest = hashlib.sha1(
        f"{result_type.value}:{index}".encode()
    ).hexdigest()
    return f"{result_type.value}-{digest[:9]}"


# ── Per-collection matchers ──────────────────────────────


def product_matches(product: Product | None, term: str) -> bool:
    if product is None:
        return False
    return (
        _contains(getattr(product, "name", None), term)
        or _contains(getattr(product, "description", None), term)
        or _any_contains(getattr(product, "tags", None), term)
    )


def post_matches(post: BlogPost | None, term: str) -> bool:
    if post is None:
        return False
    return (
        _contains(post.title, term)
        or _contains(post.author, term)
        or _contains(post.content, term)
        or _any_contains(post.tags, term)
    )


def software_matches(entry: SoftwareProduct | None, term: str) -> bool:
    if entry is None:
        return False
    return (
        _contains(entry.name, term)
        or _contains(entry.description, term)
        or _any_contains(entry.features, term)
    )


# ── Projections ──────────────────────────────────────────


def product_to_result(product: Product, index: int) -> SearchResult:
    record_id = product.id or fallback_id(ResultType.PRODUCT, index)
    return SearchResult(
        id=record_id,
        title=product.name or "Unnamed Product",
        description=product.description or "No description available",
        type=ResultType.PRODUCT,
        url=f"/productDetail/{record_id}",
        image=product.image_url or None,
        tags=list(product.tags),
    )


def post_to_result(post: BlogPost, index: int) -> SearchResult:
    record_id = post.id or fallback_id(ResultType.BLOG, index)
    return SearchResult(
        id=record_id,
        title=post.title or "Untitled Post",
        description=(
            f"By {post.author}" if post.author else "No author specified"
        ),
        type=ResultType.BLOG,
        url=f"/blog/{record_id}",
        image=post.image_url,
        tags=list(post.tags),
        date=post.date,
    )


def software_to_result(entry: SoftwareProduct, index: int) -> SearchResult:
    record_id = entry.id or fallback_id(ResultType.SOFTWARE, index)
    return SearchResult(
        id=record_id,
        title=entry.name or "Unnamed Software",
        description=entry.description or "No description available",
        type=ResultType.SOFTWARE,
        url=f"/software/{record_id}",
        image=entry.image_url,
    )


# ── Ranking ──────────────────────────────────────────────


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _newest_posts_first(results: list[SearchResult]) -> list[SearchResult]:
    """Reorder dated blog results newest-first within their own slots.

    Positions held by anything else (products, software, undated posts)
    are left untouched.
    """
    slots = [
        i
        for i, r in enumerate(results)
        if r.type is ResultType.BLOG and _parse_date(r.date) is not None
    ]
    if len(slots) < 2:
        return results
    dated = sorted(
        (results[i] for i in slots),
        key=lambda r: _parse_date(r.date) or date.min,
        reverse=True,
    )
    ordered = list(results)
    for slot, result in zip(slots, dated):
        ordered[slot] = result
    return ordered


def rank_results(
    results: list[SearchResult], term: str
) -> list[SearchResult]:
    """Title matches first, then everything else; blog posts by recency."""
    needle = term.lower().strip()
    title_hits = [r for r in results if _contains(r.title, needle)]
    others = [r for r in results if not _contains(r.title, needle)]
    return _newest_posts_first(title_hits) + _newest_posts_first(others)


def filter_by_type(
    results: Sequence[SearchResult],
    result_type: ResultType | str | None,
) -> list[SearchResult]:
    """Narrow ranked results to one type without re-ranking."""
    if result_type is None:
        return list(results)
    wanted = ResultType(result_type)
    return [r for r in results if r.type is wanted]


class SiteSearch:
    """Searches the product, blog and software collections together."""

    def __init__(
        self,
        products: Iterable[Product | None] = (),
        blog_posts: Iterable[BlogPost | None] = (),
        software: Iterable[SoftwareProduct | None] = (),
    ) -> None:
        self.products = list(products)
        self.blog_posts = list(blog_posts)
        self.software = list(software)

    @classmethod
    def from_catalog(cls, catalog: Catalog) -> "SiteSearch":
        return cls(catalog.products, catalog.blog_posts, catalog.software)

    def _collect(self, term: str) -> list[SearchResult]:
        product_results = [
            product_to_result(p, i)
            for i, p in enumerate(self.products)
            if p is not None and product_matches(p, term)
        ]
        blog_results = [
            post_to_result(p, i)
            for i, p in enumerate(self.blog_posts)
            if p is not None and post_matches(p, term)
        ]
        software_results = [
            software_to_result(s, i)
            for i, s in enumerate(self.software)
            if s is not None and software_matches(s, term)
        ]
        logger.debug(
            "Search %r matched %d products, %d posts, %d software",
            term,
            len(product_results),
            len(blog_results),
            len(software_results),
        )
        return product_results + blog_results + software_results

    def search(self, term: str) -> SearchOutcome:
        """Run a search and return ranked results or a retryable error."""
        outcome = SearchOutcome(query=term)
        if not term or not term.strip():
            return outcome

        normalized = term.lower().strip()
        try:
            outcome.results = rank_results(
                self._collect(normalized), normalized
            )
        except Exception:
            logger.error("Search failed for %r", term, exc_info=True)
            outcome.results = []
            outcome.error = SEARCH_ERROR_MESSAGE

        logger.info(
            "Search %r returned %d results", term, len(outcome.results)
        )
        return outcome
