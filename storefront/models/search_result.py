# storefront/models/search_result.py

"""Uniform search result projection across content collections."""

from dataclasses import dataclass, field
from enum import Enum


class ResultType(str, Enum):
    """Which collection a search result came from."""

    PRODUCT = "product"
    BLOG = "blog"
    SOFTWARE = "software"


@dataclass
class SearchResult:
    """Read-only view of a product, blog post or software entry."""

    id: str
    title: str
    description: str
    type: ResultType
    url: str
    image: str | None = None
    tags: list[str] = field(default_factory=lambda: list[str]())
    date: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Plain-dict form for JSON output."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "type": self.type.value,
            "url": self.url,
            "image": self.image,
            "tags": list(self.tags),
            "date": self.date,
        }


@dataclass
class SearchOutcome:
    """Container for one completed site search."""

    query: str
    results: list[SearchResult] = field(
        default_factory=lambda: list[SearchResult]()
    )
    loading: bool = False
    error: str | None = None

    def counts_by_type(self) -> dict[ResultType, int]:
        """Number of results per type, omitting empty types."""
        counts: dict[ResultType, int] = {}
        for result in self.results:
            counts[result.type] = counts.get(result.type, 0) + 1
        return counts
