# storefront/cli/runner.py

"""Headless CLI for browsing the catalog and searching the site."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from storefront.config.settings import Settings
from storefront.filters.catalog_filter import (
    SortKey,
    available_categories,
    browse,
)
from storefront.models.content import Catalog
from storefront.models.product import Product
from storefront.models.search_result import ResultType, SearchResult
from storefront.services.content_client import ApiError, ContentClient
from storefront.services.site_search import SiteSearch, filter_by_type
from storefront.storage.catalog_loader import CatalogLoader
from storefront.storage.file_manager import FileManager

logger = logging.getLogger("storefront.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def load_catalog(remote: bool = False) -> Catalog:
    """Load content from the API when *remote*, else the bundled file."""
    if remote:
        return ContentClient().fetch_catalog()
    return CatalogLoader().load()


def _format_price(product: Product) -> str:
    return f"{Settings.CURRENCY_SYMBOL}{product.price:,.2f}"


def _products_to_dicts(products: list[Product]) -> list[dict[str, object]]:
    return [
        {
            "id": p.id,
            "name": p.name,
            "category": p.category.value,
            "price": float(p.price),
            "rating": p.rating,
            "stockStatus": p.stock_status.value,
        }
        for p in products
    ]


def _print_products_table(products: list[Product]) -> None:
    table = Table(
        title="Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", max_width=40)
    table.add_column("Category", style="magenta")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Rating", justify="center")
    table.add_column("Stock")

    for idx, p in enumerate(products, 1):
        price = _format_price(p)
        if p.discount_percent:
            price = f"{price} (-{p.discount_percent}%)"
        table.add_row(
            str(idx),
            p.name,
            p.category.value,
            price,
            f"{p.rating:.1f} ({p.review_count})",
            p.stock_status.value,
        )

    Console().print(table)


def _print_results_table(results: list[SearchResult]) -> None:
    table = Table(
        title="Search Results",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Type", style="magenta")
    table.add_column("Title", max_width=50)
    table.add_column("Description", max_width=60, style="dim")
    table.add_column("URL", overflow="fold")

    for idx, r in enumerate(results, 1):
        table.add_row(
            str(idx),
            r.type.value,
            r.title,
            r.description[:60],
            r.url,
        )

    Console().print(table)


def cli_browse(
    query: str,
    category: str,
    sort_key: str,
    output_format: str,
    remote: bool = False,
) -> int:
    """List filtered, sorted products. Returns an exit code."""
    try:
        catalog = load_catalog(remote)
    except (ApiError, OSError, ValueError) as exc:
        logger.error("Failed to load catalog: %s", exc, exc_info=True)
        _err.print(f"[red]Failed to load catalog: {exc}[/red]")
        return 1

    categories = available_categories(catalog.products)
    if category not in categories:
        _err.print(f"[red]Unknown category: {category}[/red]")
        _err.print(f"[dim]Available: {', '.join(categories)}[/dim]")
        return 1

    products = browse(catalog.products, query, category, SortKey(sort_key))
    if not products:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    _err.print(
        f"[green]✓ {len(products)} of {len(catalog.products)} products[/green]"
    )
    if output_format == "table":
        _print_products_table(products)
    else:
        json.dump(_products_to_dicts(products), sys.stdout, indent=2)
        sys.stdout.write("\n")
    return 0


def cli_search(
    query: str,
    result_type: str | None,
    output_format: str,
    output_dir: str | None,
    remote: bool = False,
) -> int:
    """Run a headless site search. Returns 0 on results, 1 otherwise."""
    if output_dir is not None:
        Settings.RESULTS_DIR = Path(output_dir)

    try:
        catalog = load_catalog(remote)
    except (ApiError, OSError, ValueError) as exc:
        logger.error("Failed to load catalog: %s", exc, exc_info=True)
        _err.print(f"[red]Failed to load catalog: {exc}[/red]")
        return 1

    _err.print(f"[bold]Searching:[/bold] {query}")
    outcome = SiteSearch.from_catalog(catalog).search(query)
    if outcome.error:
        _err.print(f"[red]{outcome.error}[/red]")
        return 1

    results = filter_by_type(
        outcome.results,
        ResultType(result_type) if result_type else None,
    )
    if not results:
        _err.print("[yellow]No results found.[/yellow]")
        return 1

    counts = ", ".join(
        f"{count} {kind.value}" for kind, count in outcome.counts_by_type().items()
    )
    _err.print(
        f"[green]✓ {len(results)} of {len(outcome.results)} results[/green]"
        f" [dim]({counts})[/dim]"
    )

    try:
        path = FileManager().save_search_results(query, results)
        _err.print(f"[dim]Saved → {path}[/dim]")
    except OSError as exc:
        logger.error("Save failed: %s", exc, exc_info=True)
        _err.print(f"[red]Save failed: {exc}[/red]")

    if output_format == "table":
        _print_results_table(results)
    else:
        json.dump(
            [r.to_dict() for r in results],
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    return 0


async def run_health_check() -> int:
    """Check the content API endpoints and print a status table."""
    from storefront.services.health_checker import HealthChecker

    _err.print(
        f"[bold]Checking content API at {Settings.API_BASE_URL}...[/bold]"
    )
    checker = HealthChecker()
    results = await checker.check_all()

    table = Table(
        title="Content API Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Endpoint", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]✅ OK[/green]"
        elif r.status == "slow":
            status = "[yellow]⚠️  SLOW[/yellow]"
        else:
            status = "[red]❌ DOWN[/red]"
            any_down = True

        latency = f"{r.latency_ms:.0f}ms" if r.latency_ms > 0 else "—"
        table.add_row(r.endpoint, status, latency, r.message)

    Console().print(table)
    return 1 if any_down else 0
