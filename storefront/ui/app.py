# storefront/ui/app.py

"""Terminal UI for browsing products, searching the site and checking out."""

import logging
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.timer import Timer
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Select,
    Static,
    TabbedContent,
    TabPane,
)

from storefront.cart.store import CartStore
from storefront.config.settings import Settings
from storefront.filters.catalog_filter import (
    SortKey,
    available_categories,
    browse,
)
from storefront.models.cart import Severity
from storefront.models.content import Catalog
from storefront.models.order import Customer
from storefront.models.product import Product
from storefront.models.search_result import (
    ResultType,
    SearchOutcome,
    SearchResult,
)
from storefront.services.checkout import (
    CheckoutError,
    CheckoutService,
    OrderGateway,
    current_customer,
    summarize,
)
from storefront.services.site_search import SiteSearch, filter_by_type
from storefront.storage.file_manager import FileManager

logger = logging.getLogger("storefront.ui")

_SEVERITY = {
    Severity.SUCCESS: "information",
    Severity.INFO: "information",
    Severity.ERROR: "error",
}

_SORT_CYCLE = list(SortKey)

_SEARCH_PROMPT = "Enter a search term to find what you need"


def _money(amount: object) -> str:
    return f"{Settings.CURRENCY_SYMBOL}{amount:,.2f}"


class StorefrontApp(App[object]):
    """Terminal UI for the storefront."""

    CSS_PATH = "styles.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("a", "add_to_cart", "Add to Cart"),
        Binding("plus", "change_quantity(1)", "+1"),
        Binding("minus", "change_quantity(-1)", "-1"),
        Binding("x", "remove_item", "Remove"),
        Binding("k", "clear_cart", "Clear Cart"),
        Binding("o", "cycle_sort", "Sort"),
        Binding("c", "checkout", "Checkout"),
        Binding("e", "export_cart", "Export Cart"),
    ]

    def __init__(
        self,
        catalog: Catalog,
        cart: CartStore | None = None,
        gateway: OrderGateway | None = None,
        customer: Customer | None = None,
    ) -> None:
        super().__init__()
        self.catalog = catalog
        self.cart = cart or CartStore()
        self.file_manager = FileManager()
        self.checkout = CheckoutService(gateway or self.file_manager)
        self.customer = customer if customer is not None else current_customer()
        self.site_search = SiteSearch.from_catalog(catalog)

        self.category: str = Settings.ALL_CATEGORIES
        self.sort_key: SortKey = SortKey.FEATURED
        self.visible_products: list[Product] = []
        self.search_outcome = SearchOutcome(query="")
        self.result_filter: ResultType | None = None
        self.visible_results: list[SearchResult] = []
        self._search_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        category_options = [
            (name, name) for name in available_categories(self.catalog.products)
        ]
        sort_options = [
            (opt["label"], opt["id"]) for opt in Settings.SORT_OPTIONS
        ]

        yield Header()
        with TabbedContent(initial="products", id="tabs"):
            with TabPane("Products", id="products"):
                yield Horizontal(
                    Input(placeholder="Search products...", id="product_query"),
                    Select(
                        category_options,
                        value=Settings.ALL_CATEGORIES,
                        allow_blank=False,
                        id="category_select",
                    ),
                    Select(
                        sort_options,
                        value=SortKey.FEATURED.value,
                        allow_blank=False,
                        id="sort_select",
                    ),
                    id="product_filters",
                )
                yield DataTable(
                    id="product_table",
                    zebra_stripes=True,
                    cursor_type="row",
                )
            with TabPane("Search", id="search"):
                yield Horizontal(
                    Input(
                        placeholder="Search products, software, blog posts, and more...",
                        id="search_input",
                    ),
                    Button("Search", variant="primary", id="search_btn"),
                    id="search_bar",
                )
                yield Horizontal(
                    Button("All", id="filter_all"),
                    *[
                        Button(kind.capitalize() + "s", id=f"filter_{kind}")
                        for kind in Settings.RESULT_TYPES
                    ],
                    id="type_filters",
                )
                yield Static(_SEARCH_PROMPT, id="search_status")
                yield DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                )
            with TabPane("Cart", id="cart"):
                yield DataTable(
                    id="cart_table",
                    zebra_stripes=True,
                    cursor_type="row",
                )
                yield Static("", id="cart_summary")
                yield Horizontal(
                    Button("Checkout", variant="success", id="checkout_btn"),
                    Button("Clear Cart", variant="error", id="clear_btn"),
                    id="cart_actions",
                )
        yield Footer()

    def _table(self, selector: str) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one(selector, DataTable),
        )

    def on_mount(self) -> None:
        """Configure table columns and render the initial state."""
        self._table("#product_table").add_columns(
            "Name", "Category", "Price", "Rating", "Stock"
        )
        self._table("#results_table").add_columns(
            "Type", "Title", "Description"
        )
        self._table("#cart_table").add_columns(
            "Product", "Unit Price", "Qty", "Line Total"
        )
        self.refresh_products()
        self.refresh_cart()

    # ── Navigation ───────────────────────────────────────

    def active_page(self) -> str:
        return self.query_one("#tabs", TabbedContent).active

    def navigate(self, page: str, item_id: str | None = None) -> None:
        """Switch to *page* and, for products, highlight *item_id*."""
        self.query_one("#tabs", TabbedContent).active = page
        if page == "products" and item_id is not None:
            product = self.catalog.find_product(item_id)
            if product is None:
                self.notify(f"Product {item_id} not found", severity="warning")
                return
            if product not in self.visible_products:
                # Reset filters so the target product is listed
                self.category = Settings.ALL_CATEGORIES
                self.query_one("#product_query", Input).value = ""
                self.query_one("#category_select", Select).value = self.category
                self.refresh_products()
            self._table("#product_table").move_cursor(
                row=self.visible_products.index(product)
            )
        logger.debug("Navigated to %s (%s)", page, item_id)

    # ── Products page ────────────────────────────────────

    def refresh_products(self) -> None:
        """Re-apply the query, category and sort to the product table."""
        query = self.query_one("#product_query", Input).value
        self.visible_products = browse(
            self.catalog.products, query, self.category, self.sort_key
        )
        table = self._table("#product_table")
        table.clear()
        for p in self.visible_products:
            price = Text(_money(p.price), style="bold green")
            if p.discount_percent:
                price.append(f" -{p.discount_percent}%", style="red")
            table.add_row(
                p.name,
                p.category.value,
                price,
                f"⭐ {p.rating:.1f} ({p.review_count})",
                p.stock_status.value,
                key=p.id,
            )

    def _selected_product(self) -> Product | None:
        row = self._table("#product_table").cursor_row
        if 0 <= row < len(self.visible_products):
            return self.visible_products[row]
        return None

    def on_select_changed(self, event: Select.Changed) -> None:
        """Apply category or sort changes."""
        if event.value is Select.BLANK:
            return
        if event.select.id == "category_select":
            self.category = str(event.value)
        elif event.select.id == "sort_select":
            self.sort_key = SortKey(event.value)
        self.refresh_products()

    def action_cycle_sort(self) -> None:
        """Step to the next product sort order."""
        idx = _SORT_CYCLE.index(self.sort_key)
        self.sort_key = _SORT_CYCLE[(idx + 1) % len(_SORT_CYCLE)]
        self.query_one("#sort_select", Select).value = self.sort_key.value
        self.refresh_products()

    def action_add_to_cart(self) -> None:
        """Add the highlighted product to the cart."""
        product = self._selected_product()
        if product is None:
            self.notify("Select a product first", severity="warning")
            return
        if not product.in_stock:
            self.notify(f"{product.name} is out of stock", severity="warning")
            return
        outcome = self.cart.add_to_cart(product)
        if outcome.changed:
            self._show_cart_notification()
        self.refresh_cart()

    # ── Search page ──────────────────────────────────────

    def on_input_changed(self, event: Input.Changed) -> None:
        """Live-filter products; debounce site search input."""
        if event.input.id == "product_query":
            self.refresh_products()
        elif event.input.id == "search_input":
            self._cancel_pending_search()
            term = event.value
            if term.strip():
                self._search_timer = self.set_timer(
                    Settings.SEARCH_DEBOUNCE,
                    lambda: self.run_search(term),
                )
            else:
                self._reset_search()

    def _reset_search(self) -> None:
        """An empty query shows no results."""
        self.search_outcome = SearchOutcome(query="")
        self.query_one("#search_status", Static).update(_SEARCH_PROMPT)
        self.populate_results()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in the search box searches immediately."""
        if event.input.id == "search_input":
            self._submit_search()

    def _cancel_pending_search(self) -> None:
        if self._search_timer is not None:
            self._search_timer.stop()
            self._search_timer = None

    def _submit_search(self) -> None:
        self._cancel_pending_search()
        term = self.query_one("#search_input", Input).value.strip()
        if not term:
            self.notify("Please enter a search term", severity="warning")
            return
        self.run_search(term)

    def run_search(self, term: str) -> SearchOutcome:
        """Search all collections and show the ranked results."""
        self._search_timer = None
        status = self.query_one("#search_status", Static)
        outcome = self.site_search.search(term)
        self.search_outcome = outcome

        if outcome.error:
            status.update(f"❌ {outcome.error}")
            self.notify(outcome.error, severity="error")
        elif not outcome.results:
            status.update(f"No results for \"{term}\"")
        else:
            counts = ", ".join(
                f"{kind.value.capitalize()}s ({count})"
                for kind, count in outcome.counts_by_type().items()
            )
            status.update(
                f"Showing {len(outcome.results)} results for \"{term}\": {counts}"
            )
        self.populate_results()
        return outcome

    def populate_results(self) -> None:
        """Fill the results table, honouring the active type filter."""
        self.visible_results = filter_by_type(
            self.search_outcome.results, self.result_filter
        )
        table = self._table("#results_table")
        table.clear()
        for r in self.visible_results:
            table.add_row(
                r.type.value.upper(),
                r.title[:60],
                r.description[:80],
            )

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Open a selected search result."""
        if event.data_table.id != "results_table":
            return
        if not 0 <= event.cursor_row < len(self.visible_results):
            return
        result = self.visible_results[event.cursor_row]
        if result.type is ResultType.PRODUCT:
            self.navigate("products", result.id)
        else:
            self.notify(f"{result.title}: {result.url}")

    # ── Cart page ────────────────────────────────────────

    def refresh_cart(self) -> None:
        """Redraw cart lines and totals."""
        table = self._table("#cart_table")
        table.clear()
        for item in self.cart.items:
            table.add_row(
                item.product.name,
                _money(item.product.price),
                str(item.quantity),
                _money(item.line_total),
                key=item.product.id,
            )

        summary = summarize(self.cart)
        self.query_one("#cart_summary", Static).update(
            f"Items: {self.cart.item_count}   "
            f"Subtotal: {_money(summary.subtotal)}   "
            f"Shipping: {_money(summary.shipping)}   "
            f"Taxes: {_money(summary.taxes)}   "
            f"Total: {_money(summary.total)}"
        )
        self.sub_title = f"🛒 {self.cart.item_count}"

    def _selected_line_id(self) -> str | None:
        items = self.cart.items
        row = self._table("#cart_table").cursor_row
        if 0 <= row < len(items):
            return items[row].product.id
        return None

    def action_change_quantity(self, delta: int) -> None:
        """Bump the highlighted cart line up or down."""
        product_id = self._selected_line_id()
        if product_id is None:
            return
        line = self.cart.get_item(product_id)
        if line is None:
            return
        self.cart.update_quantity(product_id, line.quantity + delta)
        self.refresh_cart()

    def action_remove_item(self) -> None:
        """Remove the highlighted cart line."""
        product_id = self._selected_line_id()
        if product_id is None:
            self.notify("Select a cart item first", severity="warning")
            return
        self.cart.remove_from_cart(product_id)
        self.refresh_cart()

    def action_clear_cart(self) -> None:
        self.cart.clear_cart()
        self.refresh_cart()

    def action_checkout(self) -> None:
        """Place an order for the cart contents."""
        try:
            order_id = self.checkout.place_order(self.cart, self.customer)
        except CheckoutError as exc:
            self.notify(str(exc), severity="error")
            return
        self.refresh_cart()
        self.notify(f"Order {order_id} placed. Thank you!")

    def action_export_cart(self) -> None:
        """Export the cart to CSV."""
        if self.cart.is_empty:
            self.notify("Your cart is empty", severity="warning")
            return
        try:
            path = self.file_manager.export_cart_csv(self.cart)
        except OSError as exc:
            logger.error("Failed to export cart", exc_info=True)
            self.notify(f"Export failed: {exc}", severity="error")
            return
        self.notify(f"Exported to {path}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        button_id = event.button.id or ""
        if button_id == "search_btn":
            self._submit_search()
        elif button_id.startswith("filter_"):
            kind = button_id.removeprefix("filter_")
            self.result_filter = None if kind == "all" else ResultType(kind)
            self.populate_results()
        elif button_id == "checkout_btn":
            self.action_checkout()
        elif button_id == "clear_btn":
            self.action_clear_cart()

    def _show_cart_notification(self) -> None:
        note = self.cart.notification
        if note.is_open:
            self.notify(
                note.message,
                severity=_SEVERITY[note.severity],
                timeout=Settings.NOTIFICATION_DURATION,
            )
