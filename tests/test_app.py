# tests/test_app.py

"""Smoke tests for the TUI application using Textual's Pilot."""

import unittest
from decimal import Decimal
from unittest.mock import MagicMock, patch

from textual.widgets import (
    Button,
    DataTable,
    Input,
    Select,
    Static,
    TabbedContent,
)

from storefront.config.settings import Settings
from storefront.models.content import BlogPost, Catalog, SoftwareProduct
from storefront.models.order import Customer
from storefront.models.product import Category, Product, StockStatus
from storefront.models.search_result import ResultType
from storefront.ui.app import StorefrontApp


def _catalog() -> Catalog:
    return Catalog(
        products=[
            Product(
                id="p1", name="Blue Widget", category=Category.ACCESSORIES,
                price=Decimal("30"),
            ),
            Product(
                id="p2", name="Red Speaker", category=Category.AUDIO,
                price=Decimal("10"),
            ),
            Product(
                id="p3", name="Old Phone", category=Category.SMARTPHONES,
                price=Decimal("20"),
                stock_status=StockStatus.OUT_OF_STOCK,
            ),
        ],
        blog_posts=[
            BlogPost(
                id="b1", title="Speaker buying guide", author="Jane",
                date="2024-07-01", content="Why blue matters",
            )
        ],
        software=[SoftwareProduct(id="s1", name="Flow")],
    )


def _make_app(gateway: MagicMock | None = None) -> StorefrontApp:
    return StorefrontApp(
        catalog=_catalog(),
        gateway=gateway,
        customer=Customer(id="u1", name="Jane"),
    )


class TestStorefrontApp(unittest.IsolatedAsyncioTestCase):
    """Smoke tests for the Textual TUI."""

    async def test_app_composes_without_crash(self) -> None:
        """Verify the app starts and renders all widgets."""
        app = _make_app()
        async with app.run_test() as pilot:
            app.query_one("#tabs", TabbedContent)
            app.query_one("#product_query", Input)
            app.query_one("#category_select", Select)
            app.query_one("#sort_select", Select)
            app.query_one("#search_input", Input)
            app.query_one("#results_table", DataTable)
            app.query_one("#cart_table", DataTable)
            app.query_one("#cart_summary", Static)
            await pilot.pause()

    async def test_product_table_lists_catalog(self) -> None:
        app = _make_app()
        async with app.run_test() as pilot:
            table = app.query_one("#product_table", DataTable)
            self.assertEqual(table.row_count, 3)
            await pilot.pause()

    async def test_cycle_sort_reorders(self) -> None:
        """featured -> name orders the product table alphabetically."""
        app = _make_app()
        async with app.run_test() as pilot:
            app.action_cycle_sort()
            await pilot.pause()
            self.assertEqual(app.sort_key.value, "name")
            self.assertEqual(
                [p.id for p in app.visible_products], ["p1", "p3", "p2"]
            )

    async def test_product_query_filters(self) -> None:
        app = _make_app()
        async with app.run_test() as pilot:
            app.query_one("#product_query", Input).value = "speaker"
            await pilot.pause()
            self.assertEqual(
                [p.id for p in app.visible_products], ["p2"]
            )

    async def test_add_to_cart_updates_cart_table(self) -> None:
        app = _make_app()
        async with app.run_test() as pilot:
            app.action_add_to_cart()
            app.action_add_to_cart()
            await pilot.pause()
            self.assertEqual(app.cart.line_count, 1)
            self.assertEqual(app.cart.item_count, 2)
            self.assertEqual(
                app.query_one("#cart_table", DataTable).row_count, 1
            )
            self.assertIn("2", app.sub_title)

    async def test_out_of_stock_not_added(self) -> None:
        app = _make_app()
        async with app.run_test(notifications=True) as pilot:
            app.navigate("products", "p3")
            app.action_add_to_cart()
            await pilot.pause()
            self.assertTrue(app.cart.is_empty)

    async def test_run_search_populates_results(self) -> None:
        app = _make_app()
        async with app.run_test() as pilot:
            outcome = app.run_search("blue")
            await pilot.pause()
            self.assertEqual(
                [r.id for r in outcome.results], ["p1", "b1"]
            )
            self.assertEqual(
                app.query_one("#results_table", DataTable).row_count, 2
            )

    async def test_type_filter_buttons(self) -> None:
        app = _make_app()
        async with app.run_test() as pilot:
            app.query_one("#tabs", TabbedContent).active = "search"
            app.run_search("blue")
            await pilot.pause()
            app.query_one("#filter_blog", Button).press()
            await pilot.pause()
            self.assertEqual(app.result_filter, ResultType.BLOG)
            self.assertEqual([r.id for r in app.visible_results], ["b1"])
            app.query_one("#filter_all", Button).press()
            await pilot.pause()
            self.assertEqual(len(app.visible_results), 2)

    async def test_empty_search_warns(self) -> None:
        app = _make_app()
        async with app.run_test(notifications=True) as pilot:
            app.query_one("#tabs", TabbedContent).active = "search"
            await pilot.pause()
            app.query_one("#search_btn", Button).press()
            await pilot.pause()
            self.assertEqual(app.search_outcome.results, [])

    async def test_typing_searches_after_debounce(self) -> None:
        """Results appear only once the input has been idle long enough."""
        app = _make_app()
        async with app.run_test() as pilot:
            app.query_one("#tabs", TabbedContent).active = "search"
            app.query_one("#search_input", Input).value = "blue"
            await pilot.pause()
            self.assertEqual(app.visible_results, [])
            self.assertIsNotNone(app._search_timer)

            await pilot.pause(Settings.SEARCH_DEBOUNCE + 0.1)
            self.assertEqual(
                [r.id for r in app.visible_results], ["p1", "b1"]
            )
            self.assertIsNone(app._search_timer)

    async def test_submit_cancels_pending_search(self) -> None:
        """Submitting runs at once and the debounced run never fires."""
        app = _make_app()
        async with app.run_test() as pilot:
            app.query_one("#tabs", TabbedContent).active = "search"
            with patch.object(
                app.site_search, "search", wraps=app.site_search.search
            ) as search:
                app.query_one("#search_input", Input).value = "speaker"
                await pilot.pause()
                app.query_one("#search_btn", Button).press()
                await pilot.pause()
                self.assertEqual(search.call_count, 1)
                self.assertIsNone(app._search_timer)

                await pilot.pause(Settings.SEARCH_DEBOUNCE + 0.1)
                self.assertEqual(search.call_count, 1)
            self.assertEqual(
                [r.id for r in app.visible_results], ["p2", "b1"]
            )

    async def test_clearing_search_input_clears_results(self) -> None:
        app = _make_app()
        async with app.run_test() as pilot:
            app.query_one("#tabs", TabbedContent).active = "search"
            app.run_search("blue")
            await pilot.pause()
            self.assertEqual(len(app.visible_results), 2)

            app.query_one("#search_input", Input).value = "blue"
            await pilot.pause()
            app.query_one("#search_input", Input).value = ""
            await pilot.pause(Settings.SEARCH_DEBOUNCE + 0.1)
            self.assertEqual(app.visible_results, [])
            self.assertEqual(app.search_outcome.query, "")
            self.assertEqual(
                app.query_one("#results_table", DataTable).row_count, 0
            )

    async def test_navigate_to_unknown_product_stays_put(self) -> None:
        app = _make_app()
        async with app.run_test(notifications=True) as pilot:
            app.query_one("#product_query", Input).value = "speaker"
            await pilot.pause()
            app.navigate("products", "missing")
            await pilot.pause()
            self.assertEqual(
                app.query_one("#product_query", Input).value, "speaker"
            )
            self.assertEqual(
                [p.id for p in app.visible_products], ["p2"]
            )

    async def test_navigate_resets_filters_to_show_product(self) -> None:
        app = _make_app()
        async with app.run_test() as pilot:
            app.query_one("#product_query", Input).value = "speaker"
            await pilot.pause()
            app.navigate("products", "p1")
            await pilot.pause()
            self.assertEqual(app.active_page(), "products")
            self.assertEqual(
                app.query_one("#product_query", Input).value, ""
            )
            table = app.query_one("#product_table", DataTable)
            self.assertEqual(
                app.visible_products[table.cursor_row].id, "p1"
            )

    async def test_checkout_uses_gateway_and_clears_cart(self) -> None:
        gateway = MagicMock()
        gateway.create_order.return_value = "order_1"
        app = _make_app(gateway=gateway)
        async with app.run_test(notifications=True) as pilot:
            app.action_add_to_cart()
            app.action_checkout()
            await pilot.pause()
            gateway.create_order.assert_called_once()
            self.assertTrue(app.cart.is_empty)
            self.assertEqual(
                app.query_one("#cart_table", DataTable).row_count, 0
            )

    async def test_checkout_empty_cart_keeps_gateway_idle(self) -> None:
        gateway = MagicMock()
        app = _make_app(gateway=gateway)
        async with app.run_test(notifications=True) as pilot:
            app.action_checkout()
            await pilot.pause()
            gateway.create_order.assert_not_called()

    async def test_change_quantity_to_zero_removes_line(self) -> None:
        app = _make_app()
        async with app.run_test() as pilot:
            app.action_add_to_cart()
            app.action_change_quantity(1)
            self.assertEqual(app.cart.item_count, 2)
            app.action_change_quantity(-1)
            app.action_change_quantity(-1)
            await pilot.pause()
            self.assertTrue(app.cart.is_empty)


if __name__ == "__main__":
    unittest.main()
