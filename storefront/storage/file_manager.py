# storefront/storage/file_manager.py

"""Handles writing search results, cart exports and local orders to disk."""

import csv
import json
import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.cart.store import CartStore
from storefront.config.settings import Settings
from storefront.models.order import Customer, Order, OrderItem
from storefront.models.search_result import SearchResult

logger = logging.getLogger("storefront.storage")


class FileManager:
    """Handles writing search results, cart exports and local orders to disk."""

    def __init__(self) -> None:
        self.results_dir: Path = Settings.RESULTS_DIR
        self.orders_dir: Path = Settings.ORDERS_DIR
        self.results_dir.mkdir(parents=True, exist_ok=True)
        self.orders_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(
            "FileManager initialised, results_dir=%s orders_dir=%s",
            self.results_dir,
            self.orders_dir,
        )

    def save_search_results(
        self, query: str, results: list[SearchResult]
    ) -> Path:
        """Save ranked search results to a timestamped JSON file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"search_{query.replace(' ', '_')}_{timestamp}.json"
        filepath = self.results_dir / filename

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(
                [r.to_dict() for r in results],
                f,
                ensure_ascii=False,
                indent=2,
            )

        logger.info(
            "Saved %d results for query '%s' to %s",
            len(results),
            query,
            filepath,
        )
        return filepath

    def export_cart_csv(self, cart: CartStore) -> Path:
        """Export the cart lines to a CSV file with a subtotal row."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.results_dir / f"cart_{timestamp}.csv"

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(
                ["Product ID", "Name", "Unit Price", "Quantity", "Line Total"]
            )
            for item in cart.items:
                writer.writerow(
                    [
                        item.product.id,
                        item.product.name,
                        f"{item.product.price:.2f}",
                        item.quantity,
                        f"{item.line_total:.2f}",
                    ]
                )
            writer.writerow(["", "Subtotal", "", cart.item_count, f"{cart.subtotal:.2f}"])

        logger.info(
            "Exported %d cart lines to %s", cart.line_count, filepath
        )
        return filepath

    def create_order(
        self,
        customer: Customer,
        items: list[OrderItem],
        total: Decimal,
    ) -> str | None:
        """Persist an order as JSON under ``orders/`` and return its id."""
        now = datetime.now()
        order = Order(
            id=f"order_{now.strftime('%Y%m%d%H%M%S%f')}",
            date=now.strftime("%Y-%m-%d"),
            customer_name=customer.name,
            user_id=customer.id,
            items=items,
            total=total,
        )
        filepath = self.orders_dir / f"{order.id}.json"
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(order.to_dict(), f, ensure_ascii=False, indent=2)

        logger.info("Saved order %s to %s", order.id, filepath)
        return order.id

    def load_order(self, order_id: str) -> Order:
        """Read back an order written by :meth:`create_order`."""
        with open(self.orders_dir / f"{order_id}.json", encoding="utf-8") as f:
            return Order.from_dict(json.load(f))
