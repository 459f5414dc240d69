# storefront/services/content_client.py

"""HTTP client for the storefront content API."""

import logging
from collections.abc import Collection
from decimal import Decimal
from typing import Any

from curl_cffi import requests as curl_requests
from curl_cffi.requests.exceptions import RequestException

from storefront.config.settings import Settings
from storefront.filters.product_validator import ProductValidator
from storefront.models.content import BlogPost, Catalog, SoftwareProduct
from storefront.models.order import Customer, OrderItem
from storefront.models.product import Product

logger = logging.getLogger("storefront.api")


class ApiError(Exception):
    """A failed content API call.

    ``status`` is the HTTP status code, or 0 for transport failures.
    """

    def __init__(self, message: str, status: int, data: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.data = data


class ContentClient:
    """Reads catalog collections and writes products and orders."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
    ) -> None:
        self.settings = Settings()
        self.base_url = (base_url or self.settings.API_BASE_URL).rstrip("/")
        self.token = self.settings.API_TOKEN if token is None else token
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def _headers(self) -> dict[str, str]:
        headers = dict(self.settings.DEFAULT_HEADERS)
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Returns ``None`` for ``204 No Content``.

        Raises:
            ApiError: on a non-2xx status or a transport failure.
        """
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(
                method,
                url,
                headers=self._headers(),
                json=payload,
                timeout=self.settings.REQUEST_TIMEOUT,
            )
        except (RequestException, OSError) as exc:
            logger.error("API request failed: %s %s", method, url, exc_info=True)
            raise ApiError(str(exc) or "Unknown error occurred", 0) from exc

        if not 200 <= resp.status_code < 300:
            message = f"API request failed with status {resp.status_code}"
            data: Any = None
            try:
                data = resp.json()
                if isinstance(data, dict) and data.get("message"):
                    message = str(data["message"])
            except ValueError:
                if resp.text:
                    message = resp.text
            logger.error(
                "API request failed: %s %s -> %d %s",
                method,
                url,
                resp.status_code,
                message,
            )
            raise ApiError(message, resp.status_code, data)

        if resp.status_code == 204:
            return None
        return resp.json()

    # ── Collections ──────────────────────────────────────

    def _records(self, path: str) -> list[dict[str, Any]]:
        body = self.request("GET", path)
        if not isinstance(body, list):
            logger.warning("Expected a list from %s, got %s", path, type(body).__name__)
            return []
        return [r for r in body if isinstance(r, dict)]

    def get_products(self) -> list[Product]:
        products: list[Product] = []
        for record in self._records("/products"):
            try:
                products.append(Product.from_dict(record))
            except (KeyError, ValueError, TypeError, ArithmeticError):
                logger.warning(
                    "Skipping malformed product record %r",
                    record.get("id"),
                    exc_info=True,
                )
        valid, _dropped = ProductValidator.validate(products)
        return valid

    def get_blog_posts(self) -> list[BlogPost]:
        return [BlogPost.from_dict(r) for r in self._records("/blog")]

    def get_software(self) -> list[SoftwareProduct]:
        return [SoftwareProduct.from_dict(r) for r in self._records("/software")]

    def fetch_catalog(self) -> Catalog:
        """Load all three collections from the API."""
        catalog = Catalog(
            products=self.get_products(),
            blog_posts=self.get_blog_posts(),
            software=self.get_software(),
        )
        logger.info(
            "Fetched catalog: %d products, %d posts, %d software",
            len(catalog.products),
            len(catalog.blog_posts),
            len(catalog.software),
        )
        return catalog

    # ── Admin product editor ─────────────────────────────

    def save_product(
        self,
        product: Product,
        existing_ids: Collection[str] = (),
    ) -> Product:
        """Create *product*, or update it when its id is already known.

        Raises:
            ValueError: if the product fails validation.
            ApiError: if the API rejects the request.
        """
        problems = ProductValidator.validate_product(product)
        if problems:
            raise ValueError("; ".join(problems))

        is_new = not product.id or product.id not in existing_ids
        if is_new:
            body = self.request("POST", "/products", product.to_dict())
        else:
            body = self.request(
                "PUT", f"/products/{product.id}", product.to_dict()
            )
        if not isinstance(body, dict):
            raise ApiError("API returned no product", 0)

        saved = Product.from_dict(body)
        logger.info(
            "%s product %s (%s)",
            "Created" if is_new else "Updated",
            saved.id,
            saved.name,
        )
        return saved

    def delete_product(self, product_id: str) -> None:
        self.request("DELETE", f"/products/{product_id}")
        logger.info("Deleted product %s", product_id)

    # ── Orders ───────────────────────────────────────────

    def create_order(
        self,
        customer: Customer,
        items: list[OrderItem],
        total: Decimal,
    ) -> str | None:
        """Submit an order and return its id; the server prices it."""
        body = self.request(
            "POST",
            "/orders",
            {
                "userId": customer.id,
                "customerName": customer.name,
                "items": [item.to_dict() for item in items],
                "total": float(total),
            },
        )
        if not isinstance(body, dict) or not body.get("id"):
            logger.error("Order API returned no id: %r", body)
            return None
        return str(body["id"])
