# storefront/config/settings.py

"""Central configuration for the storefront."""

import os
from decimal import Decimal
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the storefront."""

    # --- Content API ---
    API_BASE_URL: str = os.getenv(
        "STOREFRONT_API_URL", "http://localhost:3001/api"
    ).rstrip("/")
    API_TOKEN: str = os.getenv("STOREFRONT_API_TOKEN", "")
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    HEALTH_SLOW_MS: float = 5000.0      # Latency above this is "slow"
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }
    HEALTH_ENDPOINTS: list[str] = ["/products", "/blog", "/software"]

    # --- Shopper ---
    CUSTOMER_ID: str = os.getenv("STOREFRONT_CUSTOMER_ID", "")
    CUSTOMER_NAME: str = os.getenv("STOREFRONT_CUSTOMER_NAME", "")

    # --- Cart & checkout ---
    NOTIFICATION_DURATION: float = 3.0  # Seconds a cart notice stays up
    SHIPPING_FLAT_RATE: Decimal = Decimal("5.00")
    TAX_RATE: Decimal = Decimal("0.08")
    CURRENCY_SYMBOL: str = "$"

    # --- Browsing & search ---
    SEARCH_DEBOUNCE: float = 0.3        # Seconds of input inactivity
    ALL_CATEGORIES: str = "All"
    SORT_OPTIONS: list[dict[str, str]] = [
        {"id": "featured", "label": "Featured"},
        {"id": "name", "label": "Name"},
        {"id": "price-low", "label": "Price: Low to High"},
        {"id": "price-high", "label": "Price: High to Low"},
    ]
    RESULT_TYPES: list[str] = ["product", "blog", "software"]

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("STOREFRONT_LOG_LEVEL", "WARNING").upper()
    LOG_LEVELS: dict[str, str] = {
        "storefront.cart": "DEBUG",       # every cart mutation
        "storefront.search": "DEBUG",     # per-collection match counts
        "storefront.filters": "INFO",     # per-keystroke filter noise off
        "storefront.api": "INFO",
        "storefront.ui": "INFO",
    }

    # --- Paths ---
    PACKAGE_DIR: Path = Path(__file__).resolve().parent.parent
    BASE_DIR: Path = PACKAGE_DIR.parent
    CATALOG_PATH: Path = PACKAGE_DIR / "data" / "catalog.json"
    RESULTS_DIR: Path = BASE_DIR / "results"
    ORDERS_DIR: Path = BASE_DIR / "orders"
    LOGS_DIR: Path = BASE_DIR / "logs"
