# tests/conftest.py

"""Shared pytest fixtures for all storefront tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from storefront.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_output_dirs(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Point results, orders and logs at a per-test temp directory."""
    monkeypatch.setattr(Settings, "RESULTS_DIR", tmp_path / "results")
    monkeypatch.setattr(Settings, "ORDERS_DIR", tmp_path / "orders")
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    yield
