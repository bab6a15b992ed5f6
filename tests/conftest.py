"""Pytest configuration for the storefront backend."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# Put backend/ on sys.path so modules import the same way the app does
backend_path = Path(__file__).parent.parent / "backend"
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))


@pytest.fixture
def order_data() -> Callable[..., dict[str, Any]]:
    """Build a valid pickup/transfer order body; keyword args override sections."""

    def _build(**overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "items": [{"id": "p-1", "name": "Cuaderno", "price": 10000, "quantity": 2}],
            "customer": {"name": "Ana Pérez", "phone": "+56911112222"},
            "delivery": {"method": "retiro_colegio"},
            "payment": {"method": "transferencia"},
            "total": 20000,
            "createdAt": "2026-10-19T12:00:00Z",
        }
        data.update(overrides)
        return data

    return _build
