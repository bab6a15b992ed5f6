"""Tests for cart-to-parcel aggregation."""

from __future__ import annotations

import pytest

from schemas import CartItem, Product, ProductShipping
from services.package_service import aggregate_parcel


def _item(quantity: int, shipping: ProductShipping | None, product_id: str = "p") -> CartItem:
    product = Product(id=product_id, name=product_id, price=1000, shipping=shipping)
    return CartItem(product=product, quantity=quantity)


def test_takes_max_dimensions_and_sums_weights() -> None:
    parcel = aggregate_parcel(
        [
            _item(1, ProductShipping(lengthCm=10, widthCm=10, heightCm=10, weightKg=0.5), "a"),
            _item(1, ProductShipping(lengthCm=20, widthCm=5, heightCm=5, weightKg=0.3), "b"),
        ]
    )

    assert (parcel.lengthCm, parcel.widthCm, parcel.heightCm) == (20, 10, 10)
    assert parcel.weightKg == pytest.approx(0.8)


def test_weight_is_multiplied_by_quantity() -> None:
    parcel = aggregate_parcel(
        [
            _item(1, ProductShipping(lengthCm=10, widthCm=10, heightCm=10, weightKg=0.5), "a"),
            _item(2, ProductShipping(lengthCm=20, widthCm=5, heightCm=5, weightKg=0.3), "b"),
        ]
    )

    assert (parcel.lengthCm, parcel.widthCm, parcel.heightCm) == (20, 10, 10)
    assert parcel.weightKg == pytest.approx(1.1)


def test_items_without_shipping_only_add_fallback_weight() -> None:
    parcel = aggregate_parcel(
        [
            _item(3, None, "a"),
            _item(1, ProductShipping(lengthCm=15, widthCm=12, heightCm=4, weightKg=0.2), "b"),
        ]
    )

    assert (parcel.lengthCm, parcel.widthCm, parcel.heightCm) == (15, 12, 4)
    assert parcel.weightKg == pytest.approx(1.1)


def test_floors_apply_to_empty_or_tiny_carts() -> None:
    parcel = aggregate_parcel([])
    assert (parcel.lengthCm, parcel.widthCm, parcel.heightCm) == (1, 1, 1)
    assert parcel.weightKg == pytest.approx(0.1)

    tiny = aggregate_parcel(
        [_item(1, ProductShipping(lengthCm=0.2, widthCm=3.6, heightCm=1, weightKg=0.01))]
    )
    assert (tiny.lengthCm, tiny.widthCm, tiny.heightCm) == (1, 4, 1)
    assert tiny.weightKg == pytest.approx(0.1)
