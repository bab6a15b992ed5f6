"""Tests for the shipping quote service."""

from __future__ import annotations

from typing import Any, List
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException

from couriers import Estimated, QuoteFailure, Quoted
from schemas import CartItem, PackageDimensions, Product, ShippingOption, ShippingQuoteRequest
from services import shipping_service

OPTION = ShippingOption(
    id=7,
    displayName="Domicilio normal",
    deliveryType="DOMICILIO",
    serviceType="NORMAL",
    price=4300,
    etaDays=2,
)


@pytest.fixture
def fake_courier(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    courier = MagicMock()
    courier.quote = AsyncMock(return_value=Quoted(options=[OPTION], recommended=OPTION))
    factory = MagicMock(return_value=courier)
    monkeypatch.setattr(shipping_service, "create_courier", factory)
    return courier


def _cart() -> List[CartItem]:
    product = Product(
        id="book",
        name="Cuaderno",
        price=2500,
        shipping={"lengthCm": 30, "widthCm": 20, "heightCm": 5, "weightKg": 0.4},
    )
    return [CartItem(product=product, quantity=2)]


@pytest.mark.asyncio
async def test_unknown_courier_is_not_found(fake_courier: MagicMock) -> None:
    request = ShippingQuoteRequest(originComuna="Providencia", destinationComuna="Ñuñoa")

    with pytest.raises(HTTPException) as exc_info:
        await shipping_service.quote_shipping("correos", request)

    assert exc_info.value.status_code == 404
    fake_courier.quote.assert_not_awaited()


@pytest.mark.asyncio
async def test_quote_response_shape(fake_courier: MagicMock) -> None:
    request = ShippingQuoteRequest(originComuna=" Providencia ", destinationComuna="Ñuñoa ")

    response = await shipping_service.quote_shipping("starken", request)

    assert response.ok is True
    assert response.provider == "starken"
    assert response.originComuna == "Providencia"
    assert response.destinationComuna == "Ñuñoa"
    assert response.options == [OPTION]
    assert response.recommended == OPTION
    assert response.estimated is False


@pytest.mark.asyncio
async def test_estimated_outcome_is_flagged(fake_courier: MagicMock) -> None:
    fake_courier.quote.return_value = Estimated(option=OPTION, reason="missing api key")
    request = ShippingQuoteRequest(originComuna="Providencia", destinationComuna="Ñuñoa")

    response = await shipping_service.quote_shipping("chileexpress", request)

    assert response.estimated is True
    assert response.options == [OPTION]


@pytest.mark.asyncio
async def test_package_and_value_derived_from_cart(fake_courier: MagicMock) -> None:
    request = ShippingQuoteRequest(
        originComuna="Providencia", destinationComuna="Ñuñoa", items=_cart()
    )

    await shipping_service.quote_shipping("starken", request)

    sent: ShippingQuoteRequest = fake_courier.quote.await_args.args[0]
    assert sent.package == PackageDimensions(lengthCm=30, widthCm=20, heightCm=5, weightKg=0.8)
    assert sent.declaredValueCLP == 5000


@pytest.mark.asyncio
async def test_explicit_package_wins_over_cart(fake_courier: MagicMock) -> None:
    package = PackageDimensions(lengthCm=10, widthCm=10, heightCm=10, weightKg=2)
    request = ShippingQuoteRequest(
        originComuna="Providencia",
        destinationComuna="Ñuñoa",
        package=package,
        declaredValueCLP=1000,
        items=_cart(),
    )

    await shipping_service.quote_shipping("starken", request)

    sent: ShippingQuoteRequest = fake_courier.quote.await_args.args[0]
    assert sent.package == package
    assert sent.declaredValueCLP == 1000


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("failure", "status_code"),
    [
        (QuoteFailure('Comuna de destino no encontrada: "Narnia".', 400), 400),
        (QuoteFailure("No se pudo cotizar el envío."), 502),
    ],
)
async def test_failure_becomes_http_error(
    fake_courier: MagicMock, failure: Any, status_code: int
) -> None:
    fake_courier.quote.return_value = failure
    request = ShippingQuoteRequest(originComuna="Providencia", destinationComuna="Narnia")

    with pytest.raises(HTTPException) as exc_info:
        await shipping_service.quote_shipping("starken", request)

    assert exc_info.value.status_code == status_code
    assert exc_info.value.detail == failure.message


@pytest.mark.asyncio
async def test_blank_origin_uses_store_comuna(
    fake_courier: MagicMock, monkeypatch: pytest.MonkeyPatch
) -> None:
    import dataclasses

    monkeypatch.setattr(
        shipping_service,
        "settings",
        dataclasses.replace(shipping_service.settings, shipping_origin_comuna="Macul"),
    )
    request = ShippingQuoteRequest(originComuna="  ", destinationComuna="Ñuñoa")

    response = await shipping_service.quote_shipping("starken", request)

    assert fake_courier.quote.await_args.args[0].originComuna == "Macul"
    assert response.originComuna == "Macul"
