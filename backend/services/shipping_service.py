from fastapi import HTTPException, status

from config import settings
from couriers import SUPPORTED_COURIERS, QuoteFailure, create_courier
from schemas import PackageDimensions, ShippingQuoteRequest, ShippingQuoteResponse
from services.cart_service import cart_items_total
from services.package_service import aggregate_parcel


def _complete_request(request: ShippingQuoteRequest) -> ShippingQuoteRequest:
    """Fill the store origin, and the parcel and declared value from cart items."""
    update = {}
    if not request.originComuna.strip() and settings.shipping_origin_comuna:
        update["originComuna"] = settings.shipping_origin_comuna
    if request.items:
        if request.package is None:
            parcel = aggregate_parcel(request.items)
            update["package"] = PackageDimensions(**parcel.model_dump())
        if request.declaredValueCLP is None:
            update["declaredValueCLP"] = cart_items_total(request.items)
    return request.model_copy(update=update) if update else request


async def quote_shipping(courier_name: str, request: ShippingQuoteRequest) -> ShippingQuoteResponse:
    if courier_name not in SUPPORTED_COURIERS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Courier no soportado.")

    request = _complete_request(request)
    outcome = await create_courier(courier_name).quote(request)
    if isinstance(outcome, QuoteFailure):
        raise HTTPException(status_code=outcome.status_code, detail=outcome.message)

    return ShippingQuoteResponse(
        provider=courier_name,
        originComuna=request.originComuna.strip(),
        destinationComuna=request.destinationComuna.strip(),
        options=outcome.options,
        recommended=outcome.recommended,
        estimated=outcome.estimated,
    )
