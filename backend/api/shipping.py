from fastapi import APIRouter

from schemas import ShippingQuoteRequest, ShippingQuoteResponse
from services.shipping_service import quote_shipping

router = APIRouter(prefix="/api/order-quote", tags=["shipping"])


@router.post(
    "/{courier}",
    response_model=ShippingQuoteResponse,
    response_model_exclude_none=True,
)
async def create_quote(courier: str, payload: ShippingQuoteRequest) -> ShippingQuoteResponse:
    return await quote_shipping(courier, payload)
