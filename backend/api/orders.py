from typing import Optional

from fastapi import APIRouter, Depends, Query

from auth import require_order_api_key
from schemas import (
    OrderCreatedResponse,
    OrderPayload,
    OrdersResponse,
    OrderStatusResponse,
    OrderStatusUpdate,
)
from services.orders_service import list_orders, submit_order, update_order_status

router = APIRouter(prefix="/api", tags=["orders"])


@router.post(
    "/order",
    response_model=OrderCreatedResponse,
    response_model_exclude_none=True,
)
async def create_order(payload: OrderPayload) -> OrderCreatedResponse:
    return await submit_order(payload)


@router.patch(
    "/order/{order_id}/status",
    response_model=OrderStatusResponse,
    dependencies=[Depends(require_order_api_key)],
)
async def change_order_status(order_id: str, payload: OrderStatusUpdate) -> OrderStatusResponse:
    order = await update_order_status(order_id, payload.status)
    return OrderStatusResponse(order=order)


@router.get(
    "/orders",
    response_model=OrdersResponse,
    dependencies=[Depends(require_order_api_key)],
)
async def read_orders(
    limit: Optional[str] = Query(default=None),
    status: Optional[str] = Query(default=None),
    compact: Optional[str] = Query(default=None),
) -> OrdersResponse:
    orders = await list_orders(limit, status, compact == "1")
    return OrdersResponse(orders=orders)
