import asyncio
import logging
import math
from typing import Any, Dict, List, Optional, Union

from fastapi import HTTPException, status

from config import settings
from constants import (
    DEFAULT_ORDERS_LIMIT,
    INITIAL_ORDER_STATUS,
    MAX_ORDERS_LIMIT,
    ORDER_STATUSES,
)
from repositories.orders_repository import (
    fetch_orders as repo_fetch_orders,
    insert_order,
    update_order_status as repo_update_order_status,
)
from schemas import (
    CompactOrder,
    CompactOrderItem,
    OrderCreatedResponse,
    OrderPayload,
    OrderRecord,
    OrderStatus,
)
from services.notification_service import send_discord_message
from services.order_messages import (
    build_order_summary,
    build_whatsapp_confirmation,
    whatsapp_link,
)
from services.order_validation import validate_order
from supabase_client import SupabaseConfigError

logger = logging.getLogger("storefront")

NOTIFICATION_WARNING = "No se pudo enviar el pedido a Discord."


async def submit_order(payload: OrderPayload) -> OrderCreatedResponse:
    """Validate, store and announce an order.

    Storage failure rejects the order. A failed notification does not: the
    order stays created and the response carries a warning instead.
    """
    result = validate_order(payload)
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)

    record = {
        "status": INITIAL_ORDER_STATUS,
        "payload": payload.model_dump(exclude_none=True),
    }
    try:
        row = await asyncio.to_thread(insert_order, record)
    except SupabaseConfigError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    except Exception as exc:
        logger.exception("Failed to store order: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="No se pudo guardar el pedido.",
        ) from exc

    order_id = str(row["id"])
    logger.info("Order %s stored", order_id)

    content = "\n".join(
        [f"ID: {order_id}", "", build_order_summary(payload, settings.store_name)]
    )
    notified = await send_discord_message(content)

    whatsapp_url = None
    if settings.store_whatsapp_phone:
        whatsapp_url = whatsapp_link(
            settings.store_whatsapp_phone,
            build_whatsapp_confirmation(payload, settings.store_name),
        )

    return OrderCreatedResponse(
        id=order_id,
        warning=None if notified else NOTIFICATION_WARNING,
        whatsappUrl=whatsapp_url,
    )


def parse_limit(value: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_ORDERS_LIMIT
    if not math.isfinite(number) or number <= 0:
        return DEFAULT_ORDERS_LIMIT
    return min(MAX_ORDERS_LIMIT, max(1, math.floor(number)))


def _compact(row: Dict[str, Any]) -> CompactOrder:
    payload = row.get("payload") or {}
    customer = payload.get("customer") or {}
    return CompactOrder(
        id=str(row["id"]),
        name=customer.get("name") or "",
        phone=customer.get("phone") or "",
        items=[
            CompactOrderItem(name=item.get("name") or "", qty=item.get("quantity") or 0)
            for item in payload.get("items") or []
        ],
        total=payload.get("total") or 0,
        status=row.get("status") or "",
        createdAt=payload.get("createdAt") or row.get("created_at"),
    )


def _full(row: Dict[str, Any]) -> OrderRecord:
    return OrderRecord(
        id=str(row["id"]),
        status=row.get("status") or "",
        createdAt=row.get("created_at"),
        payload=row.get("payload") or {},
    )


async def list_orders(
    limit: Any = None,
    status_filter: Optional[str] = None,
    compact: bool = False,
) -> List[Union[CompactOrder, OrderRecord]]:
    try:
        rows = await asyncio.to_thread(
            repo_fetch_orders, parse_limit(limit), status_filter or None
        )
    except SupabaseConfigError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    except Exception as exc:
        logger.exception("Failed to read orders: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="No se pudieron leer pedidos.",
        ) from exc
    formatter = _compact if compact else _full
    return [formatter(row) for row in rows]


async def update_order_status(order_id: str, status_value: Optional[str]) -> OrderStatus:
    if not status_value or status_value not in ORDER_STATUSES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Estado inválido.")
    try:
        row = await asyncio.to_thread(repo_update_order_status, order_id, status_value)
    except SupabaseConfigError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    except Exception as exc:
        logger.exception("Failed to update order %s: %s", order_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="No se pudo actualizar el pedido.",
        ) from exc
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pedido no encontrado.")
    return OrderStatus(id=str(row["id"]), status=row["status"])
