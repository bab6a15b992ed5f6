import math
from dataclasses import dataclass
from typing import Optional, Sequence

from config import settings
from constants import (
    COURIER_DELIVERY_METHODS,
    DELIVERY_METHODS,
    DELIVERY_PICKUP,
    MAX_ORDER_ITEMS,
    PAYMENT_CASH,
    PAYMENT_METHODS,
    TOTAL_EPSILON,
)
from schemas import OrderPayload


@dataclass(frozen=True)
class OrderValidationResult:
    ok: bool
    error: Optional[str] = None


def _valid() -> OrderValidationResult:
    return OrderValidationResult(ok=True)


def _invalid(reason: str) -> OrderValidationResult:
    return OrderValidationResult(ok=False, error=reason)


def _blank(value: Optional[str]) -> bool:
    return not str(value or "").strip()


def items_total(payload: OrderPayload) -> float:
    return sum(float(item.price) * float(item.quantity) for item in payload.items)


def validate_order(
    payload: OrderPayload,
    *,
    cash_enabled: Optional[bool] = None,
    cash_institutions: Optional[Sequence[str]] = None,
) -> OrderValidationResult:
    """Check an order the way the checkout submits it.

    Checks run in a fixed order and stop at the first failure. The total is
    recomputed here and must match what the client sent.
    """
    if cash_enabled is None:
        cash_enabled = settings.cash_payment_enabled
    if cash_institutions is None:
        cash_institutions = settings.cash_allowed_institutions

    if not payload.items:
        return _invalid("Carrito vacío.")
    if len(payload.items) > MAX_ORDER_ITEMS:
        return _invalid("Demasiados productos.")

    customer = payload.customer
    if customer is None:
        return _invalid("Faltan datos del cliente.")
    if _blank(customer.name):
        return _invalid("Nombre obligatorio.")
    if _blank(customer.phone):
        return _invalid("Teléfono obligatorio.")

    payment = payload.payment
    if payment is None:
        return _invalid("Falta método de pago.")
    if payment.method not in PAYMENT_METHODS:
        return _invalid("Método de pago inválido.")

    delivery = payload.delivery
    if delivery is None:
        return _invalid("Falta método de entrega.")
    if delivery.method not in DELIVERY_METHODS:
        return _invalid("Método de entrega inválido.")

    goods_total = items_total(payload)
    if not math.isfinite(goods_total) or goods_total <= 0:
        return _invalid("Total inválido.")

    shipping_cost = 0.0
    if delivery.method in COURIER_DELIVERY_METHODS:
        if _blank(delivery.destinationComuna):
            return _invalid("Falta comuna de destino para envío.")
        shipping_cost = delivery.shippingCost if delivery.shippingCost is not None else math.nan
        if not math.isfinite(shipping_cost) or shipping_cost <= 0:
            return _invalid("Costo de envío inválido.")

    # CLP has no subunits; the epsilon only matters for float inputs
    computed_total = goods_total + shipping_cost
    if not abs(computed_total - payload.total) <= TOTAL_EPSILON:
        return _invalid("Total no coincide.")

    if payment.method == PAYMENT_CASH:
        cash = payment.cash
        institution = cash.institution if cash else ""
        course = cash.course if cash else ""
        if not cash_enabled:
            return _invalid("Pago en efectivo no habilitado.")
        if institution not in cash_institutions:
            return _invalid("Pago en efectivo no válido para esa institución.")
        if _blank(course):
            return _invalid("Curso obligatorio para pago en efectivo.")
        if delivery.method != DELIVERY_PICKUP:
            return _invalid("Pago en efectivo requiere retiro en colegio.")

    return _valid()
