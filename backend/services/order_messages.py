from typing import List, Optional
from urllib.parse import quote

from constants import COURIER_DELIVERY_METHODS, PAYMENT_CASH, PAYMENT_TRANSFER
from schemas import OrderPayload
from services.currency import format_clp
from services.order_validation import items_total

PAYMENT_LABELS = {
    PAYMENT_TRANSFER: "Transferencia",
    PAYMENT_CASH: "Efectivo",
}


def _customer_lines(payload: OrderPayload) -> List[str]:
    customer = payload.customer
    if customer is None:
        return []
    lines = [
        "Cliente:",
        f"- Nombre: {customer.name}",
        f"- Teléfono: {customer.phone}",
    ]
    if customer.email:
        lines.append(f"- Email: {customer.email}")
    if customer.address:
        lines.append(f"- Dirección: {customer.address}")
    if customer.notes:
        lines.append(f"- Comentarios: {customer.notes}")
    return lines


def _cash_lines(payload: OrderPayload) -> List[str]:
    cash = payload.payment.cash if payload.payment else None
    return [
        f"- Institución: {cash.institution if cash else ''}",
        f"- Curso: {cash.course if cash else ''}",
    ]


def build_order_summary(payload: OrderPayload, store_name: str) -> str:
    """Plain-text order summary for the store's notification channel."""
    lines: List[str] = [
        f"Nuevo pedido · {store_name}",
        f"Fecha: {payload.createdAt or ''}",
        "",
    ]
    lines.extend(_customer_lines(payload))
    lines.append("")

    lines.append("Productos:")
    for item in payload.items:
        lines.append(f"- {item.name} x{item.quantity} = {format_clp(item.price * item.quantity)}")
    lines.append("")

    delivery = payload.delivery
    lines.append("Entrega:")
    if delivery is not None and delivery.method in COURIER_DELIVERY_METHODS:
        courier = COURIER_DELIVERY_METHODS[delivery.method]
        lines.append(f"- Método: envío ({courier})")
        lines.append(f"- Comuna destino: {delivery.destinationComuna or ''}")
        if delivery.etaDays:
            lines.append(f"- Estimación: {delivery.etaDays} día(s)")
        if delivery.courierMeta and delivery.courierMeta.displayName:
            lines.append(f"- Opción: {delivery.courierMeta.displayName}")
        lines.append(f"- Envío: {format_clp(delivery.shippingCost or 0)}")
    else:
        lines.append("- Método: retiro en colegio")
        if delivery is not None and delivery.pickupCourse:
            lines.append(f"- Curso: {delivery.pickupCourse}")
    lines.append("")

    lines.append(f"Total: {format_clp(payload.total)}")
    lines.append("")

    method = payload.payment.method if payload.payment else ""
    lines.append(f"Pago: {method}")
    if method == PAYMENT_CASH:
        lines.extend(_cash_lines(payload))

    return "\n".join(lines)


def build_whatsapp_confirmation(payload: OrderPayload, store_name: str) -> str:
    """Message the customer sends to the store to confirm their order."""
    lines: List[str] = [
        "Hola, quería saber detalles de mi pedido.",
        "",
        f"--- Pedido {store_name} ---",
        "",
    ]
    lines.extend(_customer_lines(payload))
    lines.append("")

    lines.append("Productos:")
    for item in payload.items:
        lines.append(
            f"- {item.name} x{item.quantity} · {format_clp(item.price)} c/u"
            f" · Subtotal {format_clp(item.price * item.quantity)}"
        )
    lines.append("")
    lines.append(f"Subtotal productos: {format_clp(items_total(payload))}")

    delivery = payload.delivery
    pickup_course: Optional[str] = None
    if delivery is not None and delivery.method in COURIER_DELIVERY_METHODS:
        lines.append(f"Entrega: envío ({COURIER_DELIVERY_METHODS[delivery.method]})")
        if delivery.destinationComuna:
            lines.append(f"- Comuna destino: {delivery.destinationComuna}")
        if delivery.courierMeta and delivery.courierMeta.displayName:
            lines.append(f"- Opción: {delivery.courierMeta.displayName}")
        if delivery.etaDays:
            lines.append(f"- Estimación: {delivery.etaDays} día(s)")
        lines.append(f"Envío: {format_clp(delivery.shippingCost or 0)}")
    else:
        lines.append("Entrega: retiro en colegio")
        pickup_course = delivery.pickupCourse if delivery is not None else None
        if pickup_course:
            lines.append(f"- Curso: {pickup_course}")

    lines.append(f"Total: {format_clp(payload.total)}")
    method = payload.payment.method if payload.payment else ""
    lines.append(f"Pago: {PAYMENT_LABELS.get(method, method)}")
    if method == PAYMENT_CASH:
        lines.extend(_cash_lines(payload))
        lines.append("Retiro: en el colegio, al momento de recibir el dinero.")
    else:
        if pickup_course:
            lines.append(f"- Retiro en colegio, curso: {pickup_course}")
        lines.append("Transferencia: enviar comprobante por este WhatsApp una vez pagado.")

    lines.append("")
    lines.append("¿Me confirmas la recepción del pedido, por favor?")
    return "\n".join(lines)


def whatsapp_link(phone: str, text: str) -> str:
    digits = "".join(ch for ch in phone if ch.isdigit())
    return f"https://wa.me/{digits}?text={quote(text)}"
