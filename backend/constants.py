PAYMENT_TRANSFER = "transferencia"
PAYMENT_CASH = "efectivo"
PAYMENT_METHODS = (PAYMENT_TRANSFER, PAYMENT_CASH)

DELIVERY_PICKUP = "retiro_colegio"
DELIVERY_CHILEXPRESS = "envio_chileexpress"
DELIVERY_STARKEN = "envio_starken"
# Courier shipment methods, keyed to the courier that quoted them
COURIER_DELIVERY_METHODS = {
    DELIVERY_CHILEXPRESS: "ChileExpress",
    DELIVERY_STARKEN: "Starken",
}
DELIVERY_METHODS = (DELIVERY_PICKUP, *COURIER_DELIVERY_METHODS)

ORDER_STATUSES = ("pending", "processing", "completed", "cancelled")
INITIAL_ORDER_STATUS = "pending"

MAX_ORDER_ITEMS = 50
TOTAL_EPSILON = 0.0001

DEFAULT_ORDERS_LIMIT = 5
MAX_ORDERS_LIMIT = 20
