from .orders import router as orders_router
from .shipping import router as shipping_router

__all__ = [
    "orders_router",
    "shipping_router",
]
