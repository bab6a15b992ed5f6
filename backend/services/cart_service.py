from typing import List

from schemas import CartItem


def cart_items_total(cart: List[CartItem]) -> int:
    return sum(item.product.price * item.quantity for item in cart)
