from typing import Iterable

from couriers.base import round_half_up, to_number
from schemas import CartItem, Parcel

FALLBACK_WEIGHT_KG = 0.3
MIN_DIMENSION_CM = 1
MIN_WEIGHT_KG = 0.1


def aggregate_parcel(items: Iterable[CartItem]) -> Parcel:
    """Reduce cart lines to one parcel.

    Dimensions take the per-axis maximum (items are assumed to stack), weight
    is the sum of unit weight times quantity. Products without shipping data
    count as 0.3 kg per unit and leave the dimensions alone.
    """
    length_cm = width_cm = height_cm = 0.0
    weight_kg = 0.0

    for item in items:
        shipping = item.product.shipping
        if shipping is None:
            weight_kg += FALLBACK_WEIGHT_KG * item.quantity
            continue
        length_cm = max(length_cm, to_number(shipping.lengthCm) or 0)
        width_cm = max(width_cm, to_number(shipping.widthCm) or 0)
        height_cm = max(height_cm, to_number(shipping.heightCm) or 0)
        weight_kg += (to_number(shipping.weightKg) or 0) * item.quantity

    return Parcel(
        lengthCm=max(MIN_DIMENSION_CM, round_half_up(length_cm)),
        widthCm=max(MIN_DIMENSION_CM, round_half_up(width_cm)),
        heightCm=max(MIN_DIMENSION_CM, round_half_up(height_cm)),
        weightKg=max(MIN_WEIGHT_KG, round(weight_kg, 2)),
    )
