from config import settings

from .base import Courier, CourierError, Estimated, QuoteFailure, QuoteOutcome, Quoted
from .chilexpress import ChilexpressCourier
from .locality_cache import LocalityCache
from .starken import StarkenCourier

SUPPORTED_COURIERS = ("chileexpress", "starken")

starken_localities = LocalityCache(ttl_seconds=settings.locality_cache_ttl_seconds)


def create_courier(name: str) -> Courier:
    if name == "chileexpress":
        return ChilexpressCourier(
            settings.chilexpress_api_key,
            rating_url=settings.chilexpress_rating_url,
            timeout=settings.courier_timeout_seconds,
        )
    if name == "starken":
        return StarkenCourier(
            starken_localities,
            base_url=settings.starken_base_url,
            timeout=settings.courier_timeout_seconds,
        )
    raise NotImplementedError(f"Courier {name} is not supported yet.")


__all__ = [
    "SUPPORTED_COURIERS",
    "ChilexpressCourier",
    "Courier",
    "CourierError",
    "Estimated",
    "LocalityCache",
    "QuoteFailure",
    "QuoteOutcome",
    "Quoted",
    "StarkenCourier",
    "create_courier",
    "starken_localities",
]
