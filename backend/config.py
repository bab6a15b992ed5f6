import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent / ".env")


def _get_list(name: str, fallback: str = "") -> List[str]:
    raw_value = os.getenv(name, fallback)
    if not raw_value:
        return []
    return [item.strip() for item in raw_value.split(",") if item.strip()]


def _get_bool(name: str, fallback: str = "false") -> bool:
    return os.getenv(name, fallback).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    supabase_url: str | None = os.getenv("SUPABASE_URL")
    supabase_service_role_key: str | None = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    discord_webhook_url: str | None = os.getenv("DISCORD_WEBHOOK_URL")
    order_api_key: str | None = os.getenv("ORDER_API_KEY")
    chilexpress_api_key: str | None = os.getenv("CHILEXPRESS_API_KEY")
    chilexpress_rating_url: str = os.getenv(
        "CHILEXPRESS_RATING_URL",
        "https://testservices.wschilexpress.com/rating/api/v1.0/rates/courier",
    )
    starken_base_url: str = os.getenv(
        "STARKEN_BASE_URL", "https://apiprod.starkenpro.cl"
    )
    courier_timeout_seconds: float = float(os.getenv("COURIER_TIMEOUT_SECONDS", "15"))
    locality_cache_ttl_seconds: int = int(
        os.getenv("LOCALITY_CACHE_TTL_SECONDS", str(60 * 60 * 12))
    )
    store_name: str = os.getenv("STORE_NAME", "Praktico")
    store_whatsapp_phone: str | None = os.getenv("STORE_WHATSAPP_PHONE")
    shipping_origin_comuna: str = os.getenv("SHIPPING_ORIGIN_COMUNA", "Providencia")
    cash_payment_enabled: bool = _get_bool("CASH_PAYMENT_ENABLED", "true")
    cash_allowed_institutions: List[str] = field(
        default_factory=lambda: _get_list(
            "CASH_ALLOWED_INSTITUTIONS",
            "Instituto de Humanidades Luis Campino (IHLC)",
        )
    )
    allowed_origins: List[str] = field(
        default_factory=lambda: _get_list("ALLOWED_ORIGINS", "*")
    )


settings = Settings()
