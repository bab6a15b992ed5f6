from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from schemas import ShippingOption, ShippingQuoteRequest

from .base import (
    Courier,
    CourierError,
    Estimated,
    QuoteOutcome,
    Quoted,
    round_half_up,
    to_number,
)
from .comunas import normalize_comuna

logger = logging.getLogger("storefront")

RATING_URL = "https://testservices.wschilexpress.com/rating/api/v1.0/rates/courier"

ESTIMATE_BASE_CLP = 3500
ESTIMATE_PER_KG_CLP = 800
DEFAULT_WEIGHT_KG = 0.5
DEFAULT_DIMENSION_CM = 10
DEFAULT_ETA_DAYS = 2
PRODUCT_TYPE_PARCEL = 3
CONTENT_TYPE = 1
ALL_DELIVERY_TIMES = 0

# Coverage codes from the "Consultar Coberturas" API, keyed by normalized comuna
COVERAGE_CODES: Dict[str, str] = {
    "santiago": "STGO",
    "providencia": "PROV",
    "las condes": "LCON",
    "la florida": "LFLD",
    "puente alto": "PALT",
    "maipu": "MAIP",
    "vitacura": "VITA",
    "lo barnechea": "LBAR",
    "nunoa": "NUNO",
    "la reina": "LREI",
    "macul": "MACU",
    "san miguel": "SMIG",
    "pedro aguirre cerda": "PAGU",
    "independencia": "INDE",
    "recoleta": "RECO",
    "concon": "CONC",
    "vina del mar": "VINA",
    "vina": "VINA",
    "valparaiso": "VALE",
    "quilpue": "QUIL",
    "villa alemana": "VALE",
    "concepcion": "CONC",
    "talcahuano": "TALC",
    "temuco": "TEMU",
    "la serena": "SERE",
    "coquimbo": "COQU",
    "antofagasta": "ANTO",
    "iquique": "IQUI",
    "rancagua": "RANC",
    "curico": "CURI",
    "chillan": "CHIL",
    "osorno": "OSOR",
    "puerto montt": "PMON",
    "calama": "CALA",
    "copiapo": "COPI",
}


def coverage_code(comuna: str) -> Optional[str]:
    key = normalize_comuna(comuna)
    if not key:
        return None
    if key in COVERAGE_CODES:
        return COVERAGE_CODES[key]
    # "santiago centro" -> santiago
    for name, code in COVERAGE_CODES.items():
        if name in key or key in name:
            return code
    letters = re.sub(r"[^a-z]", "", key)
    if len(letters) >= 2:
        return letters[:4].upper()
    return None


def estimate_option(
    origin_comuna: str, destination_comuna: str, weight_kg: float
) -> ShippingOption:
    same_comuna = normalize_comuna(origin_comuna) == normalize_comuna(destination_comuna)
    return ShippingOption(
        id=1,
        displayName="ChileExpress estándar (estimado)",
        deliveryType="Domicilio",
        serviceType="Normal",
        price=round_half_up(ESTIMATE_BASE_CLP + weight_kg * ESTIMATE_PER_KG_CLP),
        etaDays=1 if same_comuna else 2,
    )


def _error_message(body: Any, fallback: str) -> str:
    if not isinstance(body, dict):
        return fallback
    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        joined = " ".join(str(item) for item in errors)
    else:
        joined = ""
    return body.get("statusDescription") or joined or fallback


def _format_option(raw: Dict[str, Any], index: int) -> ShippingOption:
    description = raw.get("serviceDescription")
    service_code = raw.get("serviceTypeCode")
    eta = raw.get("deliveryType")
    return ShippingOption(
        id=service_code if service_code is not None else index + 1,
        displayName=description or "ChileExpress",
        deliveryType="Domicilio",
        serviceType=description or "Normal",
        price=round_half_up(to_number(raw.get("serviceValue")) or 0),
        etaDays=eta if eta is not None else DEFAULT_ETA_DAYS,
    )


class ChilexpressCourier(Courier):
    """Distance-tier courier.

    Without an API key, or when the rating API fails or returns nothing, a
    single estimated option is returned so checkout is never blocked.
    """

    name = "chileexpress"

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        rating_url: str = RATING_URL,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.rating_url = rating_url

    async def _quote(self, request: ShippingQuoteRequest) -> QuoteOutcome:
        origin = request.originComuna.strip()
        destination = request.destinationComuna.strip()
        package = request.package
        weight_kg = (to_number(package.weightKg) if package else None) or DEFAULT_WEIGHT_KG
        length_cm = self._dimension(package.lengthCm if package else None)
        width_cm = self._dimension(package.widthCm if package else None)
        height_cm = self._dimension(package.heightCm if package else None)
        declared_value = max(0, round_half_up(to_number(request.declaredValueCLP) or 0))

        if not origin:
            raise CourierError("Falta comuna de origen.", 400)
        if not destination:
            raise CourierError("Falta comuna de destino.", 400)
        if not weight_kg > 0:
            raise CourierError("Peso del paquete inválido.", 400)

        if not self.api_key:
            return self._estimate(origin, destination, weight_kg, "missing api key")

        origin_code = coverage_code(origin)
        destination_code = coverage_code(destination)
        if not origin_code:
            raise CourierError(
                f'Comuna de origen no encontrada en cobertura: "{origin}".', 400
            )
        if not destination_code:
            raise CourierError(
                f'Comuna de destino no encontrada en cobertura: "{destination}".', 400
            )

        body = {
            "originCountyCode": origin_code,
            "destinationCountyCode": destination_code,
            "package": {
                "weight": f"{weight_kg:.2f}",
                "height": str(height_cm),
                "width": str(width_cm),
                "length": str(length_cm),
            },
            "productType": PRODUCT_TYPE_PARCEL,
            "contentType": CONTENT_TYPE,
            "declaredWorth": str(declared_value),
            "deliveryTime": ALL_DELIVERY_TIMES,
        }
        try:
            options = await self._fetch_rates(body)
        except CourierError as exc:
            return self._estimate(origin, destination, weight_kg, exc.message)
        if not options:
            return self._estimate(origin, destination, weight_kg, "no options returned")
        return Quoted(options=options, recommended=options[0])

    async def _fetch_rates(self, body: Dict[str, Any]) -> List[ShippingOption]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Ocp-Apim-Subscription-Key": self.api_key or "",
        }
        try:
            async with self._client() as client:
                response = await client.post(self.rating_url, json=body, headers=headers)
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise CourierError(str(exc) or "Error al llamar a ChileExpress.") from exc

        if response.is_error:
            raise CourierError(_error_message(data, f"HTTP {response.status_code}"))
        if not isinstance(data, dict):
            raise CourierError("Respuesta inválida de ChileExpress.")
        status_code = data.get("statusCode")
        if status_code is not None and status_code != 0:
            raise CourierError(_error_message(data, "Error en respuesta."))

        result = data.get("data") or {}
        raw_options = result.get("courierServiceOptions") if isinstance(result, dict) else None
        raw_options = raw_options or []
        if not isinstance(raw_options, list):
            raise CourierError("Respuesta inválida de ChileExpress.")
        try:
            return [
                _format_option(item, index)
                for index, item in enumerate(raw_options)
                if isinstance(item, dict)
            ]
        except ValidationError as exc:
            raise CourierError("Respuesta inválida de ChileExpress.") from exc

    @staticmethod
    def _dimension(value: Any) -> int:
        return max(1, round_half_up(to_number(value) or DEFAULT_DIMENSION_CM))

    def _estimate(
        self, origin: str, destination: str, weight_kg: float, reason: str
    ) -> Estimated:
        logger.warning(
            "Chilexpress quote %s -> %s falling back to estimate: %s",
            origin,
            destination,
            reason,
        )
        return Estimated(
            option=estimate_option(origin, destination, weight_kg), reason=reason
        )
