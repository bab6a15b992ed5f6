from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from schemas import ShippingOption, ShippingQuoteRequest

from .base import Courier, CourierError, QuoteOutcome, Quoted, round_half_up, to_number
from .comunas import normalize_comuna
from .locality_cache import Locality, LocalityCache

BASE_URL = "https://apiprod.starkenpro.cl"
UUID_PATH = "/quote/limitRequest/obtenerUUID/"
LOCALITIES_PATH = "/agency/agencyDls/localidades"
QUOTE_PATH = "/quote/new-cotizador/multiple/"

HOME_DELIVERY = "DOMICILIO"
STANDARD_SERVICE = "NORMAL"


def find_city_code(localities: List[Locality], comuna: str) -> Optional[int]:
    key = normalize_comuna(comuna, upper=True)
    for locality in localities:
        if normalize_comuna(locality.get("COMUNA"), upper=True) == key:
            return locality.get("CIUDCODIGO")
    return None


def pick_recommended(options: List[ShippingOption]) -> Optional[ShippingOption]:
    for option in options:
        if option.deliveryType == HOME_DELIVERY and option.serviceType == STANDARD_SERVICE:
            return option
    for option in options:
        if option.deliveryType == HOME_DELIVERY:
            return option
    return options[0] if options else None


def _optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _format_option(raw: Dict[str, Any]) -> ShippingOption:
    eta = to_number(raw.get("diasEntrega"))
    return ShippingOption(
        id=raw.get("idTarifa"),
        displayName=str(raw.get("nombre") or ""),
        deliveryType=str(raw.get("tipoEntrega") or ""),
        serviceType=str(raw.get("tipoServicio") or ""),
        price=round_half_up(to_number(raw.get("tarifa")) or 0),
        etaDays=int(eta) if eta is not None else None,
        paymentType=_optional_text(raw.get("tipoPago")),
        commitmentDate=_optional_text(raw.get("fechaCompromiso")),
    )


class StarkenCourier(Courier):
    """Locality-code courier.

    A quote takes a session uuid, the (cached) locality table to turn comunas
    into city codes, and a multi-parcel quote call. Comunas must match the
    table exactly after normalization.
    """

    name = "starken"

    def __init__(
        self,
        localities: LocalityCache,
        *,
        base_url: str = BASE_URL,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.localities = localities
        self.base_url = base_url.rstrip("/")

    async def _quote(self, request: ShippingQuoteRequest) -> QuoteOutcome:
        origin = request.originComuna.strip()
        destination = request.destinationComuna.strip()
        declared_value = to_number(request.declaredValueCLP)
        package = request.package

        if not origin:
            raise CourierError("Falta comuna de origen.", 400)
        if not destination:
            raise CourierError("Falta comuna de destino.", 400)
        if declared_value is None or declared_value <= 0:
            raise CourierError("Valor declarado inválido.", 400)

        dimensions = [
            to_number(package.lengthCm) if package else None,
            to_number(package.widthCm) if package else None,
            to_number(package.heightCm) if package else None,
            to_number(package.weightKg) if package else None,
        ]
        if not all(value is not None and value > 0 for value in dimensions):
            raise CourierError("Datos del paquete inválidos.", 400)
        length_cm, width_cm, height_cm, weight_kg = dimensions

        async with self._client() as client:
            uuid = await self._fetch_uuid(client)
            localities = await self.fetch_localities(client, uuid)

            origin_code = find_city_code(localities, origin)
            destination_code = find_city_code(localities, destination)
            if not origin_code:
                raise CourierError(f'Comuna de origen no encontrada: "{origin}".', 400)
            if not destination_code:
                raise CourierError(
                    f'Comuna de destino no encontrada: "{destination}".', 400
                )

            payload = {
                "codigoCiudadOrigen": origin_code,
                "codigoCiudadDestino": destination_code,
                "encargos": [
                    {
                        "alto": height_cm,
                        "largo": length_cm,
                        "ancho": width_cm,
                        "kilos": weight_kg,
                    }
                ],
                "valorDeclarado": declared_value,
                "uuid": uuid,
            }
            raw_options = await self._fetch_rates(client, payload)

        try:
            options = [_format_option(item) for item in raw_options if isinstance(item, dict)]
        except ValidationError as exc:
            raise CourierError("No se pudo cotizar el envío.", 502) from exc
        return Quoted(options=options, recommended=pick_recommended(options))

    async def _fetch_uuid(self, client: httpx.AsyncClient) -> str:
        response = await client.get(
            f"{self.base_url}{UUID_PATH}", headers={"Accept": "application/json"}
        )
        if response.is_error:
            raise CourierError("No se pudo obtener UUID de Starken.", 500)
        uuid = response.json().get("uuid_user")
        if not uuid:
            raise CourierError("UUID inválido desde Starken.", 500)
        return uuid

    async def fetch_localities(
        self, client: httpx.AsyncClient, uuid: str
    ) -> List[Locality]:
        async def _load() -> List[Locality]:
            response = await client.get(
                f"{self.base_url}{LOCALITIES_PATH}",
                headers={"Accept": "application/json", "uuid": uuid},
            )
            if response.is_error:
                raise CourierError("No se pudo cargar localidades de Starken.", 500)
            data = response.json().get("data")
            return data if isinstance(data, list) else []

        return await self.localities.get_or_load(_load)

    async def _fetch_rates(
        self, client: httpx.AsyncClient, payload: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        response = await client.post(
            f"{self.base_url}{QUOTE_PATH}",
            json=payload,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
        try:
            body = response.json()
        except ValueError:
            body = None
        if response.is_error or not isinstance(body, dict) or body.get("status") != 200:
            raise CourierError("No se pudo cotizar el envío.", 502)
        data = body.get("data")
        tarifas = data.get("tarifa") if isinstance(data, dict) else None
        return tarifas if isinstance(tarifas, list) else []
