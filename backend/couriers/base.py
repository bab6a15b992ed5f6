from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

import httpx

from schemas import ShippingOption, ShippingQuoteRequest

logger = logging.getLogger("storefront")

DEFAULT_TIMEOUT_SECONDS = 15.0


class CourierError(Exception):
    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class Quoted:
    options: List[ShippingOption]
    recommended: Optional[ShippingOption]
    estimated: bool = field(default=False, init=False)


@dataclass
class Estimated:
    option: ShippingOption
    reason: str
    estimated: bool = field(default=True, init=False)

    @property
    def options(self) -> List[ShippingOption]:
        return [self.option]

    @property
    def recommended(self) -> ShippingOption:
        return self.option


@dataclass
class QuoteFailure:
    message: str
    status_code: int = 502


QuoteOutcome = Union[Quoted, Estimated, QuoteFailure]


def to_number(value: Any) -> Optional[float]:
    try:
        if value is None or value == "":
            return None
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class Courier(ABC):
    name: str = ""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def quote(self, request: ShippingQuoteRequest) -> QuoteOutcome:
        try:
            return await self._quote(request)
        except CourierError as exc:
            return QuoteFailure(exc.message, exc.status_code)
        except Exception as exc:
            logger.exception("%s quote failed: %s", self.name, exc)
            return QuoteFailure(str(exc) or "Error al cotizar.", 500)

    @abstractmethod
    async def _quote(self, request: ShippingQuoteRequest) -> QuoteOutcome:
        raise NotImplementedError
