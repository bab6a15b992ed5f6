import time
from typing import Any, Awaitable, Callable, Dict, List, Optional

LOCALITY_TTL_SECONDS = 60 * 60 * 12

Locality = Dict[str, Any]


class LocalityCache:
    """Single locality table with a fetch timestamp.

    Refreshed lazily by ``get_or_load`` once the TTL has elapsed. Concurrent
    refreshes are allowed to race; the last write wins.
    """

    def __init__(
        self,
        ttl_seconds: int = LOCALITY_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._fetched_at: Optional[float] = None
        self._data: Optional[List[Locality]] = None

    @property
    def fetched_at(self) -> Optional[float]:
        return self._fetched_at

    def get(self) -> Optional[List[Locality]]:
        if self._data is None or self._fetched_at is None:
            return None
        if self._clock() - self._fetched_at >= self.ttl_seconds:
            return None
        return self._data

    def set(self, data: List[Locality]) -> None:
        self._data = data
        self._fetched_at = self._clock()

    def clear(self) -> None:
        self._data = None
        self._fetched_at = None

    async def get_or_load(
        self, loader: Callable[[], Awaitable[List[Locality]]]
    ) -> List[Locality]:
        cached = self.get()
        if cached is not None:
            return cached
        data = await loader()
        self.set(data)
        return data
