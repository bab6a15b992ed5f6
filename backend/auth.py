import secrets

from fastapi import Header, HTTPException, status

from config import settings


async def require_order_api_key(
    x_api_key: str | None = Header(default=None),
) -> None:
    expected = settings.order_api_key
    if not expected:
        return
    if not x_api_key or not secrets.compare_digest(
        x_api_key.encode("utf-8"), expected.encode("utf-8")
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="No autorizado."
        )
