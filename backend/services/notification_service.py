import logging
from typing import Optional

import httpx

from config import settings

logger = logging.getLogger("storefront")

NOTIFICATION_TIMEOUT_SECONDS = 10


async def send_discord_message(
    content: str,
    *,
    webhook_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> bool:
    """Post a preformatted block to the order webhook; False on any failure."""
    url = webhook_url or settings.discord_webhook_url
    if not url:
        logger.warning("DISCORD_WEBHOOK_URL is not configured; skipping notification")
        return False
    body = {
        "content": f"```\n{content}\n```",
        "allowed_mentions": {"parse": []},
    }
    try:
        async with httpx.AsyncClient(
            timeout=NOTIFICATION_TIMEOUT_SECONDS, transport=transport
        ) as client:
            response = await client.post(url, json=body)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Unable to send order notification: %s", exc)
        return False
    return True
