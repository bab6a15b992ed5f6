"""Tests for the Discord order notification."""

from __future__ import annotations

import json

import httpx
import pytest

from services.notification_service import send_discord_message

WEBHOOK = "https://discord.example/api/webhooks/1/abc"


@pytest.mark.asyncio
async def test_posts_code_block_without_mentions() -> None:
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["body"] = json.loads(request.content)
        return httpx.Response(204)

    sent = await send_discord_message(
        "ID: 1\nTotal: $20.000",
        webhook_url=WEBHOOK,
        transport=httpx.MockTransport(handler),
    )

    assert sent is True
    assert captured["url"] == WEBHOOK
    assert captured["body"] == {
        "content": "```\nID: 1\nTotal: $20.000\n```",
        "allowed_mentions": {"parse": []},
    }


@pytest.mark.asyncio
async def test_http_error_returns_false() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(429))

    sent = await send_discord_message("x", webhook_url=WEBHOOK, transport=transport)

    assert sent is False


@pytest.mark.asyncio
async def test_transport_error_returns_false() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timeout", request=request)

    sent = await send_discord_message(
        "x", webhook_url=WEBHOOK, transport=httpx.MockTransport(handler)
    )

    assert sent is False


@pytest.mark.asyncio
async def test_missing_webhook_returns_false(monkeypatch: pytest.MonkeyPatch) -> None:
    import dataclasses

    from services import notification_service

    monkeypatch.setattr(
        notification_service,
        "settings",
        dataclasses.replace(notification_service.settings, discord_webhook_url=None),
    )

    assert await send_discord_message("x") is False
