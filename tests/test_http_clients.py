"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest

from pet_health_tracker.adapters.sheets_webhook_client import HttpxSheetsWebhookClient

ROWS = [
    {
        "date": "2024-01-01",
        "weight": 4.7,
        "totalCalories": 116.9,
        "snackInfo": "0",
        "totalWater": 152.4,
        "urineSize": "半拳",
        "stoolStatus": "正常",
        "notes": "換砂",
    }
]


def test_webhook_client_posts_rows_as_text() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"result": "success"})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxSheetsWebhookClient(
        url="https://script.example.com/exec", http_client=async_client
    )

    asyncio.run(client.post_rows(ROWS))

    request = seen[0]
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "text/plain;charset=utf-8"
    assert json.loads(request.content.decode("utf-8")) == ROWS
    assert "換砂".encode() in request.content


def test_webhook_client_raises_on_script_error() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"result": "error", "error": "Sheet missing"})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxSheetsWebhookClient(
        url="https://script.example.com/exec", http_client=async_client
    )

    with pytest.raises(RuntimeError, match="Sheet missing"):
        asyncio.run(client.post_rows(ROWS))


def test_webhook_client_raises_on_http_error() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="oops")

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxSheetsWebhookClient(
        url="https://script.example.com/exec", http_client=async_client
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.post_rows(ROWS))


def test_webhook_client_close() -> None:
    client = HttpxSheetsWebhookClient.create("https://script.example.com/exec")

    asyncio.run(client.close())

    assert client.http_client.is_closed


def test_webhook_client_rejects_non_json_reply() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>Sign in</html>")

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxSheetsWebhookClient(
        url="https://script.example.com/exec", http_client=async_client
    )

    with pytest.raises(RuntimeError, match="Spreadsheet upload failed"):
        asyncio.run(client.post_rows(ROWS))
