"""Spreadsheet webhook client used for backups."""

import json
from dataclasses import dataclass
from typing import Protocol

import httpx


class SheetsWebhookClient(Protocol):
    """Interface for the spreadsheet backup webhook."""

    async def post_rows(self, rows: list[dict[str, object]]) -> None:
        """Upload export rows to the spreadsheet."""


@dataclass
class HttpxSheetsWebhookClient:
    """HTTPX-backed client for a spreadsheet script web app."""

    url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, url: str) -> "HttpxSheetsWebhookClient":
        """Create a webhook client with a managed httpx session."""
        # Script web apps answer POSTs with a redirect to the result.
        return cls(url=url, http_client=httpx.AsyncClient(follow_redirects=True))

    async def post_rows(self, rows: list[dict[str, object]]) -> None:
        """Post rows as JSON text and check the script's result flag."""
        response = await self.http_client.post(
            self.url,
            content=json.dumps(rows, ensure_ascii=False).encode("utf-8"),
            headers={"Content-Type": "text/plain;charset=utf-8"},
            timeout=30,
        )
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise RuntimeError("Spreadsheet upload failed") from exc
        if not isinstance(payload, dict) or payload.get("result") != "success":
            error = payload.get("error") if isinstance(payload, dict) else None
            raise RuntimeError(error or "Spreadsheet upload failed")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
