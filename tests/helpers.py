"""Scripted upstream and envelope builders shared by the test suite."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx

from imagegate.core.config import GatewayConfig

CHAT_URL = "https://gateway.test/v1/chat/completions"
IMAGES_URL = "https://images.test/v1/images/generations"


class FakeUpstream:
    """Scripted stand-in for the AI providers.

    Responses (or exceptions) are queued in order and consumed one per
    request.  Every request is recorded for later assertions.  One
    ``httpx.AsyncClient`` is shared by every caller and closed by
    :meth:`close`.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response | Exception] = []
        self._client: httpx.AsyncClient | None = None

    def queue(self, *responses: httpx.Response | Exception) -> None:
        self._responses.extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(500, json={"error": "nothing queued"})
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return self._client

    def close(self) -> None:
        if self._client is not None:
            asyncio.run(self._client.aclose())
            self._client = None

    @property
    def auth_headers(self) -> list[str]:
        return [r.headers["Authorization"] for r in self.requests]

    def payload(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.requests[index].content)


def chat_image_response(url: str = "https://cdn.test/out.png", status: int = 200) -> httpx.Response:
    """Multimodal chat envelope carrying one image."""
    return httpx.Response(
        status,
        json={
            "choices": [
                {
                    "message": {
                        "role": "assistant",
                        "content": "",
                        "images": [{"type": "image_url", "image_url": {"url": url}}],
                    }
                }
            ]
        },
    )


def chat_text_response(text: str, status: int = 200) -> httpx.Response:
    """Text completion envelope."""
    return httpx.Response(
        status,
        json={"choices": [{"message": {"role": "assistant", "content": text}}]},
    )


def images_response(url: str | None = None, b64_json: str | None = None) -> httpx.Response:
    """Image generation envelope (``data[0].url`` / ``data[0].b64_json``)."""
    item: dict[str, str] = {}
    if url is not None:
        item["url"] = url
    if b64_json is not None:
        item["b64_json"] = b64_json
    return httpx.Response(200, json={"created": 0, "data": [item]})


def error_response(status: int, text: str = "upstream exploded: secret-internal-detail") -> httpx.Response:
    return httpx.Response(status, text=text)


def make_config(**overrides: Any) -> GatewayConfig:
    """Build a config isolated from the developer's environment and .env file."""
    values: dict[str, Any] = {
        "api_key": "primary-key",
        "backup_api_key": "backup-key",
        "chat_url": CHAT_URL,
        "images_url": IMAGES_URL,
    }
    values.update(overrides)
    return GatewayConfig(_env_file=None, **values)
