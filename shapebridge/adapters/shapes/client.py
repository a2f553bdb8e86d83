"""Shapes API client using aiohttp — implements ShapesPort."""

import sys
from typing import Any, Optional

import aiohttp

from shapebridge.config import ShapesConfig
from shapebridge.domain.models import OutboundRequest

NO_RESPONSE = "No response from Shapes API."


def _log(msg: str):
    print(f"[shapes] {msg}", file=sys.stderr)


class ShapesAPIError(RuntimeError):
    def __init__(self, status: int, detail: str = ""):
        message = f"Shapes API returned HTTP {status}"
        super().__init__(f"{message}: {detail}" if detail else message)
        self.status = status
        self.detail = detail


def parse_reply(data: Any) -> str:
    """First choice's message text, or the fallback string."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return NO_RESPONSE
    if not isinstance(content, str) or not content.strip():
        return NO_RESPONSE
    return content


class ShapesClient:
    """Async client for the OpenAI-compatible Shapes chat completions endpoint."""

    def __init__(self, config: ShapesConfig, session: Optional[aiohttp.ClientSession] = None):
        self._config = config
        self._session = session
        self._owns_session = session is None

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url.rstrip('/')}/chat/completions"

    async def start(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    def build_payload(self, request: OutboundRequest) -> dict:
        return {
            "model": self._config.model,
            "messages": [{"role": "user", "content": request.message_content()}],
        }

    def build_headers(self, request: OutboundRequest) -> dict:
        return {
            "Authorization": f"Bearer {self._config.api_key}",
            **request.headers,
        }

    async def complete(self, request: OutboundRequest) -> str:
        await self.start()
        async with self._session.post(
            self.endpoint,
            json=self.build_payload(request),
            headers=self.build_headers(request),
        ) as resp:
            if resp.status >= 400:
                detail = (await resp.text())[:200]
                raise ShapesAPIError(resp.status, detail)
            try:
                data = await resp.json(content_type=None)
            except ValueError as e:
                raise ShapesAPIError(resp.status, f"invalid JSON body: {e}") from e
        reply = parse_reply(data)
        if reply == NO_RESPONSE:
            _log(f"empty reply for user={request.user_id} ch={request.channel_id}")
        return reply
