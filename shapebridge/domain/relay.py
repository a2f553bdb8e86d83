"""Relay pipeline — one inbound event in, at most one action out.

normalize -> remote call -> media extraction, strictly in that order.
This is the single outer error boundary: unexpected failures are logged
and mapped to one generic user-facing message.
"""

import sys
import traceback
from typing import Optional

from shapebridge.domain.media import MediaExtractor
from shapebridge.domain.models import (
    LocalReply,
    OutboundAction,
    OutboundRequest,
    PlainText,
    Rejection,
)
from shapebridge.domain.normalizer import RequestNormalizer
from shapebridge.ports.inbound import InboundEvent
from shapebridge.ports.outbound import ShapesPort

FAILURE_MESSAGE = "Oops, something went wrong! Try again later."


def _log(msg: str):
    print(f"[relay] {msg}", file=sys.stderr)


class RelayService:
    """Stateless per-event pipeline; safe to share across concurrent events."""

    def __init__(self, normalizer: RequestNormalizer, shapes: ShapesPort, extractor: MediaExtractor):
        self.normalizer = normalizer
        self._shapes = shapes
        self._extractor = extractor

    def prepare(self, event: InboundEvent):
        """Normalize only. Lets adapters skip typing/defer for ignored events."""
        return self.normalizer.normalize(event)

    async def handle(self, event: InboundEvent) -> Optional[OutboundAction]:
        return await self.dispatch(self.prepare(event))

    async def dispatch(self, prepared) -> Optional[OutboundAction]:
        if prepared is None:
            return None
        if isinstance(prepared, (Rejection, LocalReply)):
            return PlainText(prepared.message)
        return await self._relay(prepared)

    async def _relay(self, request: OutboundRequest) -> OutboundAction:
        try:
            reply = await self._shapes.complete(request)
            return await self._extractor.build_action(reply)
        except Exception as e:
            _log(
                f"request failed (user={request.user_id} ch={request.channel_id}): "
                f"{type(e).__name__}: {e}\n{traceback.format_exc()}"
            )
            return PlainText(FAILURE_MESSAGE)
