"""Outbound ports — interfaces for external system adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shapebridge.domain.models import OutboundAction, OutboundRequest


@runtime_checkable
class ShapesPort(Protocol):
    """Interface for the remote conversational service."""

    async def complete(self, request: OutboundRequest) -> str: ...


@runtime_checkable
class AssetFetcherPort(Protocol):
    """Interface for downloading generated media."""

    async def fetch(self, url: str) -> bytes: ...


@runtime_checkable
class ResponderPort(Protocol):
    """Interface for delivering an action back to the originating channel."""

    async def send(self, action: OutboundAction) -> None: ...
