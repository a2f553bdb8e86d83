"""Port interfaces (Hexagonal Architecture)."""

from shapebridge.ports.inbound import (
    Attachment,
    InboundEvent,
    PlainMessage,
    ReferencedMessage,
    SlashCommand,
)
from shapebridge.ports.outbound import AssetFetcherPort, ResponderPort, ShapesPort

__all__ = [
    "Attachment",
    "InboundEvent",
    "PlainMessage",
    "ReferencedMessage",
    "SlashCommand",
    "AssetFetcherPort",
    "ResponderPort",
    "ShapesPort",
]
