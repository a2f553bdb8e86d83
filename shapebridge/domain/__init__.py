"""Domain layer — pure Python, no framework dependencies."""

from shapebridge.domain.models import (
    AudioPart,
    ExtractedMedia,
    ImagePart,
    LocalReply,
    OutboundRequest,
    PlainText,
    Rejection,
    TextPart,
    TextWithAttachment,
)
from shapebridge.domain.media import MediaExtractor, build_asset_pattern, extract_media
from shapebridge.domain.normalizer import RequestNormalizer
from shapebridge.domain.relay import FAILURE_MESSAGE, RelayService

__all__ = [
    "AudioPart",
    "ExtractedMedia",
    "ImagePart",
    "LocalReply",
    "OutboundRequest",
    "PlainText",
    "Rejection",
    "TextPart",
    "TextWithAttachment",
    "MediaExtractor",
    "build_asset_pattern",
    "extract_media",
    "RequestNormalizer",
    "FAILURE_MESSAGE",
    "RelayService",
]
