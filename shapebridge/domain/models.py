"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class TextPart:
    text: str

    def to_payload(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ImagePart:
    url: str

    def to_payload(self) -> Dict[str, Any]:
        return {"type": "image_url", "image_url": {"url": self.url}}


@dataclass(frozen=True)
class AudioPart:
    url: str

    def to_payload(self) -> Dict[str, Any]:
        return {"type": "audio_url", "audio_url": {"url": self.url}}


ContentPart = Union[TextPart, ImagePart, AudioPart]


@dataclass
class OutboundRequest:
    """One user turn for the remote service."""

    user_id: int
    channel_id: int
    parts: List[ContentPart] = field(default_factory=list)

    @property
    def headers(self) -> Dict[str, str]:
        return {"X-User-Id": str(self.user_id), "X-Channel-Id": str(self.channel_id)}

    def message_content(self) -> Union[str, List[Dict[str, Any]]]:
        """A lone text part goes out as a plain string, anything else as a part list."""
        if len(self.parts) == 1 and isinstance(self.parts[0], TextPart):
            return self.parts[0].text
        return [part.to_payload() for part in self.parts]


@dataclass(frozen=True)
class Rejection:
    """Terminal normalization result: reply with guidance, skip the remote call."""

    message: str


@dataclass(frozen=True)
class LocalReply:
    """Reply produced without calling the remote service (e.g. /invite)."""

    message: str


NormalizeResult = Optional[Union[OutboundRequest, Rejection, LocalReply]]


@dataclass(frozen=True)
class ExtractedMedia:
    asset_url: str
    filename: str
    extension: str
    prose: str


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class TextWithAttachment:
    text: str
    data: bytes = field(repr=False)
    filename: str


OutboundAction = Union[PlainText, TextWithAttachment]
