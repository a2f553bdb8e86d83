"""Inbound port — platform-agnostic event representation."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union


@dataclass
class Attachment:
    url: str
    filename: str
    content_type: Optional[str] = None


@dataclass
class ReferencedMessage:
    """A prior message that the current one replies to."""

    author_id: int
    author_name: str
    content: str
    attachments: Tuple[Attachment, ...] = ()


@dataclass
class PlainMessage:
    """Discord/Slack/CLI-agnostic chat message."""

    content: str
    channel_id: int
    author_id: int
    author_is_bot: bool = False
    attachments: Tuple[Attachment, ...] = ()
    mentioned_user_ids: Tuple[int, ...] = ()
    reference: Optional[ReferencedMessage] = None


@dataclass
class SlashCommand:
    name: str
    channel_id: int
    author_id: int
    options: Dict[str, str] = field(default_factory=dict)


InboundEvent = Union[PlainMessage, SlashCommand]
