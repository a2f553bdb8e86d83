"""Request normalization — inbound event -> OutboundRequest.

Pure Python, no framework dependencies. Every decision that can end an
interaction before the remote call (ignore, reject, answer locally) is
made here.
"""

import re
from typing import Iterable, Optional

from shapebridge.domain.commands import (
    COMMANDS,
    IMAGINE_USAGE,
    UNKNOWN_COMMAND,
    build_directive,
    invite_text,
    split_command,
)
from shapebridge.domain.models import (
    AudioPart,
    ContentPart,
    ImagePart,
    LocalReply,
    NormalizeResult,
    OutboundRequest,
    Rejection,
    TextPart,
)
from shapebridge.ports.inbound import Attachment, InboundEvent, PlainMessage, SlashCommand

MENTION_RE = re.compile(r"<@!?[0-9]+>")

FILLER_PROMPT = "What's up?"
IMAGE_PROMPT = "What's in this image?"
UNSUPPORTED_ATTACHMENT = (
    "Sorry, only image attachments or audio files (mp3, wav, ogg) are supported."
)

IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp", "bmp"}
AUDIO_EXTENSIONS = {"mp3", "wav", "ogg"}
AUDIO_CONTENT_TYPES = {
    "audio/mpeg",
    "audio/mp3",
    "audio/wav",
    "audio/wave",
    "audio/x-wav",
    "audio/vnd.wave",
    "audio/ogg",
    "application/ogg",
}


def _extension(filename: str) -> str:
    _, dot, ext = filename.rpartition(".")
    return ext.lower() if dot else ""


def classify_attachment(attachment: Attachment) -> Optional[str]:
    """Return "image", "audio", or None for unsupported attachments."""
    content_type = (attachment.content_type or "").split(";")[0].strip().lower()
    ext = _extension(attachment.filename)
    if content_type.startswith("image/") or ext in IMAGE_EXTENSIONS:
        return "image"
    if ext in AUDIO_EXTENSIONS or content_type in AUDIO_CONTENT_TYPES:
        return "audio"
    return None


def strip_mentions(text: str) -> str:
    return MENTION_RE.sub("", text).strip()


class RequestNormalizer:
    """Turns slash commands and chat messages into one OutboundRequest.

    ``normalize`` returns None for events the bot should ignore, a
    Rejection or LocalReply for events answered without the remote
    service, and an OutboundRequest otherwise.
    """

    def __init__(self, bot_user_id: int, command_prefix: str = "!", invite_url: str = ""):
        self.bot_user_id = bot_user_id
        self.command_prefix = command_prefix
        self.invite_url = invite_url

    def normalize(self, event: InboundEvent) -> NormalizeResult:
        if isinstance(event, SlashCommand):
            return self._normalize_slash(event)
        if isinstance(event, PlainMessage):
            return self._normalize_message(event)
        raise TypeError(f"unsupported event type: {type(event).__name__}")

    # ── slash commands ──────────────────────────────────────

    def _normalize_slash(self, event: SlashCommand) -> NormalizeResult:
        spec = COMMANDS.get(event.name.lower())
        if spec is None:
            return Rejection(UNKNOWN_COMMAND)
        if spec.local:
            return LocalReply(invite_text(self.invite_url))

        argument = ""
        if spec.option:
            argument = (event.options.get(spec.option[0]) or "").strip()
            if spec.name == "imagine" and not argument:
                return Rejection(IMAGINE_USAGE)
        return OutboundRequest(
            user_id=event.author_id,
            channel_id=event.channel_id,
            parts=[TextPart(build_directive(spec.name, argument))],
        )

    # ── plain messages ──────────────────────────────────────

    def is_mentioned(self, message: PlainMessage) -> bool:
        if self.bot_user_id in message.mentioned_user_ids:
            return True
        return (
            f"<@{self.bot_user_id}>" in message.content
            or f"<@!{self.bot_user_id}>" in message.content
        )

    def is_reply_to_bot(self, message: PlainMessage) -> bool:
        return message.reference is not None and message.reference.author_id == self.bot_user_id

    def is_command(self, message: PlainMessage) -> bool:
        return bool(self.command_prefix) and message.content.startswith(self.command_prefix)

    def qualifies(self, message: PlainMessage) -> bool:
        if message.author_is_bot:
            return False
        return self.is_mentioned(message) or self.is_reply_to_bot(message) or self.is_command(message)

    def _normalize_message(self, message: PlainMessage) -> NormalizeResult:
        if not self.qualifies(message):
            return None

        is_command = self.is_command(message)
        text = message.content
        if is_command:
            text = text[len(self.command_prefix):]
        text = strip_mentions(text)

        directive = None
        if is_command:
            word, rest = split_command(text)
            spec = COMMANDS.get(word)
            if spec is not None and spec.local:
                return LocalReply(invite_text(self.invite_url))
            if spec is not None:
                if spec.name == "imagine" and not rest:
                    return Rejection(IMAGINE_USAGE)
                directive = build_directive(spec.name, rest)

        candidates = list(message.attachments)
        if message.reference is not None:
            candidates.extend(message.reference.attachments)

        media = None
        if candidates:
            media = self._media_part(candidates)
            if media is None:
                return Rejection(UNSUPPORTED_ATTACHMENT)

        if directive is not None:
            parts = [TextPart(directive)]
        else:
            text = self._with_reply_context(message, text)
            parts = self._content_parts(text, media)

        return OutboundRequest(
            user_id=message.author_id,
            channel_id=message.channel_id,
            parts=parts,
        )

    @staticmethod
    def _media_part(candidates: Iterable[Attachment]) -> Optional[ContentPart]:
        # Only the first attachment counts; an unsupported one aborts.
        for attachment in candidates:
            kind = classify_attachment(attachment)
            if kind == "image":
                return ImagePart(attachment.url)
            if kind == "audio":
                return AudioPart(attachment.url)
            return None
        return None

    @staticmethod
    def _with_reply_context(message: PlainMessage, text: str) -> str:
        ref = message.reference
        if ref is None:
            return text
        quoted = strip_mentions(ref.content)
        if not quoted:
            return text
        context = f"{ref.author_name}: {quoted}"
        return f"{context}\n\n{text}" if text else context

    @staticmethod
    def _content_parts(text: str, media: Optional[ContentPart]):
        if media is None:
            return [TextPart(text or FILLER_PROMPT)]
        if not text and isinstance(media, ImagePart):
            text = IMAGE_PROMPT
        parts = [TextPart(text)] if text else []
        parts.append(media)
        return parts
