"""Response media extraction — raw reply -> OutboundAction.

The remote service returns free text that may embed one generated asset
URL (``https://<asset-host>/<id>.<ext>``). The first such URL is pulled
out of the prose, downloaded, and re-attached as a file.
"""

import re
import sys
from typing import Iterable, Optional, Pattern

from shapebridge.domain.models import ExtractedMedia, OutboundAction, PlainText, TextWithAttachment
from shapebridge.ports.outbound import AssetFetcherPort

DEFAULT_PLACEHOLDER = "Here's your file:"
PLACEHOLDERS = {
    "mp3": "Generated audio:",
    "wav": "Generated audio:",
    "ogg": "Generated audio:",
    "png": "Generated image:",
    "jpg": "Generated image:",
    "jpeg": "Generated image:",
    "gif": "Generated image:",
    "webp": "Generated image:",
}


def _log(msg: str):
    print(f"[media] {msg}", file=sys.stderr)


def build_asset_pattern(asset_host: str = "", extensions: Iterable[str] = ("mp3", "png")) -> Pattern[str]:
    """Compile the asset URL matcher; an empty host matches any host."""
    exts = sorted({e.lower().lstrip(".") for e in extensions if e})
    if not exts:
        raise ValueError("at least one asset extension is required")
    host = re.escape(asset_host) if asset_host else r"[A-Za-z0-9.\-]+(?::\d+)?"
    ext_alt = "|".join(re.escape(e) for e in exts)
    # Optional query string (signed URLs); trailing punctuation stays in the prose
    query = r"""(?:\?[^\s()<>\[\]"']*[^\s()<>\[\]"'.,!?;:])?"""
    return re.compile(
        rf"https://{host}/(?:[\w\-.%]+/)*[\w\-%]+\.(?:{ext_alt})(?![\w]){query}",
        re.IGNORECASE,
    )


def placeholder_for(extension: str) -> str:
    return PLACEHOLDERS.get(extension.lower(), DEFAULT_PLACEHOLDER)


def extract_media(raw_reply: str, pattern: Pattern[str]) -> Optional[ExtractedMedia]:
    """Find the first asset URL in ``raw_reply``; None when there is none."""
    match = pattern.search(raw_reply)
    if match is None:
        return None

    asset_url = match.group(0)
    filename = asset_url.split("?", 1)[0].rsplit("/", 1)[-1]
    extension = filename.rsplit(".", 1)[-1].lower()
    prose = (raw_reply[: match.start()] + raw_reply[match.end():]).strip()
    return ExtractedMedia(
        asset_url=asset_url,
        filename=filename,
        extension=extension,
        prose=prose or placeholder_for(extension),
    )


class MediaExtractor:
    """Converts a raw reply into exactly one OutboundAction.

    With ``strict=False`` a failed download falls back to the unmodified
    reply so the prose and the link still reach the user. With
    ``strict=True`` the fetch error propagates to the caller.
    """

    def __init__(self, fetcher: AssetFetcherPort, pattern: Pattern[str], strict: bool = False):
        self._fetcher = fetcher
        self._pattern = pattern
        self.strict = strict

    def extract(self, raw_reply: str) -> Optional[ExtractedMedia]:
        return extract_media(raw_reply, self._pattern)

    async def build_action(self, raw_reply: str) -> OutboundAction:
        media = self.extract(raw_reply)
        if media is None:
            return PlainText(raw_reply)

        try:
            data = await self._fetcher.fetch(media.asset_url)
        except Exception as e:
            if self.strict:
                raise
            _log(f"asset fetch failed for {media.asset_url}: {e!r}; sending text only")
            return PlainText(raw_reply)
        return TextWithAttachment(text=media.prose, data=data, filename=media.filename)
