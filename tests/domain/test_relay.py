"""Tests for domain/relay.py — end-to-end pipeline with mock ports."""

import pytest

from shapebridge.domain.media import MediaExtractor, build_asset_pattern
from shapebridge.domain.models import PlainText, TextPart, TextWithAttachment
from shapebridge.domain.normalizer import UNSUPPORTED_ATTACHMENT, RequestNormalizer
from shapebridge.domain.relay import FAILURE_MESSAGE, RelayService
from shapebridge.ports.inbound import Attachment, PlainMessage, SlashCommand

BOT_ID = 999


# --- Mock Ports ---


class MockShapes:
    """Mock ShapesPort implementation."""

    def __init__(self, reply="mock reply", error=None):
        self.reply = reply
        self.error = error
        self.requests = []

    async def complete(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.reply


class MockFetcher:
    def __init__(self, data=b"bytes", error=None):
        self.data = data
        self.error = error
        self.calls = []

    async def fetch(self, url):
        self.calls.append(url)
        if self.error:
            raise self.error
        return self.data


def _relay(shapes, fetcher=None, strict=False, invite_url=""):
    fetcher = fetcher or MockFetcher()
    extractor = MediaExtractor(fetcher, build_asset_pattern("files.example.com"), strict=strict)
    normalizer = RequestNormalizer(bot_user_id=BOT_ID, invite_url=invite_url)
    return RelayService(normalizer, shapes, extractor)


def _mention(text="hi", **kwargs):
    return PlainMessage(content=f"<@{BOT_ID}> {text}", channel_id=100, author_id=1, **kwargs)


@pytest.mark.asyncio
async def test_plain_reply_relayed():
    shapes = MockShapes(reply="Hello human")
    action = await _relay(shapes).handle(_mention("hello"))
    assert action == PlainText("Hello human")
    assert shapes.requests[0].parts == [TextPart("hello")]


@pytest.mark.asyncio
async def test_ignored_event_makes_no_call():
    shapes = MockShapes()
    event = PlainMessage(content="just chatting", channel_id=100, author_id=1)
    assert await _relay(shapes).handle(event) is None
    assert shapes.requests == []


@pytest.mark.asyncio
async def test_rejection_makes_no_call():
    shapes = MockShapes()
    doc = Attachment(url="https://cdn.example.com/a.pdf", filename="a.pdf", content_type="application/pdf")
    action = await _relay(shapes).handle(_mention("read", attachments=(doc,)))
    assert action == PlainText(UNSUPPORTED_ATTACHMENT)
    assert shapes.requests == []


@pytest.mark.asyncio
async def test_invite_answered_locally():
    shapes = MockShapes()
    event = SlashCommand(name="invite", channel_id=100, author_id=1)
    action = await _relay(shapes, invite_url="https://x.test/invite").handle(event)
    assert action == PlainText("Invite me to your server: https://x.test/invite")
    assert shapes.requests == []


@pytest.mark.asyncio
async def test_media_reply_attached():
    shapes = MockShapes(reply="Here you go! https://files.example.com/61c9b56a.png")
    fetcher = MockFetcher(data=b"img")
    action = await _relay(shapes, fetcher).handle(SlashCommand(
        name="imagine", channel_id=100, author_id=1, options={"prompt": "a cat"},
    ))
    assert action == TextWithAttachment(text="Here you go!", data=b"img", filename="61c9b56a.png")
    assert shapes.requests[0].parts == [TextPart("!imagine a cat")]


@pytest.mark.asyncio
async def test_remote_failure_maps_to_generic_message():
    shapes = MockShapes(error=RuntimeError("HTTP 500"))
    action = await _relay(shapes).handle(_mention())
    assert action == PlainText(FAILURE_MESSAGE)


@pytest.mark.asyncio
async def test_remote_failure_logs_traceback(capsys):
    shapes = MockShapes(error=RuntimeError("HTTP 500"))
    await _relay(shapes).handle(_mention())

    err = capsys.readouterr().err
    assert "[relay] request failed" in err
    assert "Traceback (most recent call last)" in err
    assert "RuntimeError: HTTP 500" in err


@pytest.mark.asyncio
async def test_fetch_failure_graceful_by_default():
    raw = "Listen: https://files.example.com/abc123.mp3"
    shapes = MockShapes(reply=raw)
    action = await _relay(shapes, MockFetcher(error=OSError("down"))).handle(_mention())
    assert action == PlainText(raw)


@pytest.mark.asyncio
async def test_fetch_failure_strict_maps_to_generic_message():
    shapes = MockShapes(reply="Listen: https://files.example.com/abc123.mp3")
    relay = _relay(shapes, MockFetcher(error=OSError("down")), strict=True)
    action = await relay.handle(_mention())
    assert action == PlainText(FAILURE_MESSAGE)


@pytest.mark.asyncio
async def test_prepare_then_dispatch_matches_handle():
    shapes = MockShapes(reply="ok")
    relay = _relay(shapes)
    prepared = relay.prepare(_mention("x"))
    assert await relay.dispatch(prepared) == PlainText("ok")
    assert await relay.dispatch(None) is None
