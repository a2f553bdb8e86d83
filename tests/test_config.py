"""Tests for the typed AppConfig dataclasses."""

from shapebridge.config import (
    DEFAULT_ASSET_HOST,
    DEFAULT_SHAPES_BASE_URL,
    AppConfig,
    DiscordConfig,
    MediaConfig,
    ShapesConfig,
)

ENV_VARS = (
    "DISCORD_TOKEN",
    "SHAPESINC_API_KEY",
    "SHAPESINC_SHAPE_USERNAME",
    "SHAPESINC_BASE_URL",
    "BOT_INVITE_URL",
    "BOT_ACTIVITY_NAME",
    "COMMAND_PREFIX",
    "SHAPES_ASSET_HOST",
    "SHAPES_ASSET_EXTENSIONS",
    "MEDIA_FETCH_STRICT",
)


def _clear_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestShapesConfig:
    def test_model(self):
        assert ShapesConfig(shape_username="tenshi").model == "shapesinc/tenshi"


class TestDefaults:
    def test_app_config(self):
        c = AppConfig()
        assert isinstance(c.shapes, ShapesConfig)
        assert isinstance(c.media, MediaConfig)
        assert isinstance(c.discord, DiscordConfig)
        assert c.shapes.base_url == DEFAULT_SHAPES_BASE_URL
        assert c.media.extensions == ("mp3", "png")
        assert c.media.strict_fetch is False
        assert c.discord.command_prefix == "!"


class TestFromEnv:
    def test_empty_env(self, monkeypatch):
        _clear_env(monkeypatch)
        c = AppConfig.from_env()
        assert c.media.asset_host == DEFAULT_ASSET_HOST
        assert c.missing() == ("DISCORD_TOKEN", "SHAPESINC_API_KEY", "SHAPESINC_SHAPE_USERNAME")

    def test_full_env(self, monkeypatch):
        _clear_env(monkeypatch)
        monkeypatch.setenv("DISCORD_TOKEN", "dtok")
        monkeypatch.setenv("SHAPESINC_API_KEY", "skey")
        monkeypatch.setenv("SHAPESINC_SHAPE_USERNAME", " tenshi ")
        monkeypatch.setenv("SHAPESINC_BASE_URL", "https://proxy.example.com/v1/")
        monkeypatch.setenv("BOT_INVITE_URL", "https://discord.com/invite/abc")
        monkeypatch.setenv("COMMAND_PREFIX", "?")
        monkeypatch.setenv("SHAPES_ASSET_HOST", "")
        monkeypatch.setenv("SHAPES_ASSET_EXTENSIONS", "MP3, .wav ,png")
        monkeypatch.setenv("MEDIA_FETCH_STRICT", "yes")

        c = AppConfig.from_env()
        assert c.missing() == ()
        assert c.shapes.model == "shapesinc/tenshi"
        assert c.shapes.base_url == "https://proxy.example.com/v1"
        assert c.discord.invite_url == "https://discord.com/invite/abc"
        assert c.discord.command_prefix == "?"
        assert c.media.asset_host == ""
        assert c.media.extensions == ("mp3", "wav", "png")
        assert c.media.strict_fetch is True

    def test_strict_fetch_false_values(self, monkeypatch):
        _clear_env(monkeypatch)
        monkeypatch.setenv("MEDIA_FETCH_STRICT", "off")
        assert AppConfig.from_env().media.strict_fetch is False
