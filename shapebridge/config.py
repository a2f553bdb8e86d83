"""Configuration — typed settings loaded from the environment."""

import os
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SHAPES_BASE_URL = "https://api.shapes.inc/v1"
DEFAULT_ASSET_HOST = "files.shapes.inc"
DEFAULT_ASSET_EXTENSIONS = ("mp3", "png")


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    items = tuple(p.strip().lower().lstrip(".") for p in raw.split(",") if p.strip())
    return items or default


@dataclass
class ShapesConfig:
    api_key: str = ""
    shape_username: str = ""
    base_url: str = DEFAULT_SHAPES_BASE_URL

    @property
    def model(self) -> str:
        return f"shapesinc/{self.shape_username}"


@dataclass
class MediaConfig:
    # Empty asset_host matches any host.
    asset_host: str = DEFAULT_ASSET_HOST
    extensions: Tuple[str, ...] = DEFAULT_ASSET_EXTENSIONS
    strict_fetch: bool = False


@dataclass
class DiscordConfig:
    token: str = ""
    command_prefix: str = "!"
    invite_url: str = ""
    activity_name: str = ""


@dataclass
class AppConfig:
    """Typed configuration for the relay bot."""

    shapes: ShapesConfig = field(default_factory=ShapesConfig)
    media: MediaConfig = field(default_factory=MediaConfig)
    discord: DiscordConfig = field(default_factory=DiscordConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            shapes=ShapesConfig(
                api_key=os.getenv("SHAPESINC_API_KEY", ""),
                shape_username=os.getenv("SHAPESINC_SHAPE_USERNAME", "").strip(),
                base_url=os.getenv("SHAPESINC_BASE_URL", DEFAULT_SHAPES_BASE_URL).rstrip("/"),
            ),
            media=MediaConfig(
                asset_host=os.getenv("SHAPES_ASSET_HOST", DEFAULT_ASSET_HOST).strip(),
                extensions=_env_list("SHAPES_ASSET_EXTENSIONS", DEFAULT_ASSET_EXTENSIONS),
                strict_fetch=_env_bool("MEDIA_FETCH_STRICT"),
            ),
            discord=DiscordConfig(
                token=os.getenv("DISCORD_TOKEN", ""),
                command_prefix=os.getenv("COMMAND_PREFIX", "!") or "!",
                invite_url=os.getenv("BOT_INVITE_URL", "").strip(),
                activity_name=os.getenv("BOT_ACTIVITY_NAME", "").strip(),
            ),
        )

    def missing(self) -> Tuple[str, ...]:
        """Names of required environment variables that are unset."""
        names = []
        if not self.discord.token:
            names.append("DISCORD_TOKEN")
        if not self.shapes.api_key:
            names.append("SHAPESINC_API_KEY")
        if not self.shapes.shape_username:
            names.append("SHAPESINC_SHAPE_USERNAME")
        return tuple(names)
