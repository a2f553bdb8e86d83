"""Launcher — wires config, HTTP clients, domain pipeline and Discord client."""

import asyncio
import sys
from typing import Optional

from shapebridge.adapters.discord.adapter import ShapesRelayBot
from shapebridge.adapters.http.assets import AssetFetcher
from shapebridge.adapters.shapes.client import ShapesClient
from shapebridge.config import AppConfig
from shapebridge.domain.media import MediaExtractor, build_asset_pattern
from shapebridge.domain.normalizer import RequestNormalizer
from shapebridge.domain.relay import RelayService


def _log(msg: str):
    print(f"[launcher] {msg}", file=sys.stderr)


def create_bot(config: AppConfig) -> ShapesRelayBot:
    """Build the bot and its service objects. Nothing connects until start."""
    shapes = ShapesClient(config.shapes)
    fetcher = AssetFetcher()
    extractor = MediaExtractor(
        fetcher,
        build_asset_pattern(config.media.asset_host, config.media.extensions),
        strict=config.media.strict_fetch,
    )
    # Bot user id is filled in by the client once logged in.
    normalizer = RequestNormalizer(
        bot_user_id=0,
        command_prefix=config.discord.command_prefix,
        invite_url=config.discord.invite_url,
    )
    relay = RelayService(normalizer, shapes, extractor)
    return ShapesRelayBot(relay, config.discord, resources=(shapes, fetcher))


async def run_bot(config: AppConfig) -> None:
    bot = create_bot(config)
    _log(
        f"starting relay for model={config.shapes.model} "
        f"asset_host={config.media.asset_host or '*'} strict_fetch={config.media.strict_fetch}"
    )
    async with bot:
        await bot.start(config.discord.token)


def main(config: Optional[AppConfig] = None) -> int:
    config = config or AppConfig.from_env()
    missing = config.missing()
    if missing:
        _log(f"missing required settings: {', '.join(missing)}")
        return 1
    try:
        asyncio.run(run_bot(config))
    except KeyboardInterrupt:
        _log("interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
