"""Discord adapter — bridges discord.Client to RelayService.

ShapesRelayBot converts discord.Message / discord.Interaction into the
platform-agnostic inbound events, hands them to the relay pipeline, and
delivers the resulting action back to the originating channel.
"""

import contextlib
import io
import sys
from typing import List, Optional, Sequence

import discord
from discord import app_commands

from shapebridge.config import DiscordConfig
from shapebridge.domain.commands import COMMANDS
from shapebridge.domain.models import OutboundAction, TextWithAttachment
from shapebridge.domain.relay import RelayService
from shapebridge.ports.inbound import Attachment, PlainMessage, ReferencedMessage, SlashCommand

DISCORD_MESSAGE_LIMIT = 2000


def _log(msg: str):
    print(f"[discord] {msg}", file=sys.stderr)


def split_message(text: str, limit: int = DISCORD_MESSAGE_LIMIT) -> List[str]:
    """Split a message into chunks that fit Discord's character limit."""
    if len(text) <= limit:
        return [text]
    chunks = []
    while text:
        chunks.append(text[:limit])
        text = text[limit:]
    return chunks


def _to_file(action: OutboundAction) -> Optional[discord.File]:
    if isinstance(action, TextWithAttachment):
        return discord.File(io.BytesIO(action.data), filename=action.filename)
    return None


def _to_attachments(attachments: Sequence[discord.Attachment]) -> tuple:
    return tuple(
        Attachment(url=a.url, filename=a.filename, content_type=a.content_type)
        for a in attachments
    )


class MessageResponder:
    """ResponderPort for plain messages: reply, then continue in-channel."""

    def __init__(self, message: discord.Message):
        self._message = message

    async def send(self, action: OutboundAction) -> None:
        chunks = split_message(action.text)
        file = _to_file(action)
        for i, chunk in enumerate(chunks):
            kwargs = {"file": file} if file and i == len(chunks) - 1 else {}
            if i == 0:
                await self._message.reply(chunk, **kwargs)
            else:
                await self._message.channel.send(chunk, **kwargs)


class InteractionResponder:
    """ResponderPort for deferred slash command interactions."""

    def __init__(self, interaction: discord.Interaction):
        self._interaction = interaction

    async def send(self, action: OutboundAction) -> None:
        chunks = split_message(action.text)
        file = _to_file(action)
        first, rest = chunks[0], chunks[1:]
        if file and not rest:
            await self._interaction.edit_original_response(content=first, attachments=[file])
            return
        await self._interaction.edit_original_response(content=first)
        for i, chunk in enumerate(rest):
            kwargs = {"file": file} if file and i == len(rest) - 1 else {}
            await self._interaction.followup.send(chunk, **kwargs)


class ShapesRelayBot(discord.Client):
    """Discord client that relays mentions, replies and commands to Shapes.

    Service objects passed in ``resources`` are started in ``setup_hook``
    and closed in ``close``.
    """

    def __init__(self, relay: RelayService, config: DiscordConfig, resources: Sequence = (), **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        intents.members = True
        if config.activity_name:
            discord_kwargs.setdefault("activity", discord.Game(name=config.activity_name))
        super().__init__(intents=intents, **discord_kwargs)
        self.relay = relay
        self.config = config
        self._resources = list(resources)
        self.tree = app_commands.CommandTree(self)
        self._register_commands()

    # ── lifecycle ───────────────────────────────────────────

    async def setup_hook(self) -> None:
        for resource in self._resources:
            await resource.start()
        if self.user:
            self.relay.normalizer.bot_user_id = self.user.id
        try:
            synced = await self.tree.sync()
            _log(f"registered {len(synced)} slash commands")
        except discord.HTTPException as e:
            _log(f"slash command registration failed: {e}")

    async def on_ready(self):
        _log(f"logged in as {self.user}")

    async def close(self) -> None:
        for resource in self._resources:
            try:
                await resource.close()
            except Exception as e:
                _log(f"error closing {type(resource).__name__}: {e}")
        await super().close()

    # ── slash commands ──────────────────────────────────────

    def _register_commands(self):
        tree = self.tree

        @tree.command(name="reset", description=COMMANDS["reset"].description)
        async def reset(interaction: discord.Interaction):
            await self.handle_slash_command(interaction, "reset")

        @tree.command(name="sleep", description=COMMANDS["sleep"].description)
        async def sleep(interaction: discord.Interaction):
            await self.handle_slash_command(interaction, "sleep")

        @tree.command(name="web", description=COMMANDS["web"].description)
        @app_commands.describe(query=COMMANDS["web"].option[1])
        async def web(interaction: discord.Interaction, query: str):
            await self.handle_slash_command(interaction, "web", query=query)

        @tree.command(name="imagine", description=COMMANDS["imagine"].description)
        @app_commands.describe(prompt=COMMANDS["imagine"].option[1])
        async def imagine(interaction: discord.Interaction, prompt: str):
            await self.handle_slash_command(interaction, "imagine", prompt=prompt)

        @tree.command(name="wack", description=COMMANDS["wack"].description)
        async def wack(interaction: discord.Interaction):
            await self.handle_slash_command(interaction, "wack")

        @tree.command(name="invite", description=COMMANDS["invite"].description)
        async def invite(interaction: discord.Interaction):
            await self.handle_slash_command(interaction, "invite")

    async def handle_slash_command(self, interaction: discord.Interaction, name: str, **options: str):
        event = SlashCommand(
            name=name,
            channel_id=interaction.channel_id,
            author_id=interaction.user.id,
            options=dict(options),
        )
        await interaction.response.defer(thinking=True)
        action = await self.relay.handle(event)
        if action is None:
            return
        try:
            await InteractionResponder(interaction).send(action)
        except discord.HTTPException as e:
            _log(f"/{name} response failed (ch={interaction.channel_id}): {e}")

    # ── plain messages ──────────────────────────────────────

    async def _resolve_reference(self, message: discord.Message) -> Optional[ReferencedMessage]:
        ref = message.reference
        if ref is None or ref.message_id is None:
            return None
        resolved = ref.resolved
        if not isinstance(resolved, discord.Message):
            try:
                resolved = await message.channel.fetch_message(ref.message_id)
            except discord.HTTPException:
                return None
        return ReferencedMessage(
            author_id=resolved.author.id,
            author_name=resolved.author.display_name,
            content=resolved.content,
            attachments=_to_attachments(resolved.attachments),
        )

    async def to_event(self, message: discord.Message) -> PlainMessage:
        """Convert a Discord message to a platform-agnostic PlainMessage."""
        return PlainMessage(
            content=message.content,
            channel_id=message.channel.id,
            author_id=message.author.id,
            author_is_bot=message.author.bot,
            attachments=_to_attachments(message.attachments),
            mentioned_user_ids=tuple(user.id for user in message.mentions),
            reference=await self._resolve_reference(message),
        )

    async def on_message(self, message: discord.Message):
        # Ignore own messages
        if not self.user or message.author == self.user:
            return

        event = await self.to_event(message)
        prepared = self.relay.prepare(event)
        if prepared is None:
            return

        async with contextlib.AsyncExitStack() as stack:
            try:
                await stack.enter_async_context(message.channel.typing())
            except discord.HTTPException as e:
                # No typing indicator; the request still goes out
                _log(f"typing failed (ch={message.channel.id}): {e}")
            action = await self.relay.dispatch(prepared)
        if action is None:
            return
        try:
            await MessageResponder(message).send(action)
        except discord.HTTPException as e:
            _log(f"reply failed (ch={message.channel.id}): {e}")
