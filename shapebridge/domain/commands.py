"""Command vocabulary shared by slash commands and prefixed text.

Directives are forwarded verbatim to the remote service, which interprets
them. Only ``invite`` is answered locally.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

DIRECTIVE_PREFIX = "!"


@dataclass(frozen=True)
class CommandSpec:
    name: str
    description: str
    # (option name, option description) — at most one free-text argument
    option: Optional[Tuple[str, str]] = None
    local: bool = False


COMMANDS: Dict[str, CommandSpec] = {
    spec.name: spec
    for spec in (
        CommandSpec("reset", "Reset the Shape's long-term memory"),
        CommandSpec("sleep", "Generate a long-term memory on demand"),
        CommandSpec("web", "Search the web", option=("query", "Search query")),
        CommandSpec("imagine", "Generate an image", option=("prompt", "Image description")),
        CommandSpec("wack", "Reset the Shape's short-term memory"),
        CommandSpec("invite", "Get the bot's invite link", local=True),
    )
}

UNKNOWN_COMMAND = "Unknown command."
INVITE_NOT_CONFIGURED = "No invite URL configured."
IMAGINE_USAGE = "Please provide a description for the image (e.g., `!imagine a futuristic city`)."


def build_directive(name: str, argument: str = "") -> str:
    """``build_directive("web", "cats")`` -> ``"!web cats"``."""
    argument = argument.strip()
    if argument:
        return f"{DIRECTIVE_PREFIX}{name} {argument}"
    return f"{DIRECTIVE_PREFIX}{name}"


def invite_text(invite_url: str) -> str:
    return f"Invite me to your server: {invite_url or INVITE_NOT_CONFIGURED}"


def split_command(text: str) -> Tuple[str, str]:
    """Split prefix-stripped text into (lower-cased command word, remainder)."""
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    return parts[0].lower(), parts[1].strip() if len(parts) > 1 else ""
