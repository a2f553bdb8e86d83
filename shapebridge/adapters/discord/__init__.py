from shapebridge.adapters.discord.adapter import (
    InteractionResponder,
    MessageResponder,
    ShapesRelayBot,
    split_message,
)

__all__ = ["InteractionResponder", "MessageResponder", "ShapesRelayBot", "split_message"]
