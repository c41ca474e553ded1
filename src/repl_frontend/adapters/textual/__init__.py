"""Textual host for the line editor; the app module needs ``textual``."""

from .controller import HookSurface, QueuedSource, TextualReplAdapter, TextualReplHooks

__all__ = ["HookSurface", "QueuedSource", "TextualReplAdapter", "TextualReplHooks"]
