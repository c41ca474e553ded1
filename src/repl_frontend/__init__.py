"""Terminal-agnostic line editor front-end for a statement REPL."""

__all__ = [
    "actions",
    "adapters",
    "completion",
    "driver",
    "editor",
    "highlight",
    "history",
    "keymaps",
    "parsing",
    "runtime",
    "terminal",
]

__version__ = "0.1.0"
