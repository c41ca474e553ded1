"""Statement editing: buffer, per-read session and the blocking line editor."""

from .buffer import BufferValidationError, BufferView, EditBuffer
from .config import ReadConfig
from .session import StatementSession
from .line_editor import LineEditor

__all__ = [
    "BufferValidationError",
    "BufferView",
    "EditBuffer",
    "LineEditor",
    "ReadConfig",
    "StatementSession",
]
