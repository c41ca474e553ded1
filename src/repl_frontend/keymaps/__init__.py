"""Declarative key bindings for the statement editor."""

from .models import ActionRef, Binding, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats, ResolutionMatch
from .defaults import BUFFER_EMPTY, load_default_keymaps

__all__ = [
    "ActionRef",
    "BUFFER_EMPTY",
    "Binding",
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "ResolutionMatch",
    "WhenClause",
    "load_default_keymaps",
]
