"""Input events delivered by the blocking read step."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union


def _normalize_modifiers(modifiers: Iterable[str]) -> Tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized key press; ``text`` carries the printable character, if any."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", self.key.lower() if len(self.key) > 1 else self.key)
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return key_to_token(self.key, self.modifiers)

    @classmethod
    def parse(cls, token: str, *, text: Optional[str] = None) -> "KeyInput":
        """Build from ``"ctrl+c"`` style tokens."""

        parts = token.split("+")
        if len(parts) > 1 and parts[-1] == "":
            parts = parts[:-2] + ["+"]
        return cls(key=parts[-1], modifiers=tuple(parts[:-1]), text=text)

    @classmethod
    def char(cls, character: str) -> "KeyInput":
        return cls(key=character, text=character)


@dataclass(frozen=True, slots=True)
class Paste:
    text: str


@dataclass(frozen=True, slots=True)
class Closed:
    """The input source has nothing more to deliver."""

    reason: str = "input closed"


InputEvent = Union[KeyInput, Paste, Closed]


def key_to_token(key: str, modifiers: Iterable[str] = ()) -> str:
    normalized = _normalize_modifiers(modifiers)
    if normalized:
        return f"{'+'.join(normalized)}+{key}"
    return key


__all__ = ["Closed", "InputEvent", "KeyInput", "Paste", "key_to_token"]
