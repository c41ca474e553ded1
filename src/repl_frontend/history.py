"""Append-only record of submitted statements."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Optional, Sequence

HistoryListener = Callable[[str, bool], None]


class HistoryStore:
    """Chronological statement texts; seeded entries first, duplicates kept.

    ``append`` forwards ``(text, accepted)`` to ``listener`` so an external
    store can persist submissions. Nothing here removes or reorders entries.
    """

    def __init__(
        self,
        seed: Iterable[str] = (),
        *,
        listener: Optional[HistoryListener] = None,
    ) -> None:
        self._entries: List[str] = []
        self._seeded = 0
        self.listener = listener
        self.seed(seed)

    def seed(self, values: Iterable[str]) -> int:
        added = 0
        for value in values:
            self._entries.append(str(value))
            added += 1
        self._seeded += added
        return added

    def append(
        self,
        text: str,
        *,
        accepted: bool,
        listener: Optional[HistoryListener] = None,
    ) -> None:
        self._entries.append(text)
        for callback in (self.listener, listener):
            if callback is not None:
                callback(text, accepted)

    @property
    def seeded_count(self) -> int:
        return self._seeded

    @property
    def submitted_count(self) -> int:
        return len(self._entries) - self._seeded

    def entries(self) -> Sequence[str]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._entries))

    def __getitem__(self, index: int) -> str:
        return self._entries[index]


__all__ = ["HistoryListener", "HistoryStore"]
