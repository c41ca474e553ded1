"""Keymap registry: editor actions, key bindings and key resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional

from repl_frontend.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Binding selected for a key, paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    keys: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding conflicts with existing entries."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and the bindings indexed by key token."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._key_index: Dict[str, set[str]] = {}
        self._logger_name = logger_name

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "keys": binding.keys},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            if replace:
                for conflict in conflicts:
                    self._unindex(conflict)
                    self._bindings.pop(conflict.id, None)
                existing = self._bindings.get(binding.id)
                if existing:
                    self._unindex(existing)
                    self._bindings.pop(existing.id, None)
            elif binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            self._bindings[binding.id] = binding
            self._key_index.setdefault(binding.keys, set()).add(binding.id)
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding:
            self._unindex(binding)
        return binding

    def iter_bindings(self, keys: Optional[str] = None) -> Iterator[Binding]:
        if keys is None:
            yield from self._bindings.values()
            return
        for binding_id in sorted(self._key_index.get(keys, ())):
            yield self._bindings[binding_id]

    def resolve(
        self, token: str, context: Optional[Mapping[str, bool]] = None
    ) -> Optional[ResolutionMatch]:
        """Pick the highest-priority binding for ``token`` allowed by ``context``."""

        ctx = context or {}
        matches = [
            ResolutionMatch(binding=binding, action=self._actions[binding.action_id])
            for binding in self.iter_bindings(token)
            if binding.allows(ctx)
        ]
        if not matches:
            return None
        matches.sort(key=lambda m: (-m.binding.priority, m.binding.id))
        return matches[0]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            keys=tuple(sorted(self._key_index)),
        )

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        conflicts: list[Binding] = []
        for match_id in sorted(self._key_index.get(binding.keys, ())):
            existing = self._bindings[match_id]
            if existing.id != binding.id and _contexts_overlap(binding, existing):
                conflicts.append(existing)
        return conflicts

    def _unindex(self, binding: Binding) -> None:
        bucket = self._key_index.get(binding.keys)
        if not bucket:
            return
        bucket.discard(binding.id)
        if not bucket:
            self._key_index.pop(binding.keys, None)


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    left_map = left.when_map
    right_map = right.when_map

    if not left.when and not right.when:
        return True

    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False

    if not left.when or not right.when:
        return False

    return left_map == right_map


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "ResolutionMatch",
]
