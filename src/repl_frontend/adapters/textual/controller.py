"""Textual-free adapter that feeds host key events into the line editor."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, replace
from typing import Callable, Deque, Dict, Iterable, Optional

from repl_frontend.editor import LineEditor, ReadConfig, StatementSession
from repl_frontend.events import Closed, InputEvent, KeyInput, Paste
from repl_frontend.outcomes import Exit, ReadOutcome
from repl_frontend.settings import FrontendSettings
from repl_frontend.terminal import RenderState


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualReplHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_edit: Callable[[RenderState], None]
    write_output: Callable[[str], None] = _noop
    commit_edit: Callable[[Optional[RenderState]], None] = _noop
    handle_outcome: Callable[[ReadOutcome], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class HookSurface:
    """``Surface`` that forwards drawing calls to ``TextualReplHooks``."""

    def __init__(self, hooks: TextualReplHooks) -> None:
        self.hooks = hooks
        self.last: Optional[RenderState] = None

    def render(self, state: RenderState) -> None:
        self.last = state
        self.hooks.update_edit(state)

    def write_line(self, text: str) -> None:
        self.hooks.write_output(text)

    def redraw(self) -> None:
        if self.last is not None:
            self.hooks.update_edit(self.last)

    def finish(self) -> None:
        self.hooks.commit_edit(self.last)
        self.last = None


class QueuedSource:
    """``InputSource`` holding events pushed by the host UI."""

    def __init__(self) -> None:
        self._events: Deque[InputEvent] = deque()

    def push(self, event: InputEvent) -> None:
        self._events.append(event)

    def read_event(self) -> InputEvent:
        if not self._events:
            return Closed("no pending input")
        return self._events.popleft()


class TextualReplAdapter:
    """Runs statement sessions back to back, one host event at a time."""

    def __init__(
        self,
        hooks: TextualReplHooks,
        *,
        prompt: str,
        config: Optional[ReadConfig] = None,
        settings: Optional[FrontendSettings] = None,
        editor: Optional[LineEditor] = None,
    ) -> None:
        self.hooks = hooks
        self.prompt = prompt
        self.source = QueuedSource()
        self.surface = HookSurface(hooks)
        self.editor = editor or LineEditor(self.source, self.surface, settings=settings)
        self.closed = False
        self._config = config or ReadConfig()
        self.session: StatementSession = self.editor.begin(prompt, self._config)
        # the seed is consumed by the first session only
        self._config = replace(self._config, history=())

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> Optional[ReadOutcome]:
        """Translate a Textual key into a ``KeyInput`` and apply it."""

        parsed = KeyInput.parse(key, text=text)
        event = KeyInput(
            key=parsed.key,
            modifiers=parsed.modifiers + tuple(str(mod).lower() for mod in modifiers),
            text=text,
        )
        self._log_state("key ->", key=event.token, text=text)
        return self._apply(event)

    def handle_paste(self, text: str) -> Optional[ReadOutcome]:
        self._log_state("paste ->", length=len(text))
        return self._apply(Paste(text))

    def _apply(self, event: InputEvent) -> Optional[ReadOutcome]:
        if self.closed:
            return None
        self.source.push(event)
        outcome = self.editor.step(self.session, self.source.read_event())
        if outcome is None:
            return None
        self._log_state("result <-", outcome=type(outcome).__name__)
        self.hooks.handle_outcome(outcome)
        if isinstance(outcome, Exit):
            self.closed = True
        else:
            self.session = self.editor.begin(self.prompt, self._config)
        return outcome

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.session.buffer
        return {
            "cursor": buffer.cursor,
            "length": len(buffer.text),
            "history": len(self.editor.history),
        }


__all__ = ["HookSurface", "QueuedSource", "TextualReplAdapter", "TextualReplHooks"]
