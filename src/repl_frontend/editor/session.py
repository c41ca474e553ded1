"""State of one ``read_statement`` call: buffer, recall position, outcome."""

from __future__ import annotations

from typing import Mapping, Optional

from repl_frontend.actions import submission
from repl_frontend.completion import CompletionBridge
from repl_frontend.events import Closed, InputEvent, KeyInput, Paste
from repl_frontend.highlight import Highlighter
from repl_frontend.history import HistoryStore
from repl_frontend.keymaps import BUFFER_EMPTY, KeymapRegistry
from repl_frontend.outcomes import Exit, ReadOutcome
from repl_frontend.parsing import Incomplete, IncrementalParser, ResolutionMode
from repl_frontend.runtime import telemetry
from repl_frontend.terminal import RenderState, Surface

from .buffer import EditBuffer
from .config import ReadConfig


class StatementSession:
    """Feeds input events through the keymap into one edit buffer.

    A session lives for exactly one statement. ``feed`` returns ``None``
    while editing continues and the final outcome once the statement is
    resolved; after that the session should be discarded.
    """

    def __init__(
        self,
        *,
        prompt: str,
        config: ReadConfig,
        surface: Surface,
        keymap: KeymapRegistry,
        parser: IncrementalParser,
        bridge: CompletionBridge,
        highlighter: Highlighter,
        history: HistoryStore,
        interrupt_hint: str,
        logger_name: str | None = None,
    ) -> None:
        self.prompt = prompt
        self.config = config
        self.surface = surface
        self.keymap = keymap
        self.parser = parser
        self.bridge = bridge
        self.highlighter = highlighter
        self.history = history
        self.interrupt_hint = interrupt_hint
        self.buffer = EditBuffer()
        self.outcome: Optional[ReadOutcome] = None
        self._logger_name = logger_name
        self._recall_index: Optional[int] = None
        self._draft = ""

    @property
    def done(self) -> bool:
        return self.outcome is not None

    def context(self) -> Mapping[str, bool]:
        return {BUFFER_EMPTY: not self.buffer}

    def feed(self, event: InputEvent) -> Optional[ReadOutcome]:
        if self.outcome is not None:
            return self.outcome
        if isinstance(event, Closed):
            self.surface.finish()
            telemetry.record_event(
                "editor.closed",
                data={"reason": event.reason},
                logger_name=self._logger_name,
            )
            return self._resolve(Exit(event.reason))
        if isinstance(event, Paste):
            self.buffer.insert(event.text)
            self.render()
            return None
        return self._dispatch(event)

    def interrupt(self) -> ReadOutcome:
        return self._resolve(submission.interrupt(self, KeyInput.parse("ctrl+c")))

    def end_of_input(self) -> ReadOutcome:
        return self._resolve(submission.end_of_input(self, KeyInput.parse("ctrl+d")))

    def recall(self, step: int) -> None:
        """Walk the history; stepping past the newest entry restores the draft."""

        entries = self.history.entries()
        if not entries:
            return
        if self._recall_index is None:
            if step > 0:
                return
            self._draft = self.buffer.text
            index = len(entries) + step
        else:
            index = self._recall_index + step
        index = max(index, 0)
        if index >= len(entries):
            self._recall_index = None
            self.buffer.set_text(self._draft)
            return
        self._recall_index = index
        self.buffer.set_text(entries[index])

    def render(self) -> None:
        view = self.buffer.snapshot()
        probe = self.parser.parse(view.text, ResolutionMode.PROBING)
        self.surface.render(
            RenderState(
                prompt=self.prompt,
                text=view.text,
                styled=self.highlighter.highlight(view.text, self.config.colors),
                cursor=view.cursor,
                row=view.row,
                column=view.column,
                incomplete=isinstance(probe, Incomplete),
            )
        )

    def _dispatch(self, key: KeyInput) -> Optional[ReadOutcome]:
        match = self.keymap.resolve(key.token, self.context())
        if match is None:
            if key.text and key.text.isprintable():
                self.buffer.insert(key.text)
            else:
                telemetry.record_event(
                    "editor.unbound_key",
                    level="debug",
                    data={"key": key.token},
                    logger_name=self._logger_name,
                )
            self.render()
            return None

        with telemetry.span(
            f"action::{match.action.telemetry_name}",
            logger_name=self._logger_name,
            metadata={"binding": match.binding.id, "key": key.token},
        ):
            outcome = match.action(self, key)
        if outcome is None:
            self.render()
            return None
        return self._resolve(outcome)

    def _resolve(self, outcome: ReadOutcome) -> ReadOutcome:
        self.outcome = outcome
        self.buffer.clear()
        return outcome


__all__ = ["StatementSession"]
