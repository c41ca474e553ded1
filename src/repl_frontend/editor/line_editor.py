"""Blocking statement reader: the outer loop of the REPL front-end."""

from __future__ import annotations

from typing import Callable, Optional

from repl_frontend.completion import CompletionBridge
from repl_frontend.events import Closed, InputEvent
from repl_frontend.highlight import Highlighter
from repl_frontend.history import HistoryStore
from repl_frontend.keymaps import KeymapRegistry, load_default_keymaps
from repl_frontend.outcomes import Failure, ReadOutcome
from repl_frontend.parsing import IncrementalParser
from repl_frontend.runtime import telemetry
from repl_frontend.settings import FrontendSettings
from repl_frontend.terminal import InputSource, Surface

from .config import ReadConfig
from .session import StatementSession


class LineEditor:
    """Reads one statement per call from ``source``, drawing on ``surface``.

    The editor keeps the history for its whole lifetime; everything else
    (buffer, recall position) belongs to the session started by each call.
    """

    def __init__(
        self,
        source: InputSource,
        surface: Surface,
        *,
        parser: Optional[IncrementalParser] = None,
        highlighter: Optional[Highlighter] = None,
        bridge: Optional[CompletionBridge] = None,
        keymap: Optional[KeymapRegistry] = None,
        history: Optional[HistoryStore] = None,
        settings: Optional[FrontendSettings] = None,
        logger_name: str | None = None,
    ) -> None:
        self.source = source
        self.surface = surface
        self.settings = settings or FrontendSettings.from_env()
        self.parser = parser or IncrementalParser(logger_name=logger_name)
        self.highlighter = highlighter or Highlighter()
        self.bridge = bridge or CompletionBridge(
            self.parser, self.highlighter, logger_name=logger_name
        )
        self.keymap = keymap or load_default_keymaps(
            KeymapRegistry(logger_name=logger_name)
        )
        self.history = history if history is not None else HistoryStore()
        self._logger_name = logger_name

    def begin(self, prompt: str, config: Optional[ReadConfig] = None) -> StatementSession:
        """Seed the history from ``config`` and draw an empty edit line."""

        resolved = config or ReadConfig()
        seeded = self.history.seed(resolved.history)
        telemetry.record_event(
            "editor.begin",
            level="debug",
            data={"seeded": seeded, "history": len(self.history)},
            logger_name=self._logger_name,
        )
        session = StatementSession(
            prompt=prompt,
            config=resolved,
            surface=self.surface,
            keymap=self.keymap,
            parser=self.parser,
            bridge=self.bridge,
            highlighter=self.highlighter,
            history=self.history,
            interrupt_hint=self.settings.interrupt_hint,
            logger_name=self._logger_name,
        )
        session.render()
        return session

    def step(self, session: StatementSession, event: InputEvent) -> Optional[ReadOutcome]:
        """Apply one event; faults become ``Failure`` instead of propagating."""

        return self._guard(session, lambda: session.feed(event))

    def read_statement(
        self, prompt: str, config: Optional[ReadConfig] = None
    ) -> ReadOutcome:
        session = self.begin(prompt, config)
        while True:
            try:
                event = self.source.read_event()
            except KeyboardInterrupt:
                outcome = self._guard(session, session.interrupt)
            except EOFError:
                outcome = self.step(session, Closed("end of input"))
            else:
                outcome = self.step(session, event)
            if outcome is not None:
                return outcome

    def _guard(
        self,
        session: StatementSession,
        call: Callable[[], Optional[ReadOutcome]],
    ) -> Optional[ReadOutcome]:
        try:
            return call()
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            telemetry.record_event(
                "editor.fault",
                level="error",
                data={"error": exc.__class__.__name__, "message": message},
                logger_name=self._logger_name,
            )
            session.outcome = Failure(message)
            self.surface.finish()
            return session.outcome


__all__ = ["LineEditor"]
