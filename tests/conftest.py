from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, List, Optional, Union

import pytest

from repl_frontend.editor import LineEditor
from repl_frontend.events import Closed, InputEvent, KeyInput
from repl_frontend.runtime import telemetry
from repl_frontend.settings import FrontendSettings
from repl_frontend.terminal import RenderState

Step = Union[InputEvent, BaseException]


class ScriptedSource:
    """Replays a fixed list of events; exceptions in the list are raised."""

    def __init__(self, steps: Iterable[Step] = ()) -> None:
        self._steps: Deque[Step] = deque(steps)

    def extend(self, steps: Iterable[Step]) -> None:
        self._steps.extend(steps)

    def read_event(self) -> InputEvent:
        if not self._steps:
            return Closed("script exhausted")
        step = self._steps.popleft()
        if isinstance(step, BaseException):
            raise step
        return step


class RecordingSurface:
    def __init__(self) -> None:
        self.renders: List[RenderState] = []
        self.lines: List[str] = []
        self.redraws = 0
        self.finishes = 0

    @property
    def last(self) -> Optional[RenderState]:
        return self.renders[-1] if self.renders else None

    def render(self, state: RenderState) -> None:
        self.renders.append(state)

    def write_line(self, text: str) -> None:
        self.lines.append(text)

    def redraw(self) -> None:
        self.redraws += 1

    def finish(self) -> None:
        self.finishes += 1


def typed(text: str) -> List[InputEvent]:
    return [KeyInput.char(char) for char in text]


def key(token: str) -> KeyInput:
    return KeyInput.parse(token)


ENTER = KeyInput.parse("enter")


@pytest.fixture(autouse=True)
def silent_telemetry() -> None:
    telemetry.configure(preset="silent")


@pytest.fixture
def source() -> ScriptedSource:
    return ScriptedSource()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def editor(source: ScriptedSource, surface: RecordingSurface) -> LineEditor:
    return LineEditor(source, surface, settings=FrontendSettings())
