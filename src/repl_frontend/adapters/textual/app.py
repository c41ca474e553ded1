"""Executable Textual app that hosts the statement editor."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Footer, Header, RichLog, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use repl_frontend.adapters.textual.app"
    ) from exc

from repl_frontend.cli import COLOR_CHOICES, build_config
from repl_frontend.editor import ReadConfig
from repl_frontend.outcomes import Exit, Failure, ReadOutcome, Success
from repl_frontend.runtime import telemetry
from repl_frontend.settings import FrontendSettings
from repl_frontend.terminal import RenderState

from .controller import TextualReplAdapter, TextualReplHooks


def render_edit_area(state: RenderState, *, show_cursor: bool = True) -> Text:
    """Prompt plus styled buffer, continuation lines aligned under the prompt."""

    indent = "\n" + " " * len(state.prompt)
    text = Text(state.prompt)
    text.append_text(Text.from_ansi(indent.join(state.styled.split("\n"))))
    if show_cursor:
        offset = len(state.prompt) + state.cursor + state.row * len(state.prompt)
        if offset >= len(text.plain) or text.plain[offset] == "\n":
            text = text[:offset] + Text(" ") + text[offset:]
        text.stylize("reverse", offset, offset + 1)
    return text


class ReplApp(App[None]):
    """Output log above a single multi-line edit area."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#output {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#edit-area {
		height: auto;
		min-height: 1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+c", "interrupt", "Interrupt", priority=True),
        Binding("ctrl+d", "end_of_input", "Exit", priority=True),
        Binding("tab", "complete", "Complete", priority=True, show=False),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        prompt: str,
        config: Optional[ReadConfig] = None,
        settings: Optional[FrontendSettings] = None,
    ) -> None:
        super().__init__()
        self._prompt = prompt
        self._config = config or ReadConfig()
        self._settings = settings or FrontendSettings.from_env()
        self.adapter: TextualReplAdapter | None = None
        self._output: RichLog | None = None
        self._edit_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._output = RichLog(id="output", wrap=True, markup=False)
        yield self._output
        self._edit_widget = Static("", id="edit-area")
        yield self._edit_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualReplHooks(
            update_edit=self._update_edit,
            write_output=self._write_output,
            commit_edit=self._commit_edit,
            handle_outcome=self._handle_outcome,
        )
        self.adapter = TextualReplAdapter(
            hooks,
            prompt=self._prompt,
            config=self._config,
            settings=self._settings,
        )

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if event.is_printable and event.character:
            self.adapter.handle_textual_key(event.character, text=event.character)
        else:
            self.adapter.handle_textual_key(event.key)
        event.stop()

    def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.handle_paste(event.text)
        event.stop()

    def action_interrupt(self) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("ctrl+c")

    def action_end_of_input(self) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("ctrl+d")

    def action_complete(self) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("tab")

    def _update_edit(self, state: RenderState) -> None:
        if self._edit_widget:
            self._edit_widget.update(render_edit_area(state))
        if self._status_widget:
            self._status_widget.update("continuing..." if state.incomplete else "")

    def _commit_edit(self, state: Optional[RenderState]) -> None:
        if state is not None and self._output:
            self._output.write(render_edit_area(state, show_cursor=False))

    def _write_output(self, line: str) -> None:
        if self._output:
            self._output.write(Text.from_ansi(line))

    def _handle_outcome(self, outcome: ReadOutcome) -> None:
        if isinstance(outcome, Success):
            for token in outcome.tokens:
                self._write_output(f"=> {token}")
        elif isinstance(outcome, Failure):
            if self._output:
                self._output.write(Text(f"error: {outcome.message}", style="red"))
        elif isinstance(outcome, Exit):
            self.exit()


def _parse_args(
    argv: Optional[Sequence[str]] = None,
    settings: Optional[FrontendSettings] = None,
) -> argparse.Namespace:
    resolved = settings or FrontendSettings.from_env()
    colors = resolved.colors if resolved.colors in COLOR_CHOICES else "default"
    parser = argparse.ArgumentParser(description="Run the statement REPL in Textual.")
    parser.add_argument(
        "--prompt",
        default=resolved.prompt,
        help=f"Prompt shown before each statement (default: {resolved.prompt!r})",
    )
    parser.add_argument(
        "--colors",
        choices=COLOR_CHOICES,
        default=colors,
        help=f"Highlighting scheme (default: {colors})",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = FrontendSettings.from_env()
    telemetry.configure(settings=settings)
    args = _parse_args(argv, settings)
    app = ReplApp(prompt=args.prompt, config=build_config(args), settings=settings)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
