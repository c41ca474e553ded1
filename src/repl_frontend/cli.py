"""Command-line entry point: ``python -m repl_frontend``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from repl_frontend.completion import VocabularyOracle
from repl_frontend.driver import run_repl
from repl_frontend.editor import LineEditor, ReadConfig
from repl_frontend.highlight import ColorScheme
from repl_frontend.outcomes import Success
from repl_frontend.runtime import telemetry
from repl_frontend.settings import FrontendSettings
from repl_frontend.terminal import StreamSource, StreamSurface

DEMO_WORDS = (
    "List",
    "Map",
    "Option",
    "Seq",
    "String",
    "println",
    "val",
    "var",
    "def",
    "import",
)

DEMO_MEMBERS = {
    "List": ("apply", "empty", "fill", "range", "tabulate"),
    "Map": ("apply", "empty"),
    "Option": ("apply", "empty", "when"),
}

DEMO_SIGNATURES = {
    "List.apply": ("def apply[A](elems: A*): List[A]",),
    "List.fill": ("def fill[A](n: Int)(elem: => A): List[A]",),
    "List.range": (
        "def range(start: Int, end: Int): List[Int]",
        "def range(start: Int, end: Int, step: Int): List[Int]",
    ),
    "println": ("def println(x: Any): Unit",),
}


def demo_oracle() -> VocabularyOracle:
    return VocabularyOracle(
        DEMO_WORDS, members=DEMO_MEMBERS, signatures=DEMO_SIGNATURES
    )


def echo_statement(outcome: Success) -> None:
    for token in outcome.tokens:
        print(f"=> {token}")


def report_failure(message: str) -> None:
    print(f"error: {message}", file=sys.stderr)


COLOR_CHOICES = ("default", "blackwhite")


def build_config(args: argparse.Namespace) -> ReadConfig:
    return ReadConfig(colors=ColorScheme.named(args.colors), completer=demo_oracle())


def _parse_args(
    argv: Optional[Sequence[str]] = None,
    settings: Optional[FrontendSettings] = None,
) -> argparse.Namespace:
    resolved = settings or FrontendSettings.from_env()
    parser = argparse.ArgumentParser(description="Run the statement REPL front-end.")
    parser.add_argument(
        "--prompt",
        default=resolved.prompt,
        help=f"Prompt shown before each statement (default: {resolved.prompt!r})",
    )
    parser.add_argument(
        "--colors",
        choices=COLOR_CHOICES,
        default=resolved.colors if resolved.colors in COLOR_CHOICES else "default",
        help="Highlighting scheme (default: default)",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Read lines from stdin instead of starting the Textual UI",
    )
    return parser.parse_args(argv)


def run_plain(args: argparse.Namespace, settings: FrontendSettings) -> str:
    editor = LineEditor(
        StreamSource(sys.stdin), StreamSurface(sys.stdout), settings=settings
    )
    return run_repl(
        editor,
        prompt=args.prompt,
        config=build_config(args),
        evaluate=echo_statement,
        report=report_failure,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = FrontendSettings.from_env()
    telemetry.configure(settings=settings)
    args = _parse_args(argv, settings)
    if args.plain:
        run_plain(args, settings)
        return 0

    from repl_frontend.adapters.textual.app import ReplApp

    ReplApp(prompt=args.prompt, config=build_config(args), settings=settings).run()
    return 0


__all__ = ["COLOR_CHOICES", "build_config", "demo_oracle", "echo_statement", "main", "run_plain"]
