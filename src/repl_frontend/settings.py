"""Environment-driven settings shared by the CLI and the telemetry layer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "REPL_FRONTEND_"

_TRUTHY = {"1", "true", "yes", "on"}


def _lookup(environ: Mapping[str, str], name: str) -> Optional[str]:
    return environ.get(f"{ENV_PREFIX}{name}")


def _flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _lookup(environ, name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = _lookup(environ, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class FrontendSettings:
    """Process-wide knobs; per-call behaviour lives in ``ReadConfig``."""

    prompt: str = "@ "
    colors: str = "default"
    interrupt_hint: str = "Ctrl-D to exit"
    log_level: str = "WARNING"
    log_console: bool = False
    log_colored: bool = True
    log_file: str = ""
    log_json: bool = False
    log_buffered: bool = False
    log_buffer_size: int = 2048

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FrontendSettings":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            prompt=_lookup(env, "PROMPT") or defaults.prompt,
            colors=(_lookup(env, "COLORS") or defaults.colors).lower(),
            interrupt_hint=_lookup(env, "INTERRUPT_HINT") or defaults.interrupt_hint,
            log_level=(_lookup(env, "LOG_LEVEL") or defaults.log_level).upper(),
            log_console=_flag(env, "LOG_CONSOLE", defaults.log_console),
            log_colored=not _flag(env, "NO_COLOR", False),
            log_file=_lookup(env, "LOG_FILE") or defaults.log_file,
            log_json=_flag(env, "LOG_JSON", defaults.log_json),
            log_buffered=_flag(env, "LOG_BUFFERED", defaults.log_buffered),
            log_buffer_size=_int(env, "LOG_BUFFER_SIZE", defaults.log_buffer_size),
        )


__all__ = ["ENV_PREFIX", "FrontendSettings"]
