"""Runtime services (telemetry)."""

from . import telemetry

__all__ = ["telemetry"]
