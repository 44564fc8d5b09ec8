"""Process-wide runtime services (telemetry)."""

from . import telemetry

__all__ = ["telemetry"]
