"""Runtime services shared by every hexhash component."""

from . import telemetry

__all__ = ["telemetry"]
