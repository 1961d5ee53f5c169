"""Environment-driven settings for the hex paste watcher."""

from __future__ import annotations

from dataclasses import dataclass

from hexhash.runtime.telemetry import env_flag


@dataclass(frozen=True)
class WatcherSettings:
    enabled: bool = True
    check_prefix: bool = True


def load_settings() -> WatcherSettings:
    """Read ``HEXHASH_ENABLED`` and ``HEXHASH_CHECK_PREFIX`` (both default on)."""

    return WatcherSettings(
        enabled=env_flag("ENABLED", True),
        check_prefix=env_flag("CHECK_PREFIX", True),
    )


__all__ = ["WatcherSettings", "load_settings"]
