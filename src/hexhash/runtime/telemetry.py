"""Telemetry for hexhash, backed by telelog.

The rest of the package only touches four names:

``configure(...)`` -- adopt an explicit telelog config or a named preset
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block and optionally track it as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "HEXHASH_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "hexhash")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _development() -> Any:
    config = tl.Config()
    config.with_min_level("DEBUG")
    config.with_console_output(True)
    config.with_colored_output(True)
    config.with_json_format(False)
    return config


def _production() -> Any:
    config = tl.Config()
    config.with_min_level("INFO")
    config.with_console_output(False)
    config.with_file_output(env("LOG_FILE") or "hexhash.log")
    config.with_buffering(True)
    return config


def _performance() -> Any:
    config = tl.Config()
    config.with_min_level("DEBUG")
    config.with_console_output(False)
    config.with_json_format(True)
    config.with_buffering(True)
    config.with_file_output(env("LOG_FILE") or "hexhash-performance.log")
    return config


_PRESETS: Dict[str, Callable[[], Any]] = {
    "development": _development,
    "production": _production,
    "performance": _performance,
}


def _from_environment() -> Any:
    config = tl.Config()
    config.with_min_level((env("LOG_LEVEL") or "WARNING").upper())

    console = not env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))

    if env_flag("LOG_JSON", False):
        config.with_json_format(True)

    log_file = env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    if env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(int(env("LOG_BUFFER_SIZE") or "2048"))

    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    Parameters
    ----------
    config:
        Explicit ``telelog.Config`` to adopt.
    preset:
        One of ``"development"``, ``"production"`` or ``"performance"``.
        Mutually exclusive with ``config``.

    With neither argument the configuration is rebuilt from ``HEXHASH_*``
    environment variables. Cached loggers are dropped either way.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        builder = _PRESETS.get(preset.lower())
        if builder is None:
            raise ValueError(f"Unknown preset '{preset}'.")
        config = builder()
    elif config is None:
        config = _from_environment()

    config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def _active_config() -> Any:
    if _ACTIVE_CONFIG is None:
        configure()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` bound to the active config."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _active_config()
        )
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span``; reports failures with the span's metadata."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def _payload(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        return payload

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload({"reason": reason}))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block and, when ``component`` is set, track it as a component.

    ``component=True`` reuses ``name`` as the component identifier; a string
    is used verbatim. ``metadata`` is pushed as logger context for the
    duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (
        component if isinstance(component, str) else None
    )

    metadata_payload = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in metadata_payload.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(metadata_payload),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in metadata_payload:
                log.remove_context(key)


__all__ = [
    "ENV_PREFIX",
    "SpanHandle",
    "configure",
    "env",
    "env_flag",
    "get_logger",
    "record_event",
    "span",
]
