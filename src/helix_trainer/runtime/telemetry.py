"""Logging and profiling for the trainer, built on telelog.

Public surface:

``configure(...)`` -- adopt an explicit telelog config or a named preset
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block and optionally track it as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

from helix_trainer.config import ENV_PREFIX

tl = cast(Any, telelog)

DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "helix_trainer")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None

_PRESETS = ("development", "production", "performance")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _with_profiling(config: Any) -> Any:
    config.with_profiling(True)
    return config


def _build_preset_config(preset: str) -> Any:
    config = tl.Config()
    key = preset.lower()

    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
        config.with_json_format(False)
    elif key == "production":
        config.with_min_level("WARNING")
        config.with_console_output(False)
        config.with_file_output(_env("LOG_FILE") or "helix_trainer.log")
        config.with_buffering(True)
    elif key == "performance":
        config.with_min_level("DEBUG")
        config.with_console_output(False)
        config.with_buffering(True)
        config.with_json_format(True)
        config.with_file_output(_env("LOG_FILE") or "helix_trainer-profile.log")
    else:
        raise ValueError(f"Unknown preset '{preset}', expected one of {_PRESETS}.")

    return _with_profiling(config)


def _build_default_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "WARNING").upper())

    if _env_flag("DISABLE_CONSOLE", False):
        config.with_console_output(False)
    else:
        config.with_console_output(True)
        config.with_colored_output(not _env_flag("NO_COLOR", False))

    if _env_flag("LOG_JSON", False):
        config.with_json_format(True)

    log_file = _env("LOG_FILE") or DEFAULT_LOG_FILE
    if log_file:
        config.with_file_output(log_file)

    if _env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))

    return _with_profiling(config)


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` is an explicit ``telelog.Config``; ``preset`` names one of
    ``development``, ``production`` or ``performance``. The two are mutually
    exclusive. With neither, the environment-driven default is rebuilt.
    Cached loggers are dropped so the next ``get_logger`` call picks up the
    new settings.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    _ACTIVE_CONFIG = _with_profiling(config)
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _build_default_config()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` bound to the active config."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _resolve_level_method(
    logger: Any, level: Any, *, expect_data: bool = False
) -> Tuple[Any, bool]:
    name = str(level).lower()
    if expect_data:
        with_attr = getattr(logger, f"{name}_with", None)
        if with_attr is not None:
            return with_attr, True

    attr = getattr(logger, name, None)
    if attr is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return attr, False


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    method, accepts_data = _resolve_level_method(log, level, expect_data=True)
    message = f"event::{name}"
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for attaching metadata mid-flight."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: str, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})

        method, accepts = _resolve_level_method(self.logger, level, expect_data=True)
        if accepts:
            method(message, _format_pairs(payload))
        else:
            method(f"{message} {payload}")

    def fail(self, reason: str) -> None:
        self._emit("error", "span::fail", {"reason": reason})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block of engine work.

    Parameters
    ----------
    name:
        Operation name passed to ``logger.profile``.
    logger_name:
        Target logger; defaults to the trainer logger.
    component:
        ``True`` tracks the block as a component named after the span; a string
        names the component explicitly.
    metadata:
        Values pushed as logger context for the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    context_keys = []
    metadata_payload: Dict[str, Any] = {}
    if metadata:
        for key, value in metadata.items():
            serialized = _stringify(value)
            metadata_payload[key] = serialized
            log.add_context(key, serialized)
            context_keys.append(key)

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
            for key in context_keys:
                log.remove_context(key)


configure()
logger = get_logger()

__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
