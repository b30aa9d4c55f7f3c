"""Editor logging on top of telelog.

Modules fetch loggers with ``get_logger`` and use ``record_event`` for
one-off structured records and ``span`` to profile a block of work. The
Textual renderer owns the terminal, so the entry point calls ``configure``
with a preset that keeps records off the console before the UI starts.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MODEDIT_"
ROOT_LOGGER = "modedit"
DEFAULT_LOG_FILE = "modedit.log"
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LogOptions:
    """Where records go and how they look."""

    level: str = "INFO"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: int = 0
    profiling: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogOptions":
        env = os.environ if environ is None else environ

        def read(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        def flag(name: str, default: bool) -> bool:
            raw = read(name)
            return default if raw is None else raw.lower() in _TRUTHY

        buffer_size = 0
        if flag("LOG_BUFFERED", False):
            buffer_size = int(read("LOG_BUFFER_SIZE") or "2048")
        return cls(
            level=(read("LOG_LEVEL") or "INFO").upper(),
            console=not flag("DISABLE_CONSOLE", False),
            color=not flag("NO_COLOR", False),
            json=flag("LOG_JSON", False),
            log_file=read("LOG_FILE") or "",
            buffer_size=buffer_size,
            profiling=flag("PROFILE", True),
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        config.with_json_format(self.json)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(self.profiling)
        return config


def _file_preset(options: LogOptions) -> LogOptions:
    return replace(
        options,
        console=False,
        log_file=options.log_file or DEFAULT_LOG_FILE,
        buffer_size=options.buffer_size or 2048,
    )


PRESETS: Dict[str, Callable[[LogOptions], LogOptions]] = {
    "debug": lambda options: replace(options, level="DEBUG", console=True),
    "file": _file_preset,
    "quiet": lambda options: replace(options, level="ERROR", console=False),
}

_LOGGERS: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def configure(
    *, preset: Optional[str] = None, options: Optional[LogOptions] = None
) -> LogOptions:
    """Rebuild the telelog config; cached loggers are dropped.

    ``options`` defaults to ``LogOptions.from_env()``. A ``preset`` name from
    ``PRESETS`` is applied on top of it.
    """

    global _config
    resolved = options or LogOptions.from_env()
    if preset is not None:
        try:
            resolved = PRESETS[preset](resolved)
        except KeyError as exc:
            raise ValueError(f"Unknown logging preset '{preset}'") from exc
    _config = resolved.to_config()
    _LOGGERS.clear()
    return resolved


def get_logger(name: Optional[str] = None) -> Any:
    global _config
    if _config is None:
        _config = LogOptions.from_env().to_config()
    logger_name = name or ROOT_LOGGER
    logger = _LOGGERS.get(logger_name)
    if logger is None:
        logger = _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _config)
    return logger


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emit(logger: Any, level: str, message: str, fields: Mapping[str, Any]) -> None:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in fields.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'")
    plain(f"{message} {dict(fields)}" if fields else message)


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as structured fields."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class Span:
    """Yielded by ``span``; ``note`` attaches results logged when the block ends."""

    name: str
    notes: Dict[str, str] = field(default_factory=dict)

    def note(self, key: str, value: Any) -> None:
        self.notes[key] = _text(value)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[Span]:
    """Profile the block under ``name``.

    ``metadata`` becomes logger context while the block runs. ``component``
    also tracks the block as a telelog component (``True`` reuses ``name``).
    A raised exception is logged at error level and propagates.
    """

    log = get_logger(logger_name)
    current = Span(name)
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(
                log.track_component(name if component is True else component)
            )
        stack.enter_context(log.profile(name))
        try:
            yield current
        except Exception as exc:
            _emit(log, "error", f"span::{name}", {**context, "error": exc})
            raise
        if current.notes:
            _emit(log, "debug", f"span::{name}", {**context, **current.notes})


configure()

__all__ = [
    "ENV_PREFIX",
    "LogOptions",
    "PRESETS",
    "Span",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
