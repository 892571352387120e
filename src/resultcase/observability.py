"""Structured logging with tap-ready callbacks.

The combinators never log on their own. To watch a chain, insert a logging
callback with ``tap``/``tap_error``; the callback returns None and the result
flows through unchanged.

Configuration is process-wide: once ``configure_logging`` runs, loggers in
every thread render through the same renderer and threshold.

Quick Start:
    >>> from resultcase import ok
    >>> from resultcase.observability import configure_logging, log_value
    >>>
    >>> configure_logging("console", level="DEBUG")
    >>> ok(42).tap(log_value("parsed")).map(str)
    # => 10:30:45.123 [debug] parsed value=42
    Ok('42')
"""

from __future__ import annotations

import json
import logging
import sys
import threading
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Callable, Literal, Protocol, TextIO, runtime_checkable

if TYPE_CHECKING:
    from .settings import ResultcaseSettings

JsonDict = dict[str, Any]


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context.

    Immutable: bind() returns a new logger with merged context. A logger
    without its own renderer/level follows the process-wide configuration.

    Example:
        >>> log = get_logger("checkout").bind(order_id=7)
        >>> log.info("validated", total=12.5)
        # => 10:30:45.123 [info] validated logger=checkout order_id=7 total=12.5
    """

    context: JsonDict = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int | None = None

    def bind(self, **kw: Any) -> BoundLogger:
        """Create new logger with additional bound context."""
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer, _level=self._level)

    def _log(self, level: int, event: str, **kw: Any) -> None:
        config = _current_config()
        threshold = self._level if self._level is not None else config.level
        if level < threshold:
            return
        entry = LogEntry(time.time(), _level_name(level), event, {**self.context, **kw})
        (self._renderer or config.renderer).render(entry)

    def debug(self, event: str, **kw: Any) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: Any) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: Any) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: Any) -> None: self._log(logging.ERROR, event, **kw)


@dataclass(slots=True)
class LogEntry:
    """Single rendered log record."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """Human-readable timestamp (HH:MM:SS.mmm)."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """``HH:MM:SS.mmm [level] event key=value`` lines; payloads shown with repr()."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = colors only on a TTY

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = hasattr(self.output, "isatty") and self.output.isatty()

    def render(self, entry: LogEntry) -> None:
        c = _COLORS if self.colors else _NO_COLORS
        fields = " ".join(f"{c['cyan']}{k}{c['reset']}={v!r}" for k, v in sorted(entry.context.items()))
        line = (
            f"{c['dim']}{entry.ts_human}{c['reset']} "
            f"{c[_LEVEL_COLOR_KEYS.get(entry.level, 'dim')]}[{entry.level}]{c['reset']} "
            f"{c['bold']}{entry.event}{c['reset']}"
        )
        print(f"{line} {fields}" if fields else line, file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output; payloads that json cannot encode fall back to str()."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        data = {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context}
        print(json.dumps(data, default=str), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class _LogConfig:
    renderer: LogRenderer
    level: int


# Replaced as a whole, never mutated, so readers need no lock.
_config: _LogConfig | None = None
_config_lock = threading.Lock()


def configure_logging(
    style: Literal["console", "json", "none"] = "console",
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Configure process-wide structured logging.

    Args:
        style: "console" (human), "json" (one object per line), "none" (silent)
        level: Minimum log level - DEBUG, INFO, WARNING, ERROR
        output: Output stream (default: stderr for console, stdout for json)
        colors: Force console colors on/off (None = auto-detect)

    Raises:
        ValueError: On an unknown style
    """
    global _config
    renderer: LogRenderer
    if style == "console":
        renderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
    elif style == "json":
        renderer = JsonRenderer(output=output or sys.stdout)
    elif style == "none":
        renderer = NoOpRenderer()
    else:
        raise ValueError(f"Unknown style: {style}. Use 'console', 'json', or 'none'")

    with _config_lock:
        _config = _LogConfig(renderer, getattr(logging, level.upper(), logging.INFO))
    return renderer


def configure_from_settings(settings: ResultcaseSettings | None = None, *, output: TextIO | None = None) -> LogRenderer:
    """Apply ``LoggingSettings`` (from the environment unless given).

    ``debug=True`` on the root settings lowers the threshold to DEBUG.
    """
    if settings is None:
        from .settings import get_settings
        settings = get_settings()
    cfg = settings.logging
    level = "DEBUG" if settings.debug else cfg.level
    return configure_logging(cfg.format, level, output=output, colors=cfg.colors)


def get_logger(name: str | None = None, **initial_context: Any) -> BoundLogger:
    """Get a structured logger, with ``name`` bound as ``logger``."""
    ctx = dict(initial_context)
    if name:
        ctx["logger"] = name
    return BoundLogger(context=ctx)


def _current_config() -> _LogConfig:
    global _config
    config = _config
    if config is None:
        with _config_lock:
            if _config is None:
                _config = _LogConfig(ConsoleRenderer(), logging.INFO)
            config = _config
    return config


# ─────────────────────────────────────────────────────────────────────────────
# Tap Callbacks
# ─────────────────────────────────────────────────────────────────────────────


def log_value(event: str, *, log: BoundLogger | None = None, level: str = "debug") -> Callable[[object], None]:
    """Build a ``tap`` callback that logs the Ok value under ``value``.

    Example:
        >>> parse(raw).tap(log_value("parsed", level="info")).and_then(validate)
    """
    return _payload_logger(event, "value", log, level)


def log_reason(event: str, *, log: BoundLogger | None = None, level: str = "warning") -> Callable[[object], None]:
    """Build a ``tap_error`` callback that logs the Error reason under ``reason``."""
    return _payload_logger(event, "reason", log, level)


def _payload_logger(event: str, key: str, log: BoundLogger | None, level: str) -> Callable[[object], None]:
    emit_name = level.lower()
    if emit_name not in _EMITTERS:
        raise ValueError(f"Unknown level: {level}. Use one of {', '.join(_EMITTERS)}")

    def emit(payload: object) -> None:
        getattr(log or get_logger(), emit_name)(event, **{key: payload})

    return emit


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


_EMITTERS = ("debug", "info", "warning", "error")

_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "cyan": "\033[36m",
}
_NO_COLORS = {k: "" for k in _COLORS}

_LEVEL_COLOR_KEYS = {"debug": "blue", "info": "green", "warning": "yellow", "error": "red", "critical": "red"}


def _level_name(level: int) -> str:
    return logging.getLevelName(level).lower()
