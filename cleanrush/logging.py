"""
Console and structured logging for CleanRush.

Two channels:

1. Console messages through get_logger(name). A logger prints
   "[name] LEVEL: message" when its effective level allows it. The
   level is looked up per logger name and falls back to the global one.

2. Structured records through emit_record(channel, record). A record
   goes to the LogSink registered for its channel: JSONL files for
   session replays, or nowhere at all.

Environment:
    CLEANRUSH_LOG_LEVEL=DEBUG               global console level
    CLEANRUSH_LOG_SPAWNER=TRACE             level for one logger
    CLEANRUSH_LOG_DIR=/tmp/cleanrush        directory for JSONL records
    CLEANRUSH_LOGGING_SESSION_ENABLED=true  write 'session' records to disk
    CLEANRUSH_LOGGING_SESSION_DIR=/tmp/x    per-channel directory

Usage:
    from cleanrush.logging import emit_record, get_logger

    log = get_logger('cleaning_game')
    log.info("level %d started", 3)
    emit_record('session', {'type': 'game_over', 'score': 150})
"""

import json
import os
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import IO, Any, Dict, Mapping, Optional

LEVEL_ENV = 'CLEANRUSH_LOG_LEVEL'
DIR_ENV = 'CLEANRUSH_LOG_DIR'
_LEVEL_PREFIX = 'CLEANRUSH_LOG_'
_CHANNEL_PREFIX = 'CLEANRUSH_LOGGING_'

DEFAULT_LOG_DIR = Path.home() / '.cleanrush' / 'logs'

_TRUE_WORDS = frozenset({'true', '1', 'yes', 'on'})
_FALSE_WORDS = frozenset({'false', '0', 'no', 'off'})


class LogLevel(IntEnum):
    """Severity thresholds. Numbering follows the stdlib logging module."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100

    @classmethod
    def parse(cls, name: str) -> 'LogLevel':
        """Level for a name such as 'debug' or 'WARN'. Unknown names give INFO."""
        key = name.strip().upper()
        if key == 'WARN':
            key = 'WARNING'
        return cls.__members__.get(key, cls.INFO)


# Shared by every logger and sink factory
_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},     # logger key -> LogLevel
    'log_dir': None,         # None: DEFAULT_LOG_DIR
    'modules': {},           # channel -> {'enabled': bool, 'dir': str, ...}
}


def _logger_key(name: str) -> str:
    return name.lower().replace('.', '_').replace('/', '_')


# =============================================================================
# Structured record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Accept one JSON-serializable record for a channel."""

    def flush(self) -> None:
        """Push out anything buffered."""

    def close(self) -> None:
        """Release files or connections held by the sink."""

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class NullSink(LogSink):
    """Drops every record. Used for channels that are switched off."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass


class FileSink(LogSink):
    """Appends records to one JSONL file per channel.

    Files are named <session_name>_<channel>.jsonl. The first line of a
    file is a header and close() writes a footer, so a file without a
    footer came from a run that did not shut down cleanly.

    Args:
        log_dir: Target directory (default: get_log_dir())
        session_name: Prefix for file names (default: start timestamp)
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        session_name: Optional[str] = None,
    ):
        self.log_dir = Path(log_dir) if log_dir else None
        self.session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._handles: Dict[str, IO[str]] = {}

    def path_for(self, module: str) -> Path:
        directory = self.log_dir if self.log_dir is not None else get_log_dir()
        return directory / f"{self.session_name}_{module}.jsonl"

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Files opened so far, by channel."""
        return {module: self.path_for(module) for module in self._handles}

    @staticmethod
    def _write_line(handle: IO[str], payload: Dict[str, Any]) -> None:
        handle.write(json.dumps(payload) + "\n")

    def _handle(self, module: str) -> IO[str]:
        handle = self._handles.get(module)
        if handle is None:
            path = self.path_for(module)
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = path.open('a', encoding='utf-8')
            self._handles[module] = handle
            self._write_line(handle, {
                'type': 'header',
                'module': module,
                'session_name': self.session_name,
                'start_time': time.time(),
            })
        return handle

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        stamped = dict(record)
        stamped.setdefault('wall_time', time.time())
        self._write_line(self._handle(module), stamped)

    def flush(self) -> None:
        for handle in self._handles.values():
            handle.flush()

    def close(self) -> None:
        while self._handles:
            module, handle = self._handles.popitem()
            self._write_line(handle, {
                'type': 'footer',
                'module': module,
                'end_time': time.time(),
            })
            handle.close()


# channel -> sink
_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Route records for a channel to `sink`.

    A sink previously registered for the channel is closed.
    """
    previous = _sinks.get(module)
    _sinks[module] = sink
    if previous is not None and previous is not sink:
        previous.close()


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """Send a structured record to its channel's sink.

    Args:
        module: Channel name (e.g., 'session')
        record: JSON-serializable payload

    Returns:
        False if no sink is registered for the channel
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and unregister every sink."""
    sinks = list(_sinks.values())
    _sinks.clear()
    for sink in sinks:
        sink.close()


def create_sink_for_environment(
    module: str,
    session_name: Optional[str] = None,
) -> LogSink:
    """Build the sink a channel is configured for.

    Args:
        module: Channel name looked up in CLEANRUSH_LOGGING_<CHANNEL>_*
        session_name: Prefix for file names

    Returns:
        FileSink when the channel is enabled, otherwise NullSink
    """
    settings = get_module_config(module)
    if settings.get('enabled'):
        return FileSink(log_dir=settings.get('dir'), session_name=session_name)
    return NullSink()


# =============================================================================
# Configuration
# =============================================================================

def get_log_dir() -> Path:
    """Directory for JSONL records: the configured one or ~/.cleanrush/logs."""
    configured = _config.get('log_dir')
    if configured:
        return Path(configured).expanduser()
    return DEFAULT_LOG_DIR


def get_module_config(module: str) -> Dict[str, Any]:
    """Settings for a record channel, empty if none were given."""
    return _config['modules'].get(module.lower(), {})


def _parse_env_value(raw: str) -> Any:
    """Coerce an environment string to bool, int or float where it looks like one."""
    lowered = raw.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """Set console levels and the record directory from code.

    Args:
        level: Global console level name
        modules: Per-logger overrides, e.g. {'spawner': 'DEBUG'}
        log_dir: Where FileSink writes when a channel has no 'dir' setting
    """
    _config['default_level'] = LogLevel.parse(level)
    for name, name_level in (modules or {}).items():
        _config['module_levels'][_logger_key(name)] = LogLevel.parse(name_level)
    if log_dir is not None:
        _config['log_dir'] = log_dir


def _load_env_config(environ: Optional[Mapping[str, str]] = None) -> None:
    """Apply CLEANRUSH_LOG_* levels and CLEANRUSH_LOGGING_* channel settings."""
    env = os.environ if environ is None else environ
    for key, value in env.items():
        if key == LEVEL_ENV:
            _config['default_level'] = LogLevel.parse(value)
        elif key == DIR_ENV:
            _config['log_dir'] = value
        elif key.startswith(_CHANNEL_PREFIX):
            channel, _, setting = key[len(_CHANNEL_PREFIX):].lower().partition('_')
            if channel and setting:
                _config['modules'].setdefault(channel, {})[setting] = _parse_env_value(value)
        elif key.startswith(_LEVEL_PREFIX):
            name = key[len(_LEVEL_PREFIX):]
            _config['module_levels'][_logger_key(name)] = LogLevel.parse(value)


_load_env_config()


# =============================================================================
# Console loggers
# =============================================================================

class CleanRushLogger:
    """Named console logger.

    The effective level is resolved on every call, so configure_logging()
    also applies to loggers created earlier.
    """

    def __init__(self, module: str):
        self.module = module
        self._key = _logger_key(module)

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, label: str, msg: str, args: tuple) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args!r}"
        print(f"[{self.module}] {label}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, args)


@lru_cache(maxsize=64)
def get_logger(module: str) -> CleanRushLogger:
    """Cached logger for a module name (e.g., 'cleaning_game', 'scheduling')."""
    return CleanRushLogger(module)
