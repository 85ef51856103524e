"""
Logging for the scad_dimensions package.

Everything logs under the "scad_dimensions" logger hierarchy:
- setup_logging() attaches a console handler and, optionally, a JSON-lines
  file for the CLI
- @timed reports how long a drawing operation took (DEBUG)
- collect_diagnostics() captures non-fatal layout problems (an unrecognized
  dimension location, a margin too wide for the reference grid, a title
  block shrunk to fit) reported while a drawing is built

Usage:
    setup_logging(level=logging.INFO, json_file="sheet.log.json")

    with collect_diagnostics() as diagnostics:
        sheet = build_sheet(config)
    for d in diagnostics:
        print(d.level, d.message, d.fields)
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar, Union

PACKAGE_LOGGER = "scad_dimensions"

F = TypeVar('F', bound=Callable[..., Any])

# Attributes every LogRecord has; anything else came in through extra={}
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {
    'message', 'asctime',
}


def record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Fields passed to a log call via extra={}."""
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

class ConsoleFormatter(logging.Formatter):
    """One line per record: ``HH:MM:SS LEVEL module: message [key=value ...]``.

    The package prefix is dropped from logger names.
    """

    def __init__(self):
        super().__init__(datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(PACKAGE_LOGGER + "."):
            name = name[len(PACKAGE_LOGGER) + 1:]
        line = f"{self.formatTime(record, self.datefmt)} {record.levelname:<7} {name}: {record.getMessage()}"

        fields = record_fields(record)
        if fields:
            shown = (f"{k}={v:.4g}" if isinstance(v, float) else f"{k}={v}" for k, v in fields.items())
            line += " [" + ", ".join(shown) + "]"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class JSONFormatter(logging.Formatter):
    """JSON lines: time, level, logger, message, extra fields, exception."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(record_fields(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        # values json cannot encode (paths, enums) are written as str()
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    level: int = logging.INFO,
    json_file: Optional[Union[str, Path]] = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the package logger for the command line.

    Replaces any handlers from a previous call; the package logger stops
    propagating to the root logger.

    Args:
        level: minimum level for all handlers
        json_file: optional JSON-lines log file
        console: log to stderr

    Returns:
        the package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
    logger.propagate = False

    if console:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(ConsoleFormatter())
        logger.addHandler(stream)
    if json_file:
        file_handler = logging.FileHandler(Path(json_file), encoding='utf-8')
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)
    return logger


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------

def timed(operation: Optional[str] = None, level: int = logging.DEBUG) -> Callable[[F], F]:
    """Log the duration of each call of the decorated function.

    Failures are logged at ERROR with the elapsed time and re-raised.

    Example:
        @timed(operation="draw_page_border")
        def draw_page_border(page, margin, ctx):
            ...
    """
    def decorator(func: F) -> F:
        name = operation or func.__name__
        func_logger = logging.getLogger(func.__module__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                func_logger.error(
                    "%s failed after %.3fs: %s", name, time.perf_counter() - start, exc,
                    extra={'operation': name},
                )
                raise
            elapsed = time.perf_counter() - start
            func_logger.log(level, "%s took %.3fs", name, elapsed,
                            extra={'operation': name, 'elapsed_seconds': elapsed})
            return result

        return wrapper  # type: ignore
    return decorator


# ---------------------------------------------------------------------------
# Diagnostic channel
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Diagnostic:
    """One reported layout problem."""
    level: str
    logger: str
    message: str
    fields: Dict[str, Any]


class DiagnosticsHandler(logging.Handler):
    """Keeps the package's WARNING+ records as Diagnostics."""

    def __init__(self, level: int = logging.WARNING):
        super().__init__(level)
        self.records: List[Diagnostic] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(Diagnostic(
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
            fields=record_fields(record),
        ))


@contextmanager
def collect_diagnostics(level: int = logging.WARNING) -> Iterator[List[Diagnostic]]:
    """Capture diagnostics reported while building a drawing.

    Yields:
        list filled with Diagnostic entries as problems are reported
    """
    handler = DiagnosticsHandler(level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.addHandler(handler)
    previous_level = package_logger.level
    if package_logger.getEffectiveLevel() > level:
        package_logger.setLevel(level)
    try:
        yield handler.records
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)
