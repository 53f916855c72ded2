"""Centralized logging setup for Matilda Quill.

Each log file gets its own queue and listener thread, so formatting many
messages never blocks on file I/O. Modules pick their file with
``log_filename``; everything else goes to ``MATILDA_QUILL_LOG_FILE``.
"""

import atexit
import logging
import os
import sys
import threading
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import SimpleQueue

DEFAULT_LOG_FILENAME = "matilda-quill.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_SINKS_LOCK = threading.Lock()
# log filename -> (queue, listener) for that file
_SINKS: dict[str, tuple[SimpleQueue, QueueListener]] = {}


def _is_truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes"}


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


def _stop_sinks() -> None:
    with _SINKS_LOCK:
        for _queue, listener in _SINKS.values():
            listener.stop()
        _SINKS.clear()


atexit.register(_stop_sinks)


def flush_logs() -> None:
    """Block until every queued record has reached its handlers."""
    with _SINKS_LOCK:
        for _queue, listener in _SINKS.values():
            listener.stop()
            listener.start()


def _resolve_logs_dir() -> Path | None:
    env_dir = os.environ.get("MATILDA_QUILL_LOG_DIR") or os.environ.get("MATILDA_LOG_DIR")
    logs_dir = Path(env_dir) if env_dir else Path.home() / ".matilda" / "logs"
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return logs_dir


def _build_handlers(log_filename: str, include_console: bool, include_file: bool) -> list[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = []

    logs_dir = _resolve_logs_dir() if include_file else None
    if logs_dir is not None:
        try:
            file_handler = RotatingFileHandler(
                logs_dir / log_filename,
                maxBytes=_env_int("MATILDA_LOG_MAX_BYTES", 10 * 1024 * 1024),
                backupCount=_env_int("MATILDA_LOG_BACKUP_COUNT", 5),
                encoding="utf-8",
            )
        except OSError:
            file_handler = None
        if file_handler is not None:
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

    if include_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    return handlers


def _sink_queue(log_filename: str, include_console: bool, include_file: bool) -> SimpleQueue | None:
    """Queue feeding the listener for ``log_filename``, started on first use."""
    key = f"{log_filename}|console={include_console}|file={include_file}"
    with _SINKS_LOCK:
        if key in _SINKS:
            return _SINKS[key][0]
        handlers = _build_handlers(log_filename, include_console, include_file)
        if not handlers:
            return None
        queue: SimpleQueue = SimpleQueue()
        listener = QueueListener(queue, *handlers, respect_handler_level=True)
        listener.start()
        _SINKS[key] = (queue, listener)
        return queue


def setup_logging(
    module_name: str,
    log_level: str | None = None,
    include_console: bool | None = None,
    include_file: bool = True,
    log_filename: str | None = None,
) -> logging.Logger:
    """Setup standardized logging for Quill modules.

    Args:
        module_name: Name of the module (usually __name__)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR). If None, uses
            MATILDA_QUILL_LOG_LEVEL, falling back to INFO.
        include_console: Whether to log to stderr. If None, uses
            MATILDA_QUILL_CONSOLE_LOGS ("1"/"true"/"yes" enables).
        include_file: Whether to log to file
        log_filename: File under the log directory for this module. If None,
            uses MATILDA_QUILL_LOG_FILE, falling back to matilda-quill.log.

    Returns:
        Configured logger instance

    """
    logger = logging.getLogger(module_name)

    # Avoid duplicate handlers if already configured
    if logger.handlers:
        return logger

    if log_level is None:
        log_level = os.environ.get("MATILDA_QUILL_LOG_LEVEL", "INFO")
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)
    if include_console is None:
        include_console = _is_truthy(os.environ.get("MATILDA_QUILL_CONSOLE_LOGS"))
    if log_filename is None:
        log_filename = os.environ.get("MATILDA_QUILL_LOG_FILE", DEFAULT_LOG_FILENAME)

    # Keep records out of the root logger; console output is opt-in above.
    logger.propagate = False

    queue = _sink_queue(log_filename, include_console, include_file)
    if queue is None:
        logger.addHandler(logging.NullHandler())
        return logger

    queue_handler = QueueHandler(queue)
    queue_handler.setLevel(level)
    logger.addHandler(queue_handler)
    return logger


def get_logger(module_name: str) -> logging.Logger:
    """Get a logger for a module with default Quill settings."""
    return setup_logging(module_name)


__all__ = ["setup_logging", "get_logger", "flush_logs", "DEFAULT_LOG_FILENAME"]
