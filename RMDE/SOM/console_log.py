# =============================================================================
# console_log.py — Console + Log-file Message Sink
# =============================================================================
#
# print_and_log() is the one output path shared by the decoder, the presenter
# and the CLI.  Each message goes to the interactive console and is appended
# to a rotating log file.
#
#   print_and_log(" Detected clock: %d", clock)
#
# THREADING:
#   A module-level lock serialises whole messages, so a line written to the
#   console and the same line written to the log file are never interleaved
#   with another thread's output.  Ordering between threads is not promised.
#
# The console shows INFO and above; the log file also keeps DEBUG detail.
#
# The log file is opened lazily on the first message.  If it cannot be
# opened, file logging is switched off and the console keeps working.
# =============================================================================

from __future__ import annotations
import logging
import logging.handlers
import sys
import threading

from RMDE.SMM.constants import (
    LOGGER_NAME,
    LOG_FILENAME,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
    LOG_FILE_FORMAT,
    LOG_CONSOLE_FORMAT,
)

logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(logging.DEBUG)

_print_lock = threading.Lock()


class _ConsoleHandler(logging.StreamHandler):
    """StreamHandler bound to whatever sys.stdout is at emit time."""

    @property
    def stream(self):
        return sys.stdout

    @stream.setter
    def stream(self, value):
        pass


_log_filename: str = LOG_FILENAME
_file_logging = True
_console_handler: logging.Handler | None = None
_file_handler: logging.Handler | None = None


def set_log_filename(path: str) -> None:
    """Point the file sink at `path`.  Takes effect on the next message."""
    global _log_filename, _file_logging
    with _print_lock:
        _close_file_handler()
        _log_filename = path
        _file_logging = True


def set_file_logging(enabled: bool) -> None:
    """Enable or disable the log file sink (the console sink always stays on)."""
    global _file_logging
    with _print_lock:
        if not enabled:
            _close_file_handler()
        _file_logging = enabled


def get_log_filename() -> str:
    return _log_filename


def print_and_log(fmt: str, *args, level: int = logging.INFO) -> None:
    """
    Emit one printf-style message to the console and the log file.

    Args:
        fmt:   %-style format string.
        args:  values substituted into fmt.
        level: logging level, INFO unless the caller is reporting a problem.
    """
    with _print_lock:
        _ensure_handlers()
        logger.log(level, fmt, *args)


# ---------------------------------------------------------------------------
# Internal helpers  (call with _print_lock held)
# ---------------------------------------------------------------------------

def _ensure_handlers() -> None:
    global _console_handler, _file_handler, _file_logging

    if _console_handler is None:
        _console_handler = _ConsoleHandler()
        _console_handler.setFormatter(logging.Formatter(LOG_CONSOLE_FORMAT))
        _console_handler.setLevel(logging.INFO)
        logger.addHandler(_console_handler)

    if _file_logging and _file_handler is None:
        try:
            handler = logging.handlers.RotatingFileHandler(
                _log_filename,
                mode="a",
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError:
            print("Can't open logfile, logging disabled!", file=sys.stderr)
            _file_logging = False
            return
        handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT))
        logger.addHandler(handler)
        _file_handler = handler


def _close_file_handler() -> None:
    global _file_handler
    if _file_handler is not None:
        logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
