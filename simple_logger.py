import os
import traceback
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


_LEVEL_ORDER = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARNING: 30,
    LogLevel.ERROR: 40,
}


class Slogger:
    """Append-only file logger for the terminal UI, which owns stdout."""

    log_path = "logs/artic_table.log"
    min_level = LogLevel.INFO

    @classmethod
    def configure(cls, log_path: Optional[str] = None, level: Optional[str] = None) -> None:
        """
        Set the log file and the minimum level written.

        Args:
            log_path: File to append to
            level: One of DEBUG, INFO, WARNING, ERROR (case-insensitive)
        """
        if log_path:
            cls.log_path = log_path
        if level:
            try:
                cls.min_level = LogLevel(level.upper())
            except ValueError:
                # CRITICAL and friends map to the highest level we have
                cls.min_level = LogLevel.ERROR

    @classmethod
    def _ensure_log_directory(cls):
        """Ensure that the logs directory exists."""
        log_dir = os.path.dirname(cls.log_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

    @classmethod
    def _write(cls, text: str) -> None:
        cls._ensure_log_directory()
        with open(cls.log_path, "a", encoding="utf-8") as f:
            f.write(text)

    @classmethod
    def log(cls, message: str, level: LogLevel = LogLevel.INFO, context: Optional[Dict[str, Any]] = None):
        """
        Log a message with an optional level and context.

        Args:
            message: The message to log
            level: The log level (DEBUG, INFO, WARNING, ERROR)
            context: Optional dictionary of contextual information
        """
        if _LEVEL_ORDER[level] < _LEVEL_ORDER[cls.min_level]:
            return

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        log_message = f"{timestamp} - {level.value} - {message}"

        if context:
            context_str = " | ".join([f"{k}={v}" for k, v in context.items()])
            log_message += f" | {context_str}"

        cls._write(log_message + "\n")

    @classmethod
    def debug(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.DEBUG, context)

    @classmethod
    def info(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.INFO, context)

    @classmethod
    def warning(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.WARNING, context)

    @classmethod
    def error(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.ERROR, context)

    @classmethod
    def exception(cls, e: Exception, message: str = "Exception occurred", context: Optional[Dict[str, Any]] = None):
        """
        Log an exception with its traceback.

        Args:
            e: The exception to log
            message: What was being attempted when it was raised
            context: Optional dictionary of contextual information
        """
        error_context = dict(context or {})
        error_context.update({
            "exception_type": type(e).__name__,
            "exception_message": str(e),
        })
        cls.error(f"{message}: {type(e).__name__} - {e}", error_context)

        exc_traceback = "".join(traceback.format_exception(type(e), e, e.__traceback__))
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        cls._write(f"{timestamp} - {LogLevel.ERROR.value} - TRACEBACK:\n{exc_traceback}\n")
