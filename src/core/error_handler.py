"""
Centralized error handling and logging infrastructure for the CodeShift converter.

This module provides a singleton ErrorHandler that captures and logs exceptions
raised around agent calls and turns them into user-facing messages while
keeping the full diagnostic information in a rotating log file.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import threading
import traceback
from pathlib import Path
from typing import Any, ClassVar

from PySide6.QtCore import QObject, QStandardPaths, Signal

from .config import LOG_LEVELS, get_app_config_dir
from .errors import UNEXPECTED_ERROR_MESSAGE, BaseAppError, from_exception

SENSITIVE_KEYS = ("password", "token", "key", "secret", "authorization")
MAX_CONTEXT_ITEMS = 20
MAX_CONTEXT_VALUE_LENGTH = 200


class ErrorHandler(QObject):
    """
    Centralized error handler with logging and user message translation.

    Signals:
        errorOccurred(object): emitted with the normalized BaseAppError,
            from whichever thread handled the exception
    """

    # Signal emitted when an error occurs (thread-safe)
    errorOccurred = Signal(object)  # BaseAppError

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the error handler (called only once due to singleton)."""
        if hasattr(self, "_initialized"):
            return

        super().__init__()
        self._initialized = True
        self._lock = threading.Lock()
        self._original_excepthook = sys.excepthook
        self._original_threading_excepthook = getattr(threading, "excepthook", None)

        # Initialize logging
        self._setup_logging()

    def capture(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Normalize an exception into a BaseAppError without logging it.

        Args:
            exception: The exception to capture
            context: Optional context information

        Returns:
            BaseAppError with normalized metadata and a traceback in its context
        """
        # Sanitize context before it reaches the log
        app_error = from_exception(exception, self._sanitize_context(context or {}))

        if not app_error.technical_message:
            app_error.technical_message = f"{type(exception).__name__}: {exception}"

        # Add traceback to context if not already present
        if "traceback" not in app_error.context:
            tb_str = traceback.format_exc()
            # Not in exception context, create traceback from exception
            if tb_str == "NoneType: None\n":
                tb_str = f"{type(exception).__name__}: {exception}\n"
            app_error.context["traceback"] = tb_str

        return app_error

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Capture, log and broadcast an exception.

        Args:
            exception: The exception to handle
            context: Optional context information

        Returns:
            BaseAppError for further processing
        """
        # Don't handle system exit or keyboard interrupt
        if isinstance(exception, SystemExit | KeyboardInterrupt):
            raise exception

        # Capture and normalize the exception
        app_error = self.capture(exception, context)

        # Log the error with full details
        if self._logger:
            with self._lock:
                self._logger.error(
                    f"[{app_error.code.value}] {app_error.user_message}",
                    extra={
                        "app_code": app_error.code.value,
                        "error_type": app_error.type.value,
                        "severity": app_error.severity.value,
                        "retriable": app_error.retriable,
                    },
                    exc_info=exception,
                )

        # Emit signal for UI components (thread-safe)
        self.errorOccurred.emit(app_error)
        return app_error

    def to_user_message(self, exception: BaseException) -> str:
        """
        Describe an exception for display.

        The exception's own description wins; exceptions that carry no text
        fall back to a generic message.
        """
        if isinstance(exception, BaseAppError):
            return exception.user_message or UNEXPECTED_ERROR_MESSAGE
        return str(exception) or UNEXPECTED_ERROR_MESSAGE

    def _setup_logging(self) -> None:
        """Set up rotating file logging in the app data directory."""
        try:
            # Get app data directory
            app_data_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)

            if not app_data_location:
                # Fallback to config location
                app_data_path = get_app_config_dir()
            else:
                app_data_path = Path(app_data_location)

            # Create logs directory
            logs_dir = app_data_path / "logs"
            logs_dir.mkdir(parents=True, exist_ok=True)

            # Set up logger
            ErrorHandler._logger = logging.getLogger("codeshift.errors")
            ErrorHandler._logger.setLevel(logging.DEBUG)
            ErrorHandler._logger.propagate = False

            # Avoid duplicate handlers
            if not ErrorHandler._logger.handlers:
                # File handler with rotation
                file_handler = logging.handlers.RotatingFileHandler(
                    logs_dir / "app.log",
                    maxBytes=5_242_880,  # 5MB
                    backupCount=5,
                    encoding="utf-8",
                )
                # Formatter with error code
                formatter = logging.Formatter(
                    "%(asctime)s | %(levelname)s | %(name)s | code=%(app_code)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
                file_handler.setFormatter(formatter)
                ErrorHandler._logger.addHandler(file_handler)

                # Console handler for debug builds
                if __debug__:
                    console_handler = logging.StreamHandler()
                    console_handler.setFormatter(formatter)
                    console_handler.setLevel(logging.WARNING)
                    ErrorHandler._logger.addHandler(console_handler)

        except Exception as e:
            # Fallback to basic logging if setup fails
            logging.basicConfig(level=logging.ERROR)
            logging.error(f"Failed to setup error logging: {e}")

    def _sanitize_context(self, context: dict[str, Any]) -> dict[str, Any]:
        """
        Redact sensitive keys and bound the size of context values.

        Agent requests carry source code and API keys, neither of which
        belongs in a log file in full.
        """
        safe_context: dict[str, Any] = {}

        for item_count, (key, value) in enumerate(context.items()):
            if item_count >= MAX_CONTEXT_ITEMS:
                safe_context["..."] = f"({len(context) - MAX_CONTEXT_ITEMS} more items truncated)"
                break

            # Redact sensitive keys
            if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                safe_context[key] = "[REDACTED]"
            elif isinstance(value, str) and len(value) > MAX_CONTEXT_VALUE_LENGTH:
                safe_context[key] = value[:MAX_CONTEXT_VALUE_LENGTH] + "..."
            elif isinstance(value, str | int | float | bool) or value is None:
                safe_context[key] = value
            else:
                try:
                    safe_context[key] = repr(value)[:MAX_CONTEXT_VALUE_LENGTH]
                except Exception:
                    safe_context[key] = "[REPR_FAILED]"

        return safe_context

    def install_hooks(self) -> None:
        """Install exception hooks for unhandled exceptions."""

        # Install sys.excepthook
        def exception_hook(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: Any) -> None:
            # Let keyboard interrupts through
            if issubclass(exc_type, KeyboardInterrupt):
                self._original_excepthook(exc_type, exc_value, exc_traceback)
                return

            try:
                if isinstance(exc_value, Exception):
                    self.handle(exc_value, {"source": "sys.excepthook"})
            except Exception:
                # Fallback to original handler if our handler fails
                self._original_excepthook(exc_type, exc_value, exc_traceback)

        sys.excepthook = exception_hook

        # Install threading.excepthook
        def threading_exception_hook(args: threading.ExceptHookArgs) -> None:
            try:
                if isinstance(args.exc_value, Exception):
                    self.handle(
                        args.exc_value,
                        {
                            "source": "threading.excepthook",
                            "thread": args.thread.name if args.thread else "unknown",
                        },
                    )
            except Exception:
                # Fallback to original handler
                if self._original_threading_excepthook:
                    self._original_threading_excepthook(args)

        threading.excepthook = threading_exception_hook

    def restore_hooks(self) -> None:
        """Restore original exception hooks."""
        sys.excepthook = self._original_excepthook
        if self._original_threading_excepthook:
            threading.excepthook = self._original_threading_excepthook


def get_error_handler() -> ErrorHandler:
    """Get the global ErrorHandler instance."""
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """
    Set up global error handling for the application.

    This should be called once during application startup.
    """
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging(level: str = "INFO") -> None:
    """
    Initialize logging configuration.

    Args:
        level: Root log level name; unknown names fall back to INFO
    """
    # The ErrorHandler sets up its own logging when instantiated
    get_error_handler()

    level_name = level.upper() if isinstance(level, str) else "INFO"
    if level_name not in LOG_LEVELS:
        level_name = "INFO"

    # Set up basic logging for other modules
    logging.basicConfig(
        level=getattr(logging, level_name),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
