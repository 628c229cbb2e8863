"""
Centralized error handling system for the CodeShift converter.

This module provides the error taxonomy and custom exception hierarchy
used for consistent error handling throughout the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# User-facing messages shared by the controller and the agent client
EMPTY_INPUT_MESSAGE = "Please enter some code to convert"
CONVERSION_FAILED_MESSAGE = "Conversion failed. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class ErrorType(Enum):
    """Error type categories for consistent error handling."""

    VALIDATION = "validation"
    AGENT = "agent"
    RESPONSE = "response"
    SYSTEM = "system"


class ErrorCode(Enum):
    """Specific error codes for common scenarios."""

    # Validation errors
    EMPTY_INPUT = "EMPTY_INPUT"
    UNSUPPORTED_LANGUAGE = "UNSUPPORTED_LANGUAGE"
    INVALID_INPUT = "INVALID_INPUT"

    # Agent transport and provider errors
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    RATE_LIMITED = "RATE_LIMITED"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    AGENT_FAILURE = "AGENT_FAILURE"

    # Response shape errors
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"

    # System errors
    OS_ERROR = "OS_ERROR"
    MEMORY_ERROR = "MEMORY_ERROR"

    # Generic
    UNKNOWN = "UNKNOWN"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class BaseAppError(Exception):
    """
    Base application error with comprehensive metadata.

    This is the root of all custom application errors, providing
    structured information for consistent error handling and user feedback.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    retriable: bool = False
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return user-friendly error message."""
        return self.user_message

    def __repr__(self) -> str:
        """Return detailed error representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"type={self.type.value}, "
            f"code={self.code.value}, "
            f"message='{self.user_message}'"
            f")"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "type": self.type.value,
            "code": self.code.value,
            "user_message": self.user_message,
            "technical_message": self.technical_message,
            "severity": self.severity.value,
            "retriable": self.retriable,
            "context": self.context,
        }


class ValidationError(BaseAppError):
    """Input validation related errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        field: str | None = None,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.LOW,
        retriable: bool = False,
        context: dict[str, Any] | None = None,
    ):
        context = context or {}
        if field:
            context["field"] = field

        super().__init__(
            type=ErrorType.VALIDATION,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            retriable=retriable,
            context=context,
        )

    @property
    def field(self) -> str | None:
        """Get the field that caused the validation error."""
        return self.context.get("field")


class InvalidLanguageError(ValidationError):
    """Raised when a language label is not in the supported set."""

    def __init__(self, language: object, field: str | None = None):
        super().__init__(
            code=ErrorCode.UNSUPPORTED_LANGUAGE,
            user_message=f"Unsupported language: {language}",
            field=field,
            technical_message=f"{language!r} is not a supported language label",
        )
        self.language = language


class AgentError(BaseAppError):
    """Transport or provider failure while invoking the conversion agent."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        retriable: bool = True,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.AGENT,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            retriable=retriable,
            context=context or {},
        )


class AgentResponseError(BaseAppError):
    """
    The agent answered, but not with a usable conversion.

    The user message is either the provider's own error text or the generic
    fallback; raw parsing details only go to ``technical_message``.
    """

    def __init__(
        self,
        user_message: str = CONVERSION_FAILED_MESSAGE,
        technical_message: str | None = None,
        code: ErrorCode = ErrorCode.MALFORMED_RESPONSE,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.RESPONSE,
            code=code,
            user_message=user_message or CONVERSION_FAILED_MESSAGE,
            technical_message=technical_message,
            severity=ErrorSeverity.MEDIUM,
            retriable=True,
            context=context or {},
        )


class SystemError(BaseAppError):
    """System level errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        retriable: bool = False,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.SYSTEM,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            retriable=retriable,
            context=context or {},
        )


# Exception mapping configuration, checked in order so subclasses come first
_EXCEPTION_MAPPING: list[tuple[type[Exception], ErrorType, ErrorCode, str]] = [
    (httpx.TimeoutException, ErrorType.AGENT, ErrorCode.TIMEOUT, "The conversion service timed out"),
    (httpx.RequestError, ErrorType.AGENT, ErrorCode.NETWORK_ERROR, "Could not reach the conversion service"),
    (TimeoutError, ErrorType.AGENT, ErrorCode.TIMEOUT, "Operation timed out"),
    (ConnectionError, ErrorType.AGENT, ErrorCode.NETWORK_ERROR, "Network connection failed"),
    (MemoryError, ErrorType.SYSTEM, ErrorCode.MEMORY_ERROR, "Insufficient memory"),
    (OSError, ErrorType.SYSTEM, ErrorCode.OS_ERROR, "System error occurred"),
    (ValueError, ErrorType.VALIDATION, ErrorCode.INVALID_INPUT, "Invalid input provided"),
]


def map_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Map a built-in or library exception to a custom application error.

    Args:
        exc: The exception to map
        context: Optional context information

    Returns:
        BaseAppError instance with appropriate type and metadata
    """
    context = context or {}

    # Handle existing custom errors
    if isinstance(exc, BaseAppError):
        return exc

    for exc_class, error_type, error_code, default_message in _EXCEPTION_MAPPING:
        if not isinstance(exc, exc_class):
            continue

        user_message = str(exc) if str(exc) else default_message
        technical_message = f"{type(exc).__name__}: {exc}"

        if error_type == ErrorType.AGENT:
            return AgentError(
                code=error_code,
                user_message=user_message,
                technical_message=technical_message,
                context=context,
            )
        if error_type == ErrorType.VALIDATION:
            return ValidationError(
                code=error_code,
                user_message=user_message,
                technical_message=technical_message,
                context=context,
            )
        return SystemError(
            code=error_code,
            user_message=user_message,
            technical_message=technical_message,
            context=context,
        )

    # Fallback for unknown exceptions
    logger.warning(f"Unknown exception type: {type(exc).__name__}: {exc}")
    return SystemError(
        code=ErrorCode.UNKNOWN,
        user_message=UNEXPECTED_ERROR_MESSAGE,
        technical_message=f"{type(exc).__name__}: {exc}",
        context=context,
    )


def from_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Convert any exception to a BaseAppError.

    This is an alias for map_exception for convenience.
    """
    return map_exception(exc, context)
