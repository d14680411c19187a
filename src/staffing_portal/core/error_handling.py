"""Error taxonomy, centralized error logging and bounded retry."""

import random
import time
from typing import Any, Callable, Dict, Optional, Tuple, Type
from datetime import datetime
from enum import Enum
from dataclasses import dataclass

from .logging import get_logger

logger = get_logger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification and routing."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    STATE = "state"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_SERVICE = "external_service"
    SYSTEM = "system"


@dataclass
class ErrorContext:
    """Context information for error handling and logging."""
    operation: str
    component: str
    subject_id: Optional[str] = None
    request_id: Optional[str] = None
    additional_data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "component": self.component,
            "subject_id": self.subject_id,
            "request_id": self.request_id,
            "additional_data": self.additional_data,
        }


@dataclass
class RetryConfig:
    """Configuration for retry mechanisms."""
    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 60.0
    exponential_base: float = 2.0
    jitter: bool = True
    retryable_exceptions: Tuple[Type[Exception], ...] = (Exception,)


class PortalError(Exception):
    """Base exception class for staffing portal errors."""

    status_code = 500
    error_code = "internal_error"

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context
        self.original_error = original_error
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "message": self.message,
            "error_code": self.error_code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.to_dict() if self.context else None,
            "original_error": str(self.original_error) if self.original_error else None,
            "original_error_type": type(self.original_error).__name__ if self.original_error else None,
        }

    def to_response(self) -> Dict[str, Any]:
        """Body returned to API callers. Never carries internal context."""
        return {
            "success": False,
            "error": self.error_code,
            "message": self.message,
        }


class ValidationError(PortalError):
    """Malformed or missing input, including a tripped honeypot."""

    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str = "Invalid form data", field: str = None, errors: list = None, **kwargs):
        super().__init__(
            message,
            ErrorCategory.VALIDATION,
            ErrorSeverity.LOW,
            **kwargs
        )
        self.field = field
        self.errors = errors or []

    def to_response(self) -> Dict[str, Any]:
        body = super().to_response()
        body["errors"] = self.errors
        return body


class AuthenticationError(PortalError):
    """Caller has no valid session."""

    status_code = 401
    error_code = "unauthorized"

    def __init__(self, message: str = "Authentication required", **kwargs):
        super().__init__(
            message,
            ErrorCategory.AUTHENTICATION,
            ErrorSeverity.MEDIUM,
            **kwargs
        )


class AuthorizationError(PortalError):
    """Caller is authenticated but lacks the required role."""

    status_code = 403
    error_code = "forbidden"

    def __init__(self, message: str = "Access denied", **kwargs):
        super().__init__(
            message,
            ErrorCategory.AUTHORIZATION,
            ErrorSeverity.HIGH,
            **kwargs
        )


class NotFoundError(PortalError):
    """Referenced record does not exist or is not visible to the caller."""

    status_code = 404
    error_code = "not_found"

    def __init__(self, message: str = "Not found", **kwargs):
        super().__init__(
            message,
            ErrorCategory.NOT_FOUND,
            ErrorSeverity.LOW,
            **kwargs
        )


class AccessCodeExpiredError(PortalError):
    """Access code belongs to an active client but is past its expiry."""

    status_code = 410
    error_code = "access_code_expired"

    def __init__(self, message: str = "Access code has expired", **kwargs):
        super().__init__(
            message,
            ErrorCategory.EXPIRED,
            ErrorSeverity.LOW,
            **kwargs
        )


class InvalidStateError(PortalError):
    """Operation is not legal in the entity's current lifecycle state."""

    status_code = 409
    error_code = "invalid_state"

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            ErrorCategory.STATE,
            ErrorSeverity.LOW,
            **kwargs
        )


class ConflictError(PortalError):
    """Uniqueness violation that survived the bounded retry."""

    status_code = 409
    error_code = "conflict"

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            ErrorCategory.CONFLICT,
            ErrorSeverity.HIGH,
            **kwargs
        )


class DatabaseError(PortalError):
    """Error for database operations."""

    status_code = 500
    error_code = "internal_error"

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            ErrorCategory.DATABASE,
            ErrorSeverity.HIGH,
            **kwargs
        )

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.error_code,
            "message": "An internal error occurred",
        }


class ErrorHandler:
    """Centralized error handling with logging."""

    def __init__(self):
        self.logger = get_logger("error_handler")

    def handle_error(
        self,
        error: Exception,
        context: Optional[ErrorContext] = None
    ) -> PortalError:
        """Classify and log an error.

        Args:
            error: The original exception
            context: Error context information

        Returns:
            Classified portal error
        """
        if isinstance(error, PortalError):
            portal_error = error
            if context is not None and portal_error.context is None:
                portal_error.context = context
        else:
            portal_error = self._classify_error(error, context)

        self._log_error(portal_error)
        return portal_error

    def _classify_error(self, error: Exception, context: Optional[ErrorContext]) -> PortalError:
        """Classify generic exceptions into portal errors."""
        from sqlalchemy.exc import SQLAlchemyError

        if isinstance(error, SQLAlchemyError):
            return DatabaseError(
                f"Database operation failed: {error}",
                context=context,
                original_error=error
            )

        return PortalError(
            f"Unexpected error: {error}",
            ErrorCategory.SYSTEM,
            ErrorSeverity.MEDIUM,
            context=context,
            original_error=error
        )

    def _log_error(self, error: PortalError):
        """Log error with appropriate level and context."""
        log_data = error.to_dict()
        message = log_data.pop("message")

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical("Critical error occurred", error_message=message, **log_data)
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error("High severity error occurred", error_message=message, **log_data)
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning("Medium severity error occurred", error_message=message, **log_data)
        else:
            self.logger.info("Low severity error occurred", error_message=message, **log_data)


class RetryManager:
    """Manages retry logic with exponential backoff and jitter."""

    def __init__(self, config: RetryConfig = None):
        self.config = config or RetryConfig()
        self.logger = get_logger("retry_manager")

    def retry(
        self,
        func: Callable,
        *args,
        config: Optional[RetryConfig] = None,
        context: Optional[ErrorContext] = None,
        **kwargs
    ) -> Any:
        """Execute function with retry logic.

        Args:
            func: Function to execute
            *args: Function arguments
            config: Retry configuration (optional)
            context: Error context for logging
            **kwargs: Function keyword arguments

        Returns:
            Function result

        Raises:
            Last exception if all retries fail
        """
        retry_config = config or self.config
        last_exception = None

        for attempt in range(retry_config.max_attempts):
            try:
                result = func(*args, **kwargs)

                if attempt > 0:
                    self.logger.info(
                        "Retry succeeded",
                        attempt=attempt + 1,
                        max_attempts=retry_config.max_attempts,
                        operation=context.operation if context else "unknown"
                    )

                return result

            except Exception as e:
                last_exception = e

                if not isinstance(e, retry_config.retryable_exceptions):
                    raise

                if attempt < retry_config.max_attempts - 1:
                    delay = self._calculate_delay(attempt, retry_config)

                    self.logger.warning(
                        "Retry attempt failed, waiting before next attempt",
                        attempt=attempt + 1,
                        max_attempts=retry_config.max_attempts,
                        delay_seconds=delay,
                        exception_type=type(e).__name__,
                        operation=context.operation if context else "unknown"
                    )

                    if delay > 0:
                        time.sleep(delay)
                else:
                    self.logger.error(
                        "All retry attempts failed",
                        max_attempts=retry_config.max_attempts,
                        final_exception_type=type(e).__name__,
                        operation=context.operation if context else "unknown"
                    )

        raise last_exception

    def _calculate_delay(self, attempt: int, config: RetryConfig) -> float:
        """Calculate delay for next retry attempt."""
        delay = config.base_delay * (config.exponential_base ** attempt)
        delay = min(delay, config.max_delay)

        if config.jitter:
            delay = delay * (0.5 + random.random() * 0.5)

        return delay


error_handler = ErrorHandler()
