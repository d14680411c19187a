"""Structured logging configuration."""

import logging
import sys
import time
from typing import Any, Dict
from datetime import datetime
from contextlib import contextmanager

import structlog
from structlog.stdlib import LoggerFactory

from .config import settings


def configure_logging() -> None:
    """Configure structured logging for the application."""

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if settings.environment == "production"
            else structlog.dev.ConsoleRenderer(colors=True),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.log_level == "DEBUG" else logging.WARNING
    )
    logging.getLogger("audit").setLevel(logging.INFO)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return structlog.get_logger(name)


def mask_access_code(access_code: str) -> str:
    """Keep the first three symbols of an access code for log lines."""
    if not access_code:
        return ""
    return access_code[:3] + "***"


class PerformanceLogger:
    """Logger for tracking performance metrics."""

    def __init__(self, logger_name: str = "performance"):
        self.logger = get_logger(logger_name)

    @contextmanager
    def log_operation_time(
        self,
        operation: str,
        **context: Any
    ):
        """Context manager to log operation execution time.

        Args:
            operation: Name of the operation being timed
            **context: Additional context for logging
        """
        start_time = time.time()
        start_timestamp = datetime.utcnow()

        try:
            yield

            duration = time.time() - start_time

            self.logger.info(
                "Operation completed",
                operation=operation,
                duration_seconds=round(duration, 3),
                start_time=start_timestamp.isoformat(),
                **context
            )

        except Exception as e:
            duration = time.time() - start_time

            self.logger.warning(
                "Operation failed",
                operation=operation,
                duration_seconds=round(duration, 3),
                start_time=start_timestamp.isoformat(),
                error=str(e),
                error_type=type(e).__name__,
                **context
            )
            raise


class SystemLogger:
    """Logger for system-wide events."""

    def __init__(self, logger_name: str = "system"):
        self.logger = get_logger(logger_name)

    def log_system_startup(self, component: str, **context: Any):
        """Log system component startup."""
        self.logger.info(
            "System component started",
            component=component,
            timestamp=datetime.utcnow().isoformat(),
            **context
        )

    def log_system_shutdown(self, component: str, **context: Any):
        """Log system component shutdown."""
        self.logger.info(
            "System component shutdown",
            component=component,
            timestamp=datetime.utcnow().isoformat(),
            **context
        )

    def log_health_check(
        self,
        component: str,
        healthy: bool,
        details: Dict[str, Any] = None,
        **context: Any
    ):
        """Log health check results."""
        log_level = "info" if healthy else "warning"

        getattr(self.logger, log_level)(
            "Health check completed",
            component=component,
            healthy=healthy,
            details=details or {},
            **context
        )


class ErrorLogger:
    """Logger for detailed error tracking and debugging."""

    def __init__(self, logger_name: str = "error"):
        self.logger = get_logger(logger_name)

    def log_validation_error(
        self,
        field: str,
        value: Any,
        error_message: str,
        **context: Any
    ):
        """Log validation errors with field details."""
        self.logger.warning(
            "Validation error",
            field=field,
            value=str(value)[:100],  # Truncate long values
            error_message=error_message,
            **context
        )

    def log_security_event(
        self,
        event_type: str,
        subject_id: str = None,
        ip_address: str = None,
        user_agent: str = None,
        details: Dict[str, Any] = None,
        **context: Any
    ):
        """Log security-related events."""
        self.logger.warning(
            "Security event",
            event_type=event_type,
            subject_id=subject_id,
            ip_address=ip_address,
            user_agent=user_agent,
            details=details or {},
            **context
        )


# Global logger instances
performance_logger = PerformanceLogger()
system_logger = SystemLogger()
error_logger = ErrorLogger()
