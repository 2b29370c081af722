"""Structlog configuration and logger setup.

Configures structlog with call-site context, exception formatting,
credential and contact-detail masking, and environment-aware rendering
(console in development, JSON in production).

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    # Configure logging at app startup
    configure_logging()

    # Get a logger for your module
    logger = get_module_logger()
    logger.info("event_name", key="value")

Dependencies:
    - infrastructure.configuration.Settings
"""

import inspect
import logging
import sys
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.configuration import Settings
from infrastructure.logging.formatters import (
    mask_contact_details,
    mask_sensitive_data,
    truncate_large_values,
)


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Args:
        log_level: Optional override for log level (DEBUG, INFO, WARNING, etc).
            Defaults to settings.LOG_LEVEL if not provided.
        is_production: Optional override for production mode. Defaults to
            settings.is_production if not provided. Controls JSON vs console output.

    Returns:
        Configured logger instance

    Example:
        logger = configure_logging(log_level="DEBUG", is_production=False)
    """
    # Suppress all logging during tests
    if _is_test_environment():
        logging.root.setLevel(logging.CRITICAL + 1)

        # Minimal processors so loggers still work; nothing is emitted
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger()

    if log_level is None or is_production is None:
        settings = Settings()
        log_level = log_level or settings.LOG_LEVEL
        if is_production is None:
            is_production = settings.is_production

    processors = [
        # Correlation ids bound with bind_log_context
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        mask_sensitive_data(),
        mask_contact_details(),
        truncate_large_values(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if not is_production:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    return structlog.stdlib.get_logger()


# Module-level logger (configured on import)
logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context.

    Automatically detects the calling module and binds component
    and module_path context for structured logging.

    Returns:
        Logger instance with module context

    Example:
        # In infrastructure/notifications/scheduler.py
        logger = get_module_logger()
        # context: {"component": "scheduler",
        #           "module_path": "infrastructure.notifications.scheduler"}
    """
    current_frame = inspect.currentframe()
    if current_frame is None or current_frame.f_back is None:
        return logger

    module = inspect.getmodule(current_frame.f_back)
    if module:
        module_name = module.__name__
        return logger.bind(
            component=module_name.split(".")[-1],
            module_path=module_name,
        )

    return logger.bind(component="unknown")
