# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Provides loguru sink setup and structlog context binding for the converter

from .config import LoggingMode, configure_logging, get_logging_status
from .utils import LogContext, get_logger, log_api_call, with_batch_context, with_hotel_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "get_logging_status",
    # Utilities
    "LogContext",
    "get_logger",
    "log_api_call",
    "with_batch_context",
    "with_hotel_context",
]
