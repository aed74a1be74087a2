# ABOUTME: Logging configuration using loguru sinks with structlog call sites
# ABOUTME: Dual-mode operation: interactive CLI (log files) vs production JSON logging on stderr

import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog
from loguru import logger

ENV_LOG_MODE = "HOTEL_CONVERTER_LOG_MODE"
LOG_DIR = Path("logs")

CRITICAL_LOGGERS = ["PIL", "PIL.PngImagePlugin", "PIL.TiffImagePlugin"]
WARNING_LOGGERS = ["httpx", "httpcore", "urllib3", "asyncio", "hpack"]


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


class InterceptHandler(logging.Handler):
    """Forward standard library log records (and therefore structlog events) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=6, exception=record.exc_info).bind(logger_name=record.name).log(level, record.getMessage())


def detect_logging_mode() -> str:
    """Detect whether we're running in interactive or production mode."""
    mode = os.getenv(ENV_LOG_MODE)
    if mode and mode.lower() in [LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION]:
        return mode.lower()

    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Configure third-party library logging to avoid CLI interference."""
    for logger_name in CRITICAL_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.CRITICAL)

    for logger_name in WARNING_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def setup_structlog() -> None:
    """Route structlog through the standard library so loguru owns every sink."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"], sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Custom log file path, uses default if None
    """
    if mode is None:
        mode = detect_logging_mode()

    setup_third_party_logging()
    setup_structlog()

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers = [InterceptHandler()]
    root_logger.setLevel(numeric_level)

    # Remove default loguru handler
    logger.remove()
    logger.configure(extra={"logger_name": "hotel_converter"})

    if mode == LoggingMode.INTERACTIVE:
        try:
            LOG_DIR.mkdir(exist_ok=True)
        except OSError:
            # Unwritable working directory: fall back to stderr
            mode = LoggingMode.PRODUCTION

    if mode == LoggingMode.PRODUCTION:
        logger.add(sys.stderr, level=log_level, format="{time} | {level} | {name} | {message}", serialize=True)
        return

    log_file_path = log_file or str(LOG_DIR / "hotel-converter.log")

    # Human-readable logs
    logger.add(
        log_file_path,
        level=log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[logger_name]} - {message}",
        rotation="10 MB",
        retention="7 days",
    )

    # JSON logs for machine processing
    logger.add(
        LOG_DIR / "hotel-converter.json",
        level=log_level,
        format="{time} | {level} | {name} | {message}",
        serialize=True,
        rotation="10 MB",
        retention="7 days",
    )

    # Errors only
    logger.add(
        LOG_DIR / "errors.log",
        level="ERROR",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[logger_name]} - {message}",
        backtrace=True,
        diagnose=True,
    )


def get_logging_status() -> dict[str, Any]:
    """Get current logging configuration status."""
    mode = detect_logging_mode()
    interactive = mode == LoggingMode.INTERACTIVE

    return {
        "mode": mode,
        "log_directory": str(LOG_DIR.absolute()) if LOG_DIR.exists() else None,
        "log_files": {
            "main": str(LOG_DIR / "hotel-converter.log") if interactive else None,
            "json": str(LOG_DIR / "hotel-converter.json") if interactive else None,
            "errors": str(LOG_DIR / "errors.log") if interactive else None,
        },
        "third_party_suppressed": [*WARNING_LOGGERS, *CRITICAL_LOGGERS, "py.warnings"],
    }

