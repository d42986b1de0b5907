"""
Logging configuration for RescueLink Backend.

Uses structlog for structured logging with JSON output and file-based logging.
"""

import logging
import sys
import os
from datetime import datetime
import structlog
from structlog.stdlib import LoggerFactory

from core.config import settings


def setup_logging() -> structlog.stdlib.BoundLogger:
    """Setup structured logging configuration with file-based logging."""

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
            structlog.processors.JSONRenderer() if not settings.DEBUG else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))
    root_logger.handlers.clear()

    # Console handler (always enabled)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logs_dir = "logs"
    stamp = datetime.now().strftime('%Y%m%d')

    if settings.ENABLE_FILE_LOGGING:
        os.makedirs(logs_dir, exist_ok=True)

        app_file_handler = logging.FileHandler(
            os.path.join(logs_dir, f"app_{stamp}.log"), encoding='utf-8'
        )
        app_file_handler.setFormatter(formatter)
        app_file_handler.setLevel(logging.INFO)
        root_logger.addHandler(app_file_handler)

        error_file_handler = logging.FileHandler(
            os.path.join(logs_dir, f"error_{stamp}.log"), encoding='utf-8'
        )
        error_file_handler.setFormatter(formatter)
        error_file_handler.setLevel(logging.ERROR)
        root_logger.addHandler(error_file_handler)

    if settings.ENABLE_REQUEST_LOGGING and settings.ENABLE_FILE_LOGGING:
        request_logger = logging.getLogger("request")
        request_logger.setLevel(logging.INFO)
        # Prevent propagation to root logger to avoid duplicate logs
        request_logger.propagate = False
        request_logger.handlers.clear()

        request_file_handler = logging.FileHandler(
            os.path.join(logs_dir, f"requests_{stamp}.log"), encoding='utf-8'
        )
        request_file_handler.setFormatter(formatter)
        request_logger.addHandler(request_file_handler)

    logger = structlog.get_logger()

    if settings.SENTRY_DSN and settings.SENTRY_DSN.strip():
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.SENTRY_ENVIRONMENT,
            integrations=[
                FastApiIntegration(),
                SqlalchemyIntegration(),
            ],
            traces_sample_rate=0.1 if settings.ENV == "production" else 1.0,
        )

        logger.info("Sentry integration enabled", environment=settings.SENTRY_ENVIRONMENT)

    return logger


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


async def log_request_middleware(request, call_next):
    """Log incoming requests."""
    logger = get_logger("request")

    logger.info(
        "Request started",
        method=request.method,
        url=str(request.url),
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )

    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
    )

    return response
