"""
Structured Logging Configuration

Uses structlog for JSON-formatted logs with correlation IDs.

Features:
- Request correlation IDs (X-Correlation-ID / X-Request-ID, or a fresh UUID4)
- JSON output in production, console output locally
- Automatic context injection (method, path, client_ip)
- Request duration tracking
"""

import logging
import time
import uuid

import structlog
from fastapi import Request

CORRELATION_ID_HEADER = "X-Correlation-ID"


# ==================== Configuration ====================

def configure_logging(log_level: str = "INFO", json_logs: bool = True):
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON format. If False, use console format.
    """
    if json_logs:
        processors = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ]
    else:
        processors = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
            structlog.dev.ConsoleRenderer()
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Standard library logging for uvicorn and other third-party libs
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
        force=True,
    )


# ==================== Correlation ID Middleware ====================

async def correlation_id_middleware(request: Request, call_next):
    """
    Bind a correlation ID to every log line emitted while handling the request,
    log request start/completion and echo the ID back in the response headers.
    """
    correlation_id = (
        request.headers.get(CORRELATION_ID_HEADER)
        or request.headers.get("X-Request-ID")
        or str(uuid.uuid4())
    )
    request.state.correlation_id = correlation_id

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        correlation_id=correlation_id,
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else "unknown"
    )

    logger = structlog.get_logger()

    start_time = time.time()
    logger.info(
        "request_started",
        query_params=dict(request.query_params) if request.query_params else None,
    )

    try:
        response = await call_next(request)

        duration = time.time() - start_time
        response.headers[CORRELATION_ID_HEADER] = correlation_id

        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_seconds=round(duration, 3)
        )

        return response

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            "request_failed",
            error=str(e),
            error_type=type(e).__name__,
            duration_seconds=round(duration, 3),
            exc_info=True
        )
        raise

    finally:
        structlog.contextvars.clear_contextvars()


# ==================== Helper Functions ====================

def get_logger(name: str = None):
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.info("customers_filtered", age_group="31-45", result_count=12)
    """
    return structlog.get_logger(name)


def log_business_event(event_type: str, **details):
    """
    Log a business-relevant event.

    Usage:
        log_business_event("customer_created", customer_id=201, cluster=3)
    """
    logger = structlog.get_logger()
    logger.info("business_event", event_type=event_type, **details)
