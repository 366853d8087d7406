import logging
import json
import traceback
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Dict
from functools import wraps

from .config import get_settings

settings = get_settings()

# Configure standard logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Create loggers
app_logger = logging.getLogger('app')
audit_logger = logging.getLogger('audit')
error_logger = logging.getLogger('error')

# Create formatters
standard_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
audit_formatter = logging.Formatter(
    '%(asctime)s - AUDIT - %(message)s'
)
error_formatter = logging.Formatter(
    '%(asctime)s - ERROR - %(name)s - %(message)s\nStack Trace: %(stack_trace)s'
)

def configure_file_handlers(log_dir: str) -> None:
    """
    Attach file handlers for the app, audit and error loggers under log_dir.
    """
    Path(log_dir).mkdir(parents=True, exist_ok=True)

    for logger, filename, formatter in (
        (app_logger, 'app.log', standard_formatter),
        (audit_logger, 'audit.log', audit_formatter),
        (error_logger, 'error.log', error_formatter),
    ):
        handler = logging.FileHandler(Path(log_dir) / filename)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

if settings.LOG_DIR:
    configure_file_handlers(settings.LOG_DIR)

def audit_log(action: str, **kwargs):
    """
    Log audit events as a single JSON line
    """
    audit_data = {
        "timestamp": datetime.now(UTC).isoformat(),
        "action": action,
        **kwargs
    }

    audit_logger.info(json.dumps(audit_data, default=str))

def error_log(error: Exception, context: Dict[str, Any] = None):
    """
    Log errors with context
    """
    error_data = {
        "timestamp": datetime.now(UTC).isoformat(),
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context or {}
    }

    error_logger.error(
        json.dumps(error_data, default=str),
        extra={"stack_trace": traceback.format_exc()}
    )

def log_endpoint_access(func):
    """
    Decorator to log API endpoint access
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = datetime.now(UTC)

        try:
            result = await func(*args, **kwargs)

            audit_log(
                action="endpoint_access",
                endpoint=func.__name__,
                status="success",
                duration=(datetime.now(UTC) - start_time).total_seconds()
            )

            return result

        except Exception as e:
            error_log(
                e,
                context={
                    "endpoint": func.__name__,
                    "kwargs": {k: v for k, v in kwargs.items() if isinstance(v, (str, int, float))}
                }
            )
            raise

    return wrapper

def log_search_request(func):
    """
    Decorator specifically for search endpoints
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = datetime.now(UTC)

        try:
            result = await func(*args, **kwargs)

            audit_log(
                action="search_request",
                endpoint=func.__name__,
                query=kwargs.get("q"),
                result_count=getattr(result, "count", None),
                duration=(datetime.now(UTC) - start_time).total_seconds()
            )

            return result

        except Exception as e:
            error_log(
                e,
                context={
                    "endpoint": func.__name__,
                    "query": kwargs.get("q")
                }
            )
            raise

    return wrapper
