"""
Logging utility functions and helpers.
"""

import logging
from typing import Any, Dict, Optional


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Usage:
        from utils.logger import get_logger
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)


SENSITIVE_FIELDS = {
    'password', 'token', 'secret', 'api_key', 'admin_key', 'webhook_url', 'authorization'
}


def sanitize_log_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Remove credentials from data before it is logged.

    Keys are matched case-insensitively on substrings, so "X-Admin-Key"
    and "SHEETS_WEBHOOK_URL" are both caught. Tokens keep their first
    8 characters for debugging; everything else sensitive is redacted.
    Nested dicts and lists of dicts are sanitized recursively.
    """
    sanitized = data.copy()

    for key, value in sanitized.items():
        normalized = key.lower().replace("-", "_")
        if any(sensitive in normalized for sensitive in SENSITIVE_FIELDS):
            if isinstance(value, str) and 'token' in normalized and len(value) > 8:
                sanitized[key] = f"{value[:8]}..."
            else:
                sanitized[key] = "***REDACTED***"

        elif isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)

        elif isinstance(value, list):
            sanitized[key] = [
                sanitize_log_data(item) if isinstance(item, dict) else item
                for item in value
            ]

    return sanitized


def log_database_query(
    logger: logging.Logger,
    query_type: str,
    table: str,
    duration_ms: float,
    rows_affected: Optional[int] = None
):
    """
    Log a repository operation in a structured format.

    Slow queries (> 1 second) are logged at WARNING, the rest at DEBUG.

    Usage:
        log_database_query(logger, "SELECT", "orders", 12.5, rows_affected=3)
    """
    log_data = {
        "query_type": query_type,
        "table": table,
        "duration_ms": round(duration_ms, 2)
    }

    if rows_affected is not None:
        log_data["rows_affected"] = rows_affected

    if duration_ms > 1000:
        logger.warning(
            f"Slow {query_type} query on {table}",
            extra=log_data
        )
    else:
        logger.debug(
            f"{query_type} query on {table}",
            extra=log_data
        )
