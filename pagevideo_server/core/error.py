"""
Error management module.
"""
import asyncio
import logging
import traceback
from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(Enum):
    """Error classification types."""
    EMPTY_RECOGNITION = "empty_recognition"
    LOOKUP_FAILURE = "lookup_failure"
    NO_MATCH = "no_match"
    MALFORMED_URL = "malformed_url"
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    INVALID_PARAMS = "invalid_params"
    LOGIC_ERROR = "logic_error"
    UNKNOWN = "unknown"


class PageVideoError(Exception):
    """Base exception for PageVideo errors."""

    def __init__(self, message: str, error_type: ErrorType = ErrorType.UNKNOWN, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error_type": self.error_type.value,
            "message": str(self),
            "details": self.details,
        }


class LookupFailure(PageVideoError):
    """A single keyword lookup failed at the store boundary."""

    def __init__(self, message: str, keyword: str = "", details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        if keyword:
            details.setdefault("keyword", keyword)
        super().__init__(message, ErrorType.LOOKUP_FAILURE, details)
        self.keyword = keyword


def classify_error(error: Exception) -> ErrorType:
    """
    Classify error type from exception.

    Args:
        error: Exception instance

    Returns:
        ErrorType enum value
    """
    if isinstance(error, PageVideoError):
        return error.error_type
    if isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        return ErrorType.TIMEOUT

    error_str = str(error).lower()

    if "timeout" in error_str or "timed out" in error_str:
        return ErrorType.TIMEOUT

    if any(keyword in error_str for keyword in ["network", "connection", "http", "request"]):
        return ErrorType.NETWORK_ERROR

    if any(keyword in error_str for keyword in ["invalid", "validation", "parameter", "format"]):
        return ErrorType.INVALID_PARAMS

    return ErrorType.UNKNOWN


def log_error(
    error: Exception,
    logger: Optional[logging.Logger] = None,
    context: Optional[Dict[str, Any]] = None,
    level: str = "ERROR",
) -> Dict[str, Any]:
    """
    Log error with context and return error info.

    Args:
        error: Exception instance
        logger: Logger instance (if None, uses default)
        context: Additional context information
        level: Logging level

    Returns:
        Dictionary with error information
    """
    if logger is None:
        logger = logging.getLogger("pagevideo")

    error_type = classify_error(error)
    error_info = {
        "error_type": error_type.value,
        "error_class": type(error).__name__,
        "message": str(error),
        "context": context or {},
    }

    log_method = getattr(logger, level.lower(), logger.error)
    log_method(
        f"[{error_type.value}] {type(error).__name__}: {error}",
        extra={"error_info": error_info},
    )

    # Log traceback in debug mode
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Traceback:\n{traceback.format_exc()}")

    return error_info
