"""Core module: configuration, error handling, and logging."""
from .config import (
    DEFAULT_LOOKUP_TIMEOUT,
    DEFAULT_STORE,
    DEFAULT_TIE_BREAK,
    get_firestore_config,
    get_local_index_path,
    get_lookup_timeout,
    get_ocr_language,
    get_store_backend,
    get_tie_break,
    load_env,
)
from .error import ErrorType, LookupFailure, PageVideoError, classify_error, log_error
from .logger import get_logger, setup_logger

__all__ = [
    # Config
    "DEFAULT_LOOKUP_TIMEOUT",
    "DEFAULT_STORE",
    "DEFAULT_TIE_BREAK",
    "load_env",
    "get_store_backend",
    "get_local_index_path",
    "get_tie_break",
    "get_lookup_timeout",
    "get_firestore_config",
    "get_ocr_language",
    # Error handling
    "ErrorType",
    "PageVideoError",
    "LookupFailure",
    "classify_error",
    "log_error",
    # Logging
    "setup_logger",
    "get_logger",
]
