"""Models module: data schemas and types."""
from .schema import (
    ResolvedResult,
    SearchOutcome,
    VideoRecord,
    build_outcome,
    found,
    is_found,
    normalize_record,
    not_found,
)

__all__ = [
    "VideoRecord",
    "SearchOutcome",
    "ResolvedResult",
    "normalize_record",
    "build_outcome",
    "found",
    "not_found",
    "is_found",
]
