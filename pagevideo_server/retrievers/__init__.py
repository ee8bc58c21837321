"""
Retrievers module: keyword lookup clients for the video index.
"""
from typing import Optional

from ..core.config import get_store_backend
from ..core.error import ErrorType, PageVideoError
from .base import BaseLookupClient, LookupClient
from .firestore import FirestoreLookupClient
from .local_index import LocalIndexLookupClient

ALL_STORE_NAMES = ["firestore", "local"]


def get_lookup_client(backend: Optional[str] = None) -> LookupClient:
    """
    Get lookup client instance for a store backend name (defaults to PAGEVIDEO_STORE).
    """
    backend = (backend or get_store_backend()).strip().lower()
    if backend == "firestore":
        return FirestoreLookupClient()
    elif backend == "local":
        return LocalIndexLookupClient()
    raise PageVideoError(
        f"Unknown store backend: {backend}",
        ErrorType.INVALID_PARAMS,
        {"available": ALL_STORE_NAMES},
    )


__all__ = [
    "ALL_STORE_NAMES",
    "BaseLookupClient",
    "LookupClient",
    "FirestoreLookupClient",
    "LocalIndexLookupClient",
    "get_lookup_client",
]
