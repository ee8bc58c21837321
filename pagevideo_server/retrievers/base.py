"""
Base lookup client classes and protocol definitions.
"""
from typing import Any, Awaitable, List, Optional, Protocol, Union

from ..models.schema import VideoRecord, normalize_record


class LookupClient(Protocol):
    """
    Protocol defining the interface for keyword lookup clients.

    `lookup` may be a plain function (run in an executor by the searcher) or a
    coroutine function. Raising signals a lookup failure, distinct from an
    empty list (no match).
    """
    def lookup(self, keyword: str) -> Union[List[VideoRecord], Awaitable[List[VideoRecord]]]:
        ...


class BaseLookupClient:
    """
    Base class for lookup clients with common utility methods.
    """

    source: str = "unknown"

    @staticmethod
    def _coerce_str(value: Any) -> Optional[str]:
        """
        Best-effort coercion to a non-empty string.

        - None / "" / whitespace -> None
        - str -> stripped str
        - anything else -> None (the store must hand us strings)
        """
        if not isinstance(value, str):
            return None
        s = value.strip()
        return s or None

    @staticmethod
    def _coerce_keywords(value: Any) -> List[str]:
        """
        Best-effort coercion of a keyword array; non-string entries are dropped.
        """
        if not isinstance(value, (list, tuple)):
            return []
        return [v for v in value if isinstance(v, str) and v]

    def create_video_record(
        self,
        *,
        video_url: Any,
        keywords: Any = None,
        id: Any = None,
        title: Any = None,
    ) -> Optional[VideoRecord]:
        """
        Create a VideoRecord from raw store values.

        Returns None when the entry has no string URL; such entries never
        become candidates.
        """
        url = self._coerce_str(video_url)
        if url is None:
            return None
        return normalize_record(
            video_url=url,
            keywords=self._coerce_keywords(keywords),
            id=self._coerce_str(id),
            title=self._coerce_str(title),
            source=self.source,
        )
