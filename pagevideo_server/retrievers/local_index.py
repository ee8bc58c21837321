import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import BaseLookupClient
from ..core.config import get_local_index_path
from ..core.error import ErrorType, LookupFailure, PageVideoError
from ..models.schema import VideoRecord

logger = logging.getLogger("pagevideo.retrievers.local_index")


class LocalIndexLookupClient(BaseLookupClient):
    """
    Keyword index backed by a JSON file:

        [{"id": "...", "keywords": ["mitosis", ...], "videoURL": "https://...", "title": "..."}]

    Keyword matching is exact and case-sensitive, like an array-contains query.
    """

    source = "local"

    def __init__(self, index_path: Optional[Path] = None, entries: Optional[List[Dict[str, Any]]] = None) -> None:
        self.index_path = Path(index_path) if index_path else get_local_index_path()
        self._entries = entries
        self._records: Optional[List[VideoRecord]] = None
        self._load_lock = threading.Lock()

    def _load_entries(self) -> List[Dict[str, Any]]:
        if self._entries is not None:
            return self._entries
        if not self.index_path.exists():
            raise PageVideoError(
                f"Local index not found: {self.index_path}",
                ErrorType.INVALID_PARAMS,
                {"path": str(self.index_path)},
            )
        try:
            with self.index_path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            raise LookupFailure(f"Failed to read local index {self.index_path}: {exc}") from exc
        # Accept either a bare list or {"videos": [...]}
        if isinstance(raw, dict):
            raw = raw.get("videos") or []
        if not isinstance(raw, list):
            raise LookupFailure(f"Local index must be a list of records: {self.index_path}")
        return [e for e in raw if isinstance(e, dict)]

    @property
    def records(self) -> List[VideoRecord]:
        # Lookups run in executor threads; load the index once.
        with self._load_lock:
            if self._records is None:
                records: List[VideoRecord] = []
                for entry in self._load_entries():
                    record = self.create_video_record(
                        video_url=entry.get("videoURL", entry.get("video_url")),
                        keywords=entry.get("keywords"),
                        id=entry.get("id"),
                        title=entry.get("title"),
                    )
                    if record is None:
                        logger.warning("Skipping index entry without videoURL: %s", entry.get("id"))
                        continue
                    records.append(record)
                self._records = records
                logger.info("Loaded %d video record(s) from %s", len(records), self.index_path)
            return self._records

    def lookup(self, keyword: str) -> List[VideoRecord]:
        return [r for r in self.records if keyword in r["keywords"]]
