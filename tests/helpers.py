import asyncio
import threading
import time
from typing import Dict, List, Optional, Union

from pagevideo_server.models.schema import VideoRecord, normalize_record


class StubLookup:
    """
    Async lookup client backed by a table of keyword -> URLs (or an exception).
    Records every call and the peak number of concurrent lookups.
    """

    def __init__(
        self,
        table: Dict[str, Union[List[str], Exception]],
        latencies: Optional[Dict[str, float]] = None,
        default_latency: float = 0.0,
    ) -> None:
        self.table = table
        self.latencies = latencies or {}
        self.default_latency = default_latency
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def lookup(self, keyword: str) -> List[VideoRecord]:
        self.calls.append(keyword)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.latencies.get(keyword, self.default_latency))
            value = self.table.get(keyword, [])
            if isinstance(value, Exception):
                raise value
            return [normalize_record(video_url=url, keywords=[keyword], source="stub") for url in value]
        finally:
            self.in_flight -= 1


class SyncStubLookup:
    """Blocking lookup client; ``latency`` is spent in ``time.sleep``."""

    def __init__(self, table: Dict[str, List[str]], latency: float = 0.0) -> None:
        self.table = table
        self.latency = latency
        self.calls: List[str] = []
        self._lock = threading.Lock()

    def lookup(self, keyword: str) -> List[VideoRecord]:
        with self._lock:
            self.calls.append(keyword)
        if self.latency:
            time.sleep(self.latency)
        return [normalize_record(video_url=url, keywords=[keyword], source="stub") for url in self.table.get(keyword, [])]
