"""
Keyword resolution: fan out lookups, join on all of them, pick one video.
"""
import asyncio
import logging
from enum import Enum
from typing import Dict, List, Optional, Union
from urllib.parse import urlparse

from ..core.config import get_lookup_timeout, get_tie_break
from ..core.error import ErrorType, PageVideoError
from ..models.schema import ResolvedResult, SearchOutcome, found, not_found
from ..retrievers.base import LookupClient
from .searcher import lookup_keywords_parallel

logger = logging.getLogger("pagevideo.search")


class TieBreak(Enum):
    """Which non-empty outcome wins when several keywords match."""
    FIRST_KEYWORD = "first_keyword"
    LAST_COMPLETED = "last_completed"


def parse_tie_break(value: Union[str, TieBreak, None]) -> TieBreak:
    if isinstance(value, TieBreak):
        return value
    if not value:
        return TieBreak.FIRST_KEYWORD
    try:
        return TieBreak(str(value).strip().lower())
    except ValueError:
        raise PageVideoError(
            f"Unknown tie-break policy: {value}",
            ErrorType.INVALID_PARAMS,
            {"available": [t.value for t in TieBreak]},
        ) from None


def is_valid_url(url: str) -> bool:
    """Basic URL validation."""
    try:
        result = urlparse(url)
        return all([result.scheme in ("http", "https"), result.netloc])
    except Exception:
        return False


class _CandidateSlot:
    """
    The single "current best candidate". Written by every completing lookup
    under a lock, read once after all lookups have finished.
    """

    def __init__(self, tie_break: TieBreak) -> None:
        self.tie_break = tie_break
        self.outcome: Optional[SearchOutcome] = None
        self._lock = asyncio.Lock()

    async def offer(self, outcome: SearchOutcome) -> None:
        if not outcome["records"]:
            return
        async with self._lock:
            current = self.outcome
            if self.tie_break is TieBreak.LAST_COMPLETED:
                self.outcome = outcome
            elif current is None or outcome["index"] < current["index"]:
                self.outcome = outcome


async def resolve(
    keywords: List[str],
    lookup: LookupClient,
    *,
    tie_break: Union[str, TieBreak] = TieBreak.FIRST_KEYWORD,
    lookup_timeout: Optional[float] = None,
) -> ResolvedResult:
    """
    Resolve keywords to a single video URL.

    Every keyword is looked up concurrently and the result is produced only
    after all lookups have completed. Failed or timed-out lookups count as
    empty. The winner's first record supplies the URL.

    Args:
        keywords: Ordered keywords, duplicates allowed
        lookup: Lookup client (injected store)
        tie_break: FIRST_KEYWORD (lowest keyword position wins) or
            LAST_COMPLETED (whichever matching lookup finished last)
        lookup_timeout: Per-lookup deadline in seconds, None or <= 0 to wait indefinitely

    Returns:
        found(url) or not_found(diagnostic)
    """
    policy = parse_tie_break(tie_break)
    n_keywords = len(keywords)
    if not keywords:
        logger.info("No keywords recognized; skipping lookup")
        return not_found(diagnostic=ErrorType.EMPTY_RECOGNITION.value)

    slot = _CandidateSlot(policy)
    outcomes = await lookup_keywords_parallel(
        keywords,
        lookup,
        lookup_timeout=lookup_timeout,
        on_complete=slot.offer,
    )

    errors: Dict[str, str] = {}
    for outcome in outcomes:
        if outcome["error"]:
            errors[outcome["keyword"]] = outcome["error"]
    n_failed = sum(1 for o in outcomes if o["error"])
    stats = {"n_keywords": n_keywords, "n_failed": n_failed, "errors": errors}

    winner = slot.outcome
    if winner is None:
        logger.info(
            "No match for %d keyword(s) (%d failed)", n_keywords, n_failed,
        )
        return not_found(diagnostic=ErrorType.NO_MATCH.value, **stats)

    url = winner["records"][0]["video_url"]
    if not is_valid_url(url):
        logger.warning(
            "Winning record for %r has a malformed URL: %r", winner["keyword"], url,
        )
        return not_found(diagnostic=ErrorType.MALFORMED_URL.value, keyword=winner["keyword"], **stats)

    logger.info(
        "Resolved %r -> %s (%s, %d keyword(s), %d failed)",
        winner["keyword"], url, policy.value, n_keywords, n_failed,
    )
    return found(url, keyword=winner["keyword"], **stats)


class SearchOrchestrator:
    """Binds a lookup client and resolution settings."""

    def __init__(
        self,
        lookup: LookupClient,
        *,
        tie_break: Union[str, TieBreak] = TieBreak.FIRST_KEYWORD,
        lookup_timeout: Optional[float] = None,
    ) -> None:
        self.lookup = lookup
        self.tie_break = parse_tie_break(tie_break)
        self.lookup_timeout = lookup_timeout

    @classmethod
    def from_env(cls, lookup: LookupClient) -> "SearchOrchestrator":
        return cls(lookup, tie_break=get_tie_break(), lookup_timeout=get_lookup_timeout())

    async def resolve(self, keywords: List[str]) -> ResolvedResult:
        return await resolve(
            keywords,
            self.lookup,
            tie_break=self.tie_break,
            lookup_timeout=self.lookup_timeout,
        )
