from typing import Dict, List, Literal, Optional, TypedDict


class VideoRecord(TypedDict):
    id: Optional[str]
    keywords: List[str]
    video_url: str
    title: Optional[str]
    source: Optional[str]


class SearchOutcome(TypedDict):
    index: int
    keyword: str
    records: List[VideoRecord]
    error: Optional[str]


class ResolvedResult(TypedDict):
    status: Literal["found", "not_found"]
    url: Optional[str]
    keyword: Optional[str]
    diagnostic: Optional[str]
    n_keywords: int
    n_failed: int
    errors: Dict[str, str]


def normalize_record(
    *,
    video_url: str,
    keywords: Optional[List[str]] = None,
    id: Optional[str] = None,
    title: Optional[str] = None,
    source: Optional[str] = None,
) -> VideoRecord:
    return {
        "id": id or None,
        "keywords": [str(k) for k in (keywords or []) if k],
        "video_url": video_url.strip(),
        "title": title or None,
        "source": source or None,
    }


def build_outcome(
    *,
    index: int,
    keyword: str,
    records: Optional[List[VideoRecord]] = None,
    error: Optional[str] = None,
) -> SearchOutcome:
    # A failed lookup never carries records.
    return {
        "index": index,
        "keyword": keyword,
        "records": [] if error else list(records or []),
        "error": error,
    }


def found(
    url: str,
    *,
    keyword: Optional[str] = None,
    n_keywords: int = 0,
    n_failed: int = 0,
    errors: Optional[Dict[str, str]] = None,
) -> ResolvedResult:
    return {
        "status": "found",
        "url": url,
        "keyword": keyword,
        "diagnostic": None,
        "n_keywords": n_keywords,
        "n_failed": n_failed,
        "errors": dict(errors or {}),
    }


def not_found(
    *,
    diagnostic: Optional[str] = None,
    keyword: Optional[str] = None,
    n_keywords: int = 0,
    n_failed: int = 0,
    errors: Optional[Dict[str, str]] = None,
) -> ResolvedResult:
    return {
        "status": "not_found",
        "url": None,
        "keyword": keyword,
        "diagnostic": diagnostic,
        "n_keywords": n_keywords,
        "n_failed": n_failed,
        "errors": dict(errors or {}),
    }


def is_found(result: ResolvedResult) -> bool:
    return result.get("status") == "found" and bool(result.get("url"))
