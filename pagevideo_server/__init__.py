"""PageVideo Server - resolve a photographed page to one instructional video."""
from .core.config import DEFAULT_LOOKUP_TIMEOUT, DEFAULT_TIE_BREAK
from .models.schema import ResolvedResult, VideoRecord
from .pipeline import find_video, find_video_for_image
from .search import SearchOrchestrator, TieBreak, resolve, tokenize

__all__ = [
    "find_video",
    "find_video_for_image",
    "resolve",
    "tokenize",
    "SearchOrchestrator",
    "TieBreak",
    "ResolvedResult",
    "VideoRecord",
    "DEFAULT_LOOKUP_TIMEOUT",
    "DEFAULT_TIE_BREAK",
]
