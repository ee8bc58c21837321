"""Search module: tokenizing, parallel lookup, and resolution."""
from .orchestrator import SearchOrchestrator, TieBreak, is_valid_url, parse_tie_break, resolve
from .searcher import lookup_keywords_parallel
from .tokenizer import tokenize

__all__ = [
    "tokenize",
    "lookup_keywords_parallel",
    "resolve",
    "SearchOrchestrator",
    "TieBreak",
    "parse_tie_break",
    "is_valid_url",
]
