"""
Tokenizer: recognized text -> ordered keywords.
"""
from typing import List, Optional


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split recognized text into candidate keywords.

    Any run of whitespace is a boundary; case and attached punctuation are kept,
    duplicates are kept, and empty input yields an empty list.
    """
    if not text:
        return []
    return text.split()
