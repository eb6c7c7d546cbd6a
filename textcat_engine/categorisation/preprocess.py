"""
Preprocessing utilities for query categorization.
Handles transliteration, normalization and word tokenization.
"""

import re
from typing import List, Optional

from unidecode import unidecode


# Maximal runs of word characters (the input is plain ASCII by then)
WORD_PATTERN = re.compile(r"\w+", re.ASCII)


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize text for matching.

    Args:
        text: Raw text to normalize

    Returns:
        Plain-ASCII lowercase text
    """
    if not text:
        return ""
    # Transliterate before lowercasing so no uppercase ASCII survives
    return unidecode(text).lower()


def tokenize_words(text: Optional[str]) -> List[str]:
    """
    Split text into normalized words.

    Punctuation and whitespace are discarded entirely.

    Args:
        text: Raw text

    Returns:
        Lowercase ASCII words in input order

    Example:
        >>> tokenize_words("Café, New-York!")
        ['cafe', 'new', 'york']
    """
    return WORD_PATTERN.findall(normalize_text(text))


def join_query_words(words: List[str]) -> str:
    """
    Join command-line words into one trimmed query string.

    Args:
        words: Words as given on the command line

    Returns:
        Single space-separated query
    """
    return " ".join(words).strip()
