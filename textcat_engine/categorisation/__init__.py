"""
Categorisation Module for the TextCat engine.

Orchestrates query categorization through:
- Preprocessing (transliteration, normalization, word splitting)
- Pattern matching (fuzzy vocabulary lookup)
- Token matching (bigram-first driver)
"""

from .preprocess import normalize_text, tokenize_words, join_query_words
from .pattern_matching import VocabularyIndex, VocabularyMatch, find_most_similar_word
from .tokenizer import Token, tokenize, match_position
from .engine import TextCategorizer, CategoryPrediction

__all__ = [
    # Main categorizer
    "TextCategorizer",
    "CategoryPrediction",
    # Preprocessing utilities
    "normalize_text",
    "tokenize_words",
    "join_query_words",
    # Pattern matching utilities
    "VocabularyIndex",
    "VocabularyMatch",
    "find_most_similar_word",
    # Token matching
    "Token",
    "tokenize",
    "match_position",
]
