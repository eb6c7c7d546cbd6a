"""
Token Matching Driver.

Walks the normalized words of a query and binds them to vocabulary entries,
preferring two-word entries over single words.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple, Union

from .pattern_matching import VocabularyIndex, VocabularyMatch
from ..config.classifier_config import CLASSIFIER_CONFIG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    """Query span bound to one vocabulary entry."""
    word: str  # matched vocabulary text
    vocab_index: int
    weight: float  # penalized ratio / 100

    @classmethod
    def from_match(cls, match: VocabularyMatch) -> "Token":
        return cls(word=match.text, vocab_index=match.index, weight=match.ratio)


def match_position(
    words: Sequence[str],
    pos: int,
    index: VocabularyIndex,
    consumed: Set[str],
    threshold: int,
) -> Tuple[Optional[Token], Set[str]]:
    """
    Match the word at one position.

    Only even positions that are not last try a bigram with the next word.
    A bigram match consumes the next word by value, so later occurrences of
    that word are never matched on their own.

    Args:
        words: Normalized query words
        pos: Position to match
        index: Prepared vocabulary
        consumed: Words already consumed by bigram matches
        threshold: Minimum penalized ratio (0-100)

    Returns:
        Tuple of (token or None, consumed words after this position)
    """
    word = words[pos]

    if pos % 2 == 0 and pos < len(words) - 1:
        next_word = words[pos + 1]
        bigram_match = index.find_most_similar(f"{word} {next_word}", threshold)
        if bigram_match:
            logger.debug("Bigram '%s %s' matched '%s' (%.2f)", word, next_word, bigram_match.text, bigram_match.ratio)
            return Token.from_match(bigram_match), consumed | {next_word}

    if word not in consumed:
        word_match = index.find_most_similar(word, threshold)
        if word_match:
            logger.debug("Word '%s' matched '%s' (%.2f)", word, word_match.text, word_match.ratio)
            return Token.from_match(word_match), consumed

    logger.debug("No vocabulary match for '%s'", word)
    return None, consumed


def tokenize(
    words: Sequence[str],
    vocabulary: Union[VocabularyIndex, Sequence[str]],
    threshold: int = CLASSIFIER_CONFIG["matching"]["threshold"],
) -> List[Token]:
    """
    Turn normalized words into vocabulary tokens.

    Words without a match are dropped.

    Args:
        words: Normalized query words
        vocabulary: Prepared VocabularyIndex or plain vocabulary list
        threshold: Minimum penalized ratio (0-100)

    Returns:
        Tokens in input order
    """
    index = vocabulary if isinstance(vocabulary, VocabularyIndex) else VocabularyIndex(vocabulary)

    tokens = []
    consumed: Set[str] = set()
    for pos in range(len(words)):
        token, consumed = match_position(words, pos, index, consumed, threshold)
        if token:
            tokens.append(token)

    return tokens
