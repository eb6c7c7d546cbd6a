"""
Fuzzy Vocabulary Matching for Query Categorization.

Scores a candidate word or bigram against every vocabulary entry in one
parallel rapidfuzz call and keeps the best entry above a threshold.
"""

import logging
from typing import NamedTuple, Optional, Sequence, Tuple

import numpy as np
from rapidfuzz import fuzz, process

from ..config.classifier_config import CLASSIFIER_CONFIG

logger = logging.getLogger(__name__)

_MATCHING = CLASSIFIER_CONFIG["matching"]


def encoded_length(text: str) -> int:
    """Length of text in UTF-8 bytes."""
    return len(text.encode("utf-8"))


class VocabularyMatch(NamedTuple):
    """Best vocabulary entry for a candidate."""
    index: int
    text: str
    ratio: float  # penalized similarity / 100


class VocabularyIndex:
    """Vocabulary prepared for repeated fuzzy lookups."""

    def __init__(
        self,
        vocabulary: Sequence[str],
        length_penalty: int = _MATCHING["length_penalty"],
        penalized_prefixes: Tuple[str, ...] = _MATCHING["penalized_prefixes"],
        workers: int = _MATCHING["workers"],
    ):
        """
        Args:
            vocabulary: Vocabulary entries, position = vocabulary index
            length_penalty: Points removed for a length mismatch or structural entry
            penalized_prefixes: Entry prefixes that always take the penalty
            workers: rapidfuzz worker count (-1 = all cores)
        """
        self.vocabulary = list(vocabulary)
        self.length_penalty = length_penalty
        self.workers = workers
        size = len(self.vocabulary)
        # Lengths are UTF-8 byte counts
        self.lengths = np.fromiter((encoded_length(w) for w in self.vocabulary), dtype=np.int64, count=size)
        self.structural = np.fromiter(
            (w.startswith(tuple(penalized_prefixes)) for w in self.vocabulary),
            dtype=bool,
            count=size,
        )

    def __len__(self) -> int:
        return len(self.vocabulary)

    def penalized_ratios(self, candidate: str) -> np.ndarray:
        """
        Similarity of the candidate against every entry, after the penalty.

        Ratios are rounded half-up to whole points before the penalty is taken.
        """
        raw = process.cdist(
            [candidate],
            self.vocabulary,
            scorer=fuzz.ratio,
            workers=self.workers,
        )[0]
        ratios = np.floor(raw.astype(np.float64) + 0.5)
        penalize = (self.lengths != encoded_length(candidate)) | self.structural
        return np.where(penalize, np.maximum(ratios - self.length_penalty, 0.0), ratios)

    def find_most_similar(self, candidate: str, threshold: int) -> Optional[VocabularyMatch]:
        """
        Find the best vocabulary entry for a candidate.

        Args:
            candidate: Normalized word or "word word" bigram
            threshold: Minimum penalized ratio (0-100)

        Returns:
            VocabularyMatch, or None if no entry clears the threshold.
            Equal ratios go to the lowest vocabulary index.
        """
        if not candidate or not self.vocabulary:
            return None

        ratios = self.penalized_ratios(candidate)
        # argmax returns the first maximum, so ties resolve to the lowest index
        best_index = int(np.argmax(ratios))
        best_ratio = float(ratios[best_index])

        if best_ratio <= 0 or best_ratio < threshold:
            return None

        return VocabularyMatch(best_index, self.vocabulary[best_index], best_ratio / 100.0)


def find_most_similar_word(
    candidate: str,
    vocabulary: Sequence[str],
    threshold: int = _MATCHING["threshold"],
) -> Optional[VocabularyMatch]:
    """
    Match a candidate against a vocabulary.

    Args:
        candidate: Normalized word or bigram
        vocabulary: Vocabulary entries
        threshold: Minimum penalized ratio (0-100)

    Returns:
        VocabularyMatch or None

    Example:
        >>> find_most_similar_word("pizza", ["pizza", "pasta"], 90)
        VocabularyMatch(index=0, text='pizza', ratio=1.0)
    """
    return VocabularyIndex(vocabulary).find_most_similar(candidate, threshold)
