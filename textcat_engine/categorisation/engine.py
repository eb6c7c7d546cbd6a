"""
Text Categorizer for short free-text queries.
Classifies a query against a fixed vocabulary and per-token weight store.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .preprocess import tokenize_words
from .pattern_matching import VocabularyIndex
from .tokenizer import Token, tokenize
from ..config.classifier_config import CLASSIFIER_CONFIG
from ..config.category_loader import Category, load_category_catalogue, load_runtime_categories
from ..scoring.aggregator import CategoryAggregator
from ..scoring.selector import get_largest_output
from ..store.vocabulary import load_vocabulary
from ..store.weights import WeightStore

logger = logging.getLogger(__name__)


@dataclass
class CategoryPrediction:
    """Result of query categorization."""
    text: str
    category: Optional[str]
    score: float
    scores: Dict[str, float] = field(default_factory=dict)
    tokens: List[Token] = field(default_factory=list)
    is_known_category: bool = False
    debug_rationale: Optional[str] = None  # Optional debug information

    @property
    def has_prediction(self) -> bool:
        return self.category is not None


class TextCategorizer:
    """Categorizes short queries using vocabulary neighbour weights."""

    def __init__(
        self,
        vocabulary: Sequence[str],
        weight_store,
        categories: Optional[Sequence[str]] = None,
        catalogue: Optional[List[Category]] = None,
        threshold: int = CLASSIFIER_CONFIG["matching"]["threshold"],
        window: int = CLASSIFIER_CONFIG["neighbours"]["window"],
        workers: int = CLASSIFIER_CONFIG["matching"]["workers"],
        debug_mode: bool = False,
    ):
        """Initialize the categorizer with a loaded knowledge base.

        Args:
            vocabulary: Vocabulary entries, position = vocabulary index
            weight_store: Object with load(vocab_index) -> NeighbourOccurrenceTable
            categories: Runtime category names
            catalogue: Rich category catalogue (not used for scoring)
            threshold: Minimum penalized ratio (0-100) for token matches
            window: Neighbour window radius
            workers: rapidfuzz worker count for vocabulary scans
            debug_mode: If True, emit detailed rationale for predictions
        """
        self.vocabulary = list(vocabulary)
        self.vocabulary_index = VocabularyIndex(self.vocabulary, workers=workers)
        self.weight_store = weight_store
        self.categories = list(categories or [])
        self.catalogue = list(catalogue or [])
        self.threshold = threshold
        self.window = window
        self.debug_mode = debug_mode
        self.aggregator = CategoryAggregator(weight_store, window)

    @classmethod
    def from_directory(cls, data_dir: str, **kwargs) -> "TextCategorizer":
        """
        Load a knowledge base directory.

        Expects vocab.json and weights/ inside data_dir; categories.txt and
        categories.csv are optional.

        Raises:
            VocabularyLoadError: If the vocabulary is missing or corrupt
        """
        layout = CLASSIFIER_CONFIG["knowledge_base"]
        base = Path(data_dir)

        vocabulary = load_vocabulary(str(base / layout["vocabulary_file"]))
        weight_store = WeightStore(str(base / layout["weights_dir"]), layout["weights_suffix"])

        categories_path = base / layout["categories_file"]
        categories = load_runtime_categories(str(categories_path)) if categories_path.exists() else []

        catalogue_path = base / layout["catalogue_file"]
        catalogue = load_category_catalogue(str(catalogue_path)) if catalogue_path.exists() else []

        logger.info(
            f"Loaded knowledge base from {data_dir}: {len(vocabulary)} vocabulary entries, "
            f"{len(categories)} categories, {len(catalogue)} catalogue records"
        )
        return cls(vocabulary, weight_store, categories=categories, catalogue=catalogue, **kwargs)

    def tokenize(self, text: str) -> List[Token]:
        """Normalize a query and bind its words to vocabulary tokens."""
        return tokenize(tokenize_words(text), self.vocabulary_index, self.threshold)

    def predict(self, text: str) -> Dict[str, float]:
        """
        Score every category for a query.

        Args:
            text: Raw query text

        Returns:
            Category name -> score. Empty when no word matched the vocabulary.

        Raises:
            MissingWeightsError: If a matched token has no weight record
        """
        return self.aggregator.aggregate(self.tokenize(text))

    @staticmethod
    def argmax(scores: Dict[str, float]) -> Optional[Tuple[str, float]]:
        """Best (category, score), or None for an empty score map."""
        return get_largest_output(scores)

    def categorize(self, text: str) -> CategoryPrediction:
        """
        Categorize a single query.

        Args:
            text: Raw query text

        Returns:
            CategoryPrediction; category is None when nothing could be predicted
        """
        tokens = self.tokenize(text)
        scores, contributions = self.aggregator.aggregate_with_contributions(tokens)
        best = get_largest_output(scores)

        if best is None:
            prediction = CategoryPrediction(text=text, category=None, score=0.0, scores=scores, tokens=tokens)
        else:
            category, score = best
            prediction = CategoryPrediction(
                text=text,
                category=category,
                score=score,
                scores=scores,
                tokens=tokens,
                is_known_category=category in self.categories,
            )
            if self.categories and not prediction.is_known_category:
                logger.debug("Predicted category '%s' is not in the runtime category list", category)

        if self.debug_mode:
            prediction.debug_rationale = self._build_debug_rationale(tokens, contributions, best)

        return prediction

    def categorize_queries(self, texts: Sequence[str]) -> List[CategoryPrediction]:
        """Categorize several queries in order."""
        return [self.categorize(text) for text in texts]

    def find_catalogue_entry(self, category: str) -> Optional[Category]:
        """First catalogue record whose category name matches."""
        for entry in self.catalogue:
            if entry.category == category:
                return entry
        return None

    def _build_debug_rationale(self, tokens, contributions, best) -> str:
        """Build a short trace of how the prediction was reached."""
        if not tokens:
            return "no vocabulary matches"

        parts = []
        for contribution in contributions:
            token = contribution.token
            parts.append(
                f"{token.word}#{token.vocab_index} w={token.weight:.2f} "
                f"neighbours={len(contribution.neighbours)} +{contribution.total:.2f}"
            )
        outcome = f"{best[0]}={best[1]:.2f}" if best else "no prediction"
        return "; ".join(parts) + f" -> {outcome}"
