"""
TextCat Engine - Fuzzy Vocabulary Query Classifier.

Classifies short free-text queries into categories by matching their words
against a precomputed vocabulary and aggregating the category weights learned
for each vocabulary entry's neighbouring words.

Main Components:
    - categorisation: Normalization, fuzzy vocabulary matching, token driver
    - scoring: Neighbour windows, category aggregation, result selection
    - store: Vocabulary and weight store loaders
    - config: Classifier configuration and category catalogues
"""

from typing import Dict

# Core categorisation components
from .categorisation.engine import (
    TextCategorizer,
    CategoryPrediction,
)
from .categorisation.tokenizer import Token

# Scoring components
from .scoring.aggregator import aggregate_category_scores
from .scoring.selector import get_largest_output, rank_categories

# Knowledge base
from .store import (
    KnowledgeBaseError,
    VocabularyLoadError,
    MissingWeightsError,
    CorruptWeightsError,
    WeightStore,
    InMemoryWeightStore,
    load_vocabulary,
)

# Configuration
from .config import (
    CLASSIFIER_CONFIG,
    Category,
    load_category_catalogue,
    load_runtime_categories,
)


__version__ = "1.0.0"
__all__ = [
    # Categorisation
    "TextCategorizer",
    "CategoryPrediction",
    "Token",
    # Scoring
    "aggregate_category_scores",
    "get_largest_output",
    "rank_categories",
    # Knowledge base
    "KnowledgeBaseError",
    "VocabularyLoadError",
    "MissingWeightsError",
    "CorruptWeightsError",
    "WeightStore",
    "InMemoryWeightStore",
    "load_vocabulary",
    # Configuration
    "CLASSIFIER_CONFIG",
    "Category",
    "load_category_catalogue",
    "load_runtime_categories",
    # Main function
    "run_text_classification",
]


def run_text_classification(text: str, data_dir: str, debug_mode: bool = False) -> Dict:
    """
    Main entry point for query classification.

    This function runs the complete pipeline:
    1. Load the knowledge base from data_dir
    2. Normalize the query and match its words to vocabulary tokens
    3. Aggregate neighbour weights into category scores
    4. Pick the best category

    Args:
        text: Raw query text
        data_dir: Directory holding vocab.json, weights/ and categories.txt
        debug_mode: If True, include a rationale string

    Returns:
        Dictionary containing:
            - category: Best category, or None when nothing matched
            - score: Score of the best category (0.0 without a prediction)
            - scores: All category scores
            - tokens: Matched tokens (word, vocab_index, weight)
            - is_known_category: Whether the category is in the runtime list
            - debug_rationale: Trace string (debug mode only)

    Example:
        >>> result = run_text_classification("pizza delivery", "data/")
        >>> print(result["category"], result["score"])
        Food 5.0
    """
    categorizer = TextCategorizer.from_directory(data_dir, debug_mode=debug_mode)
    prediction = categorizer.categorize(text)

    result = {
        "category": prediction.category,
        "score": prediction.score,
        "scores": prediction.scores,
        "tokens": [
            {"word": t.word, "vocab_index": t.vocab_index, "weight": t.weight}
            for t in prediction.tokens
        ],
        "is_known_category": prediction.is_known_category,
        "debug_rationale": prediction.debug_rationale,
    }
    return result
