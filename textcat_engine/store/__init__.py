"""
Knowledge Base Store for the TextCat engine.

Loads the persisted, read-only data the classifier runs against:
- Vocabulary (ordered list of words and phrases)
- Weight store (one neighbour occurrence table per vocabulary index)
"""

from .errors import (
    KnowledgeBaseError,
    VocabularyLoadError,
    MissingWeightsError,
    CorruptWeightsError,
)
from .vocabulary import load_vocabulary
from .weights import (
    NeighbourOccurrenceTable,
    WeightStore,
    InMemoryWeightStore,
    flatten_weight_record,
)

__all__ = [
    "KnowledgeBaseError",
    "VocabularyLoadError",
    "MissingWeightsError",
    "CorruptWeightsError",
    "load_vocabulary",
    "NeighbourOccurrenceTable",
    "WeightStore",
    "InMemoryWeightStore",
    "flatten_weight_record",
]
