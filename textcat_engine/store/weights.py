"""
Weight store for per-token neighbour occurrence tables.

Each vocabulary index owns one record mapping (neighbour_word, category) to
the number of times the neighbour was seen next to that token in the category.
On disk a record is a JSON object of the form:

    {"delivery": {"Food": 3.0, "Other": 0.5}}
"""

import json
import logging
from pathlib import Path
from typing import Dict, Tuple

from .errors import MissingWeightsError, CorruptWeightsError

logger = logging.getLogger(__name__)

# (neighbour_word, category_name) -> occurrence count
NeighbourOccurrenceTable = Dict[Tuple[str, str], float]


def flatten_weight_record(record: Dict[str, Dict[str, float]]) -> NeighbourOccurrenceTable:
    """
    Flatten a nested {neighbour: {category: count}} record.

    Raises:
        ValueError: If the record shape is wrong or a count is negative
    """
    if not isinstance(record, dict):
        raise ValueError("weight record must be a JSON object")

    table = {}
    for neighbour, categories in record.items():
        if not isinstance(categories, dict):
            raise ValueError(f"neighbour '{neighbour}' must map to an object of category counts")
        for category, count in categories.items():
            if isinstance(count, bool) or not isinstance(count, (int, float)):
                raise ValueError(f"count for ('{neighbour}', '{category}') is not numeric")
            if count < 0:
                raise ValueError(f"count for ('{neighbour}', '{category}') is negative")
            table[(neighbour, category)] = float(count)
    return table


class WeightStore:
    """Read-only weight store backed by one JSON file per vocabulary index."""

    def __init__(self, directory: str, suffix: str = ".json"):
        """
        Args:
            directory: Directory holding the weight records
            suffix: File suffix of each record
        """
        self.directory = Path(directory)
        self.suffix = suffix

    def record_path(self, vocab_index: int) -> Path:
        """Path of the record for a vocabulary index (weights/{index}.json)."""
        return self.directory / f"{vocab_index}{self.suffix}"

    def load(self, vocab_index: int) -> NeighbourOccurrenceTable:
        """
        Load the neighbour occurrence table for a vocabulary index.

        Raises:
            MissingWeightsError: If no record exists for the index
            CorruptWeightsError: If the record cannot be decoded
        """
        path = self.record_path(vocab_index)
        if not path.exists():
            raise MissingWeightsError(vocab_index, str(path))

        try:
            with open(path, 'r', encoding='utf-8') as f:
                table = flatten_weight_record(json.load(f))
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as e:
            raise CorruptWeightsError(f"weights for vocabulary index {vocab_index} are corrupt: {e}") from e

        logger.debug("Loaded %d weight entries for vocabulary index %d", len(table), vocab_index)
        return table


class InMemoryWeightStore:
    """Weight store serving tables already held in memory."""

    def __init__(self, tables: Dict[int, NeighbourOccurrenceTable]):
        self.tables = tables

    def load(self, vocab_index: int) -> NeighbourOccurrenceTable:
        try:
            return self.tables[vocab_index]
        except KeyError:
            raise MissingWeightsError(vocab_index) from None
