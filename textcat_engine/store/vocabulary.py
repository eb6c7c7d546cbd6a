"""
Vocabulary store loader.
"""

import json
import logging
from pathlib import Path
from typing import List

from .errors import VocabularyLoadError

logger = logging.getLogger(__name__)


def load_vocabulary(json_path: str) -> List[str]:
    """
    Load the vocabulary from a JSON array of strings.

    The position of each entry is its vocabulary index and the key into the
    weight store.

    Args:
        json_path: Path to the vocabulary file

    Returns:
        Vocabulary entries in declaration order

    Raises:
        VocabularyLoadError: If the file is missing, not valid JSON, or not a
            list of unique strings
    """
    vocab_file = Path(json_path)
    if not vocab_file.exists():
        raise VocabularyLoadError(f"unable to load the vocabulary: {json_path} not found")

    try:
        with open(vocab_file, 'r', encoding='utf-8') as f:
            vocabulary = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise VocabularyLoadError(f"unable to load the vocabulary: {e}") from e

    if not isinstance(vocabulary, list) or not all(isinstance(w, str) for w in vocabulary):
        raise VocabularyLoadError("unable to load the vocabulary: expected a JSON array of strings")

    if len(set(vocabulary)) != len(vocabulary):
        raise VocabularyLoadError("unable to load the vocabulary: entries must be unique")

    logger.info("Loaded vocabulary with %d entries from %s", len(vocabulary), json_path)
    return vocabulary
