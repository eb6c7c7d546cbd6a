"""
Exceptions raised when the persisted knowledge base cannot be used.
"""


class KnowledgeBaseError(Exception):
    """Base class for knowledge base integrity failures."""
    pass


class VocabularyLoadError(KnowledgeBaseError):
    """Raised when the vocabulary store is missing or corrupt."""
    pass


class MissingWeightsError(KnowledgeBaseError):
    """Raised when no weight record exists for a matched vocabulary index."""

    def __init__(self, vocab_index: int, location: str = ""):
        self.vocab_index = vocab_index
        self.location = location
        message = f"could not find weights for vocabulary index {vocab_index}"
        if location:
            message += f" ({location})"
        super().__init__(message)


class CorruptWeightsError(KnowledgeBaseError):
    """Raised when a weight record exists but cannot be decoded."""
    pass
