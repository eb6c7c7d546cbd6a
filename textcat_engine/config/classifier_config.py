"""
Classifier configuration for the TextCat engine.
Contains matching thresholds, neighbour window size and knowledge base layout.
"""

# Classifier Configuration
CLASSIFIER_CONFIG = {
    # Fuzzy vocabulary matching
    "matching": {
        "threshold": 90,  # Minimum penalized ratio (0-100) for a token match
        "length_penalty": 5,  # Subtracted when lengths differ or entry is structural
        "penalized_prefixes": ("-", "=", "(", ")"),
        "workers": -1,  # rapidfuzz worker pool size (-1 = all cores)
    },

    # Neighbour window used during category aggregation
    "neighbours": {
        "window": 4,  # Tokens on each side of the current token
    },

    # Knowledge base layout inside a data directory
    "knowledge_base": {
        "vocabulary_file": "vocab.json",
        "weights_dir": "weights",
        "weights_suffix": ".json",
        "categories_file": "categories.txt",
        "catalogue_file": "categories.csv",
    },
}
