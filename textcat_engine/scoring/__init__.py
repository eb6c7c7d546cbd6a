"""
Scoring Module for Query Categorization.

Contains neighbour window extraction, category aggregation and result selection.
"""

from .neighbours import get_token_neighbours, MAX_TOKEN_NEIGHBOUR_WINDOW
from .aggregator import CategoryAggregator, TokenContribution, aggregate_category_scores
from .selector import get_largest_output, rank_categories

__all__ = [
    "get_token_neighbours",
    "MAX_TOKEN_NEIGHBOUR_WINDOW",
    "CategoryAggregator",
    "TokenContribution",
    "aggregate_category_scores",
    "get_largest_output",
    "rank_categories",
]
