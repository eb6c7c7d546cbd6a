"""
Category Aggregator.

Scores categories from the neighbour occurrence tables of the matched tokens:
every (neighbour, category) count whose neighbour sits inside the token's
window adds `count * token.weight` to that category.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..categorisation.tokenizer import Token
from ..store.weights import NeighbourOccurrenceTable
from .neighbours import get_token_neighbours, MAX_TOKEN_NEIGHBOUR_WINDOW

logger = logging.getLogger(__name__)


@dataclass
class TokenContribution:
    """Score one token added to the map."""
    token: Token
    neighbours: List[str]
    category_scores: Dict[str, float] = field(default_factory=dict)

    @property
    def total(self) -> float:
        return sum(self.category_scores.values())


class CategoryAggregator:
    """Aggregates category scores for the tokens of one query."""

    def __init__(self, weight_store, window: int = MAX_TOKEN_NEIGHBOUR_WINDOW):
        """
        Args:
            weight_store: Object with load(vocab_index) -> NeighbourOccurrenceTable
            window: Neighbour window radius
        """
        self.weight_store = weight_store
        self.window = window

    def aggregate(self, tokens: Sequence[Token]) -> Dict[str, float]:
        """
        Score categories for a token sequence.

        Raises:
            MissingWeightsError: If a token's vocabulary index has no record
        """
        scores, _ = self.aggregate_with_contributions(tokens)
        return scores

    def aggregate_with_contributions(self, tokens: Sequence[Token]):
        """
        Score categories and keep what each token added.

        Returns:
            Tuple of (category -> score, list of TokenContribution)
        """
        scores: Dict[str, float] = defaultdict(float)
        contributions = []
        # Each vocabulary index is read at most once per query
        tables: Dict[int, NeighbourOccurrenceTable] = {}

        for pos, token in enumerate(tokens):
            neighbours = get_token_neighbours(tokens, pos, self.window)
            if token.vocab_index not in tables:
                tables[token.vocab_index] = self.weight_store.load(token.vocab_index)
            table = tables[token.vocab_index]

            contribution = TokenContribution(token=token, neighbours=neighbours)
            neighbour_set = set(neighbours)
            for (neighbour, category), occurrences in table.items():
                if neighbour in neighbour_set:
                    added = occurrences * token.weight
                    scores[category] += added
                    contribution.category_scores[category] = contribution.category_scores.get(category, 0.0) + added

            contributions.append(contribution)

        logger.debug("Aggregated %d categories from %d tokens", len(scores), len(tokens))
        return dict(scores), contributions


def aggregate_category_scores(
    tokens: Sequence[Token],
    weight_store,
    window: int = MAX_TOKEN_NEIGHBOUR_WINDOW,
) -> Dict[str, float]:
    """
    Score categories for a token sequence.

    Args:
        tokens: Tokens of one query
        weight_store: Object with load(vocab_index) -> NeighbourOccurrenceTable
        window: Neighbour window radius

    Returns:
        Category name -> accumulated score
    """
    return CategoryAggregator(weight_store, window).aggregate(tokens)
