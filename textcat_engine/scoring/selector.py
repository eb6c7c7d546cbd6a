"""
Result selection over aggregated category scores.
"""

from typing import Dict, List, Optional, Tuple


def _ranking_key(item: Tuple[str, float]) -> Tuple[float, str]:
    category, score = item
    return (-score, category)


def get_largest_output(scores: Dict[str, float]) -> Optional[Tuple[str, float]]:
    """
    Category with the highest score.

    Exact ties go to the lexicographically smallest category name.

    Args:
        scores: Category name -> score

    Returns:
        (category, score), or None when there are no scores
    """
    if not scores:
        return None
    return min(scores.items(), key=_ranking_key)


def rank_categories(scores: Dict[str, float], top_n: Optional[int] = None) -> List[Tuple[str, float]]:
    """
    All categories by descending score, then name.

    Args:
        scores: Category name -> score
        top_n: Keep only the first N entries

    Returns:
        List of (category, score)
    """
    ranked = sorted(scores.items(), key=_ranking_key)
    if top_n is not None:
        ranked = ranked[:top_n]
    return ranked
