"""
Neighbour window extraction for matched tokens.
"""

from typing import List, Sequence

from ..categorisation.tokenizer import Token
from ..config.classifier_config import CLASSIFIER_CONFIG

MAX_TOKEN_NEIGHBOUR_WINDOW = CLASSIFIER_CONFIG["neighbours"]["window"]


def get_token_neighbours(
    tokens: Sequence[Token],
    token_pos: int,
    window: int = MAX_TOKEN_NEIGHBOUR_WINDOW,
) -> List[str]:
    """
    Matched words of the tokens around a position.

    Covers up to `window` tokens on each side, excluding the token itself.

    Args:
        tokens: Token sequence of one query
        token_pos: Position of the current token
        window: Radius of the window

    Returns:
        Neighbour words, left side first
    """
    start = max(0, token_pos - window)
    end = min(len(tokens) - 1, token_pos + window)

    left = tokens[start:token_pos]
    right = tokens[token_pos + 1:end + 1]

    return [t.word for t in left] + [t.word for t in right]
