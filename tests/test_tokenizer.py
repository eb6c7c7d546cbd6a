"""
Test suite for the token matching driver.

Tests cover:
- Bigram preference over single words
- Consumption of the second bigram word by value
- Even-position-only bigram starts
- Silent dropping of out-of-vocabulary words
"""

import unittest
from textcat_engine.categorisation.pattern_matching import VocabularyIndex
from textcat_engine.categorisation.tokenizer import Token, tokenize, match_position


class TestBigramPreference(unittest.TestCase):
    """Test that two-word entries win over single words."""

    def test_new_york_emits_single_token(self):
        tokens = tokenize(["new", "york"], ["new york", "york"])
        self.assertEqual(tokens, [Token("new york", 0, 1.0)])

    def test_consumed_word_skipped_everywhere(self):
        """A consumed word is skipped at later positions too, by value."""
        tokens = tokenize(["new", "york", "york"], ["new york", "york"])
        self.assertEqual([t.word for t in tokens], ["new york"])

    def test_odd_positions_never_start_bigram(self):
        tokens = tokenize(["i", "new", "york"], ["new york", "york", "new"])
        self.assertEqual([t.word for t in tokens], ["new", "york"])
        self.assertEqual([t.vocab_index for t in tokens], [2, 1])

    def test_last_even_position_tries_single_word_only(self):
        tokens = tokenize(["pizza"], ["pizza"])
        self.assertEqual(tokens, [Token("pizza", 0, 1.0)])


class TestOutOfVocabulary(unittest.TestCase):
    """Test that unmatched words are dropped."""

    def test_unknown_words_dropped(self):
        tokens = tokenize(["pizza", "zzz"], ["pizza"])
        self.assertEqual(tokens, [Token("pizza", 0, 1.0)])

    def test_no_words_no_tokens(self):
        self.assertEqual(tokenize([], ["pizza"]), [])

    def test_nothing_matches(self):
        self.assertEqual(tokenize(["completely", "unrelated", "text"], ["xyz"]), [])


class TestTokenWeights(unittest.TestCase):
    """Test that weights come straight from the matcher."""

    def test_typo_weight(self):
        tokens = tokenize(["restaurent"], ["restaurant"])
        self.assertEqual(len(tokens), 1)
        self.assertAlmostEqual(tokens[0].weight, 0.9)

    def test_threshold_override(self):
        self.assertEqual(tokenize(["restaurent"], ["restaurant"], threshold=95), [])

    def test_prepared_index_accepted(self):
        index = VocabularyIndex(["pizza", "delivery"])
        tokens = tokenize(["pizza", "delivery"], index)
        self.assertEqual([t.vocab_index for t in tokens], [0, 1])


class TestMatchPosition(unittest.TestCase):
    """Test the single-position step and its consumed set."""

    def setUp(self):
        self.index = VocabularyIndex(["new york", "york"])
        self.words = ["new", "york"]

    def test_bigram_returns_grown_consumed_set(self):
        consumed = set()
        token, after = match_position(self.words, 0, self.index, consumed, 90)
        self.assertEqual(token.word, "new york")
        self.assertEqual(after, {"york"})
        self.assertEqual(consumed, set())

    def test_consumed_word_yields_nothing(self):
        token, after = match_position(self.words, 1, self.index, {"york"}, 90)
        self.assertIsNone(token)
        self.assertEqual(after, {"york"})

    def test_unconsumed_word_matches(self):
        token, after = match_position(self.words, 1, self.index, set(), 90)
        self.assertEqual(token, Token("york", 1, 1.0))
        self.assertEqual(after, set())


if __name__ == "__main__":
    unittest.main()
