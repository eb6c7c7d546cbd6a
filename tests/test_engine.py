"""
Test suite for the text categorizer.

Tests cover:
- End-to-end prediction against a small knowledge base
- No-match queries
- Knowledge base directory loading
- Unknown categories and debug rationale
"""

import json
import os
import tempfile
import unittest

from textcat_engine import run_text_classification
from textcat_engine.categorisation.engine import TextCategorizer, CategoryPrediction
from textcat_engine.store.weights import InMemoryWeightStore
from textcat_engine.store.errors import MissingWeightsError, VocabularyLoadError


PIZZA_TABLES = {
    0: {("delivery", "Food"): 3.0},
    1: {("pizza", "Food"): 2.0},
}


def write_knowledge_base(directory, vocabulary, records, categories=None, catalogue=None):
    """Write vocab.json, weights/ and the optional catalogues into a directory."""
    with open(os.path.join(directory, "vocab.json"), "w", encoding="utf-8") as f:
        json.dump(vocabulary, f)

    weights_dir = os.path.join(directory, "weights")
    os.makedirs(weights_dir, exist_ok=True)
    for index, record in records.items():
        with open(os.path.join(weights_dir, f"{index}.json"), "w", encoding="utf-8") as f:
            json.dump(record, f)

    if categories is not None:
        with open(os.path.join(directory, "categories.txt"), "w", encoding="utf-8") as f:
            f.write("\n".join(categories))

    if catalogue is not None:
        with open(os.path.join(directory, "categories.csv"), "w", encoding="utf-8") as f:
            f.write(catalogue)


class TestEndToEnd(unittest.TestCase):
    """Test the pizza delivery example."""

    def setUp(self):
        self.categorizer = TextCategorizer(
            ["pizza", "delivery"],
            InMemoryWeightStore(PIZZA_TABLES),
            categories=["Food", "Other"],
        )

    def test_predict_scores(self):
        self.assertEqual(self.categorizer.predict("pizza delivery"), {"Food": 5.0})

    def test_argmax(self):
        scores = self.categorizer.predict("pizza delivery")
        self.assertEqual(self.categorizer.argmax(scores), ("Food", 5.0))

    def test_tokens_have_full_weight(self):
        tokens = self.categorizer.tokenize("Pizza, DELIVERY!")
        self.assertEqual([(t.word, t.vocab_index, t.weight) for t in tokens],
                         [("pizza", 0, 1.0), ("delivery", 1, 1.0)])

    def test_categorize(self):
        prediction = self.categorizer.categorize("pizza delivery")
        self.assertIsInstance(prediction, CategoryPrediction)
        self.assertEqual(prediction.category, "Food")
        self.assertEqual(prediction.score, 5.0)
        self.assertTrue(prediction.has_prediction)
        self.assertTrue(prediction.is_known_category)
        self.assertIsNone(prediction.debug_rationale)

    def test_single_token_has_no_neighbours(self):
        prediction = self.categorizer.categorize("pizza")
        self.assertEqual(prediction.scores, {})
        self.assertIsNone(prediction.category)

    def test_categorize_queries(self):
        predictions = self.categorizer.categorize_queries(["pizza delivery", "nothing here"])
        self.assertEqual([p.category for p in predictions], ["Food", None])


class TestNoMatch(unittest.TestCase):
    """Test queries without vocabulary matches."""

    def test_unrelated_text(self):
        categorizer = TextCategorizer(["xyz"], InMemoryWeightStore({}), categories=["Food"])
        self.assertEqual(categorizer.tokenize("completely unrelated text"), [])
        scores = categorizer.predict("completely unrelated text")
        self.assertEqual(scores, {})
        self.assertIsNone(categorizer.argmax(scores))

        prediction = categorizer.categorize("completely unrelated text")
        self.assertIsNone(prediction.category)
        self.assertEqual(prediction.score, 0.0)
        self.assertFalse(prediction.has_prediction)

    def test_empty_text(self):
        categorizer = TextCategorizer(["pizza"], InMemoryWeightStore({}))
        self.assertEqual(categorizer.predict(""), {})


class TestCategoryHandling(unittest.TestCase):
    """Test runtime category list handling."""

    def test_unknown_category_still_returned(self):
        categorizer = TextCategorizer(
            ["pizza", "delivery"],
            InMemoryWeightStore({0: {("delivery", "Takeaway"): 1.0}, 1: {}}),
            categories=["Food", "Other"],
        )
        prediction = categorizer.categorize("pizza delivery")
        self.assertEqual(prediction.category, "Takeaway")
        self.assertFalse(prediction.is_known_category)

    def test_missing_weights_propagate(self):
        categorizer = TextCategorizer(["pizza", "delivery"], InMemoryWeightStore({0: {}}))
        with self.assertRaises(MissingWeightsError):
            categorizer.predict("pizza delivery")


class TestDebugMode(unittest.TestCase):
    """Test debug rationale output."""

    def test_rationale_lists_tokens(self):
        categorizer = TextCategorizer(
            ["pizza", "delivery"],
            InMemoryWeightStore(PIZZA_TABLES),
            debug_mode=True,
        )
        rationale = categorizer.categorize("pizza delivery").debug_rationale
        self.assertIn("pizza#0", rationale)
        self.assertIn("delivery#1", rationale)
        self.assertTrue(rationale.endswith("-> Food=5.00"))

    def test_rationale_without_matches(self):
        categorizer = TextCategorizer(["xyz"], InMemoryWeightStore({}), debug_mode=True)
        self.assertEqual(categorizer.categorize("hello").debug_rationale, "no vocabulary matches")


class TestFromDirectory(unittest.TestCase):
    """Test loading a knowledge base directory."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def test_full_layout(self):
        write_knowledge_base(
            self.data_dir,
            ["pizza", "delivery"],
            {0: {"delivery": {"Food": 3.0}}, 1: {"pizza": {"Food": 2.0}}},
            categories=["Food", "Other"],
            catalogue="parent,category,url\nShopping,Food,https://example.com/food\n",
        )
        categorizer = TextCategorizer.from_directory(self.data_dir)
        self.assertEqual(categorizer.vocabulary, ["pizza", "delivery"])
        self.assertEqual(categorizer.categories, ["Food", "Other"])
        self.assertEqual(str(categorizer.find_catalogue_entry("Food")), "Shopping Food")
        self.assertIsNone(categorizer.find_catalogue_entry("Other"))
        self.assertEqual(categorizer.argmax(categorizer.predict("pizza delivery")), ("Food", 5.0))

    def test_optional_catalogues_missing(self):
        write_knowledge_base(self.data_dir, ["pizza"], {0: {}})
        categorizer = TextCategorizer.from_directory(self.data_dir)
        self.assertEqual(categorizer.categories, [])
        self.assertEqual(categorizer.catalogue, [])

    def test_missing_vocabulary_is_fatal(self):
        with self.assertRaises(VocabularyLoadError):
            TextCategorizer.from_directory(self.data_dir)

    def test_constructor_overrides(self):
        write_knowledge_base(self.data_dir, ["restaurant"], {0: {}})
        categorizer = TextCategorizer.from_directory(self.data_dir, threshold=95)
        self.assertEqual(categorizer.tokenize("restaurent"), [])

    def test_run_text_classification(self):
        write_knowledge_base(
            self.data_dir,
            ["pizza", "delivery"],
            {0: {"delivery": {"Food": 3.0}}, 1: {"pizza": {"Food": 2.0}}},
            categories=["Food", "Other"],
        )
        result = run_text_classification("pizza delivery", self.data_dir)
        self.assertEqual(result["category"], "Food")
        self.assertEqual(result["score"], 5.0)
        self.assertEqual(result["scores"], {"Food": 5.0})
        self.assertEqual(result["tokens"][0], {"word": "pizza", "vocab_index": 0, "weight": 1.0})
        self.assertTrue(result["is_known_category"])
        self.assertIsNone(result["debug_rationale"])


if __name__ == "__main__":
    unittest.main()
