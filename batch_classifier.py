"""
Batch Classifier for categorizing many queries against one knowledge base.
Handles query files and command-line text with per-query error handling.
"""

import argparse
import logging
import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from textcat_engine.categorisation.engine import TextCategorizer, CategoryPrediction
from textcat_engine.categorisation.preprocess import join_query_words
from textcat_engine.store.errors import (
    KnowledgeBaseError,
    MissingWeightsError,
    CorruptWeightsError,
)

logger = logging.getLogger(__name__)


@dataclass
class ProcessingError:
    """Details of a processing error."""
    query_ref: str
    error_type: str
    error_message: str
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass
class BatchStats:
    """Statistics for batch classification."""
    total_queries: int = 0
    processed: int = 0
    successful: int = 0
    failed: int = 0

    # Outcome counts
    predicted: int = 0
    unpredicted: int = 0

    # Timing
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def processing_time(self) -> float:
        """Calculate total processing time in seconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0

    @property
    def success_rate(self) -> float:
        """Calculate success rate as percentage."""
        if self.total_queries == 0:
            return 0.0
        return (self.successful / self.total_queries) * 100

    @property
    def prediction_rate(self) -> float:
        """Share of successful queries that produced a category, as percentage."""
        if self.successful == 0:
            return 0.0
        return (self.predicted / self.successful) * 100


@dataclass
class BatchResult:
    """Complete result of batch classification."""
    stats: BatchStats
    results: List[Tuple[str, CategoryPrediction]]
    errors: List[ProcessingError]
    error_summary: Dict[str, int] = field(default_factory=dict)

    @staticmethod
    def merge_results(result1: 'BatchResult', result2: 'BatchResult') -> 'BatchResult':
        """
        Merge two BatchResult objects into a single combined result.

        Args:
            result1: First batch result (typically the existing cumulative result)
            result2: Second batch result (typically the new batch to add)

        Returns:
            New BatchResult with merged data
        """
        merged_stats = BatchStats(
            total_queries=result1.stats.total_queries + result2.stats.total_queries,
            processed=result1.stats.processed + result2.stats.processed,
            successful=result1.stats.successful + result2.stats.successful,
            failed=result1.stats.failed + result2.stats.failed,
            predicted=result1.stats.predicted + result2.stats.predicted,
            unpredicted=result1.stats.unpredicted + result2.stats.unpredicted,
        )

        # Use earliest start time and latest end time
        if result1.stats.start_time and result2.stats.start_time:
            merged_stats.start_time = min(result1.stats.start_time, result2.stats.start_time)
        else:
            merged_stats.start_time = result1.stats.start_time or result2.stats.start_time

        if result1.stats.end_time and result2.stats.end_time:
            merged_stats.end_time = max(result1.stats.end_time, result2.stats.end_time)
        else:
            merged_stats.end_time = result1.stats.end_time or result2.stats.end_time

        merged_error_summary = dict(result1.error_summary)
        for error_type, count in result2.error_summary.items():
            merged_error_summary[error_type] = merged_error_summary.get(error_type, 0) + count

        return BatchResult(
            stats=merged_stats,
            results=result1.results + result2.results,
            errors=result1.errors + result2.errors,
            error_summary=merged_error_summary
        )


class BatchClassifier:
    """Batch classifier for free-text queries."""

    def __init__(self, categorizer: TextCategorizer):
        """
        Initialize the batch classifier.

        Args:
            categorizer: Categorizer with a loaded knowledge base
        """
        self.categorizer = categorizer
        logger.info(
            f"Initialized batch classifier: vocabulary={len(categorizer.vocabulary)}, "
            f"categories={len(categorizer.categories)}, threshold={categorizer.threshold}"
        )

    def process_batch(
        self,
        queries: List[Tuple[str, str]],
        progress_callback: Optional[Callable[[int, int, str], None]] = None
    ) -> BatchResult:
        """
        Classify a batch of queries.

        Args:
            queries: List of (query_ref, text) tuples
            progress_callback: Optional callback(current, total, message)

        Returns:
            BatchResult with all classification results
        """
        stats = BatchStats(
            total_queries=len(queries),
            start_time=datetime.now()
        )

        results = []
        errors = []
        error_types = {}

        logger.info(f"Starting batch classification of {len(queries)} queries")

        for idx, (query_ref, text) in enumerate(queries):
            error_type = None
            try:
                if progress_callback:
                    progress_callback(idx + 1, len(queries), f"Classifying: {query_ref}")

                logger.debug(f"Classifying query {idx + 1}/{len(queries)}: {query_ref}")

                if not isinstance(text, str):
                    raise ValueError(f"query text must be a string, got {type(text).__name__}")

                prediction = self.categorizer.categorize(text)
                results.append((query_ref, prediction))
                stats.successful += 1

                if prediction.has_prediction:
                    stats.predicted += 1
                else:
                    stats.unpredicted += 1

            except MissingWeightsError as e:
                error_type = "MISSING_WEIGHTS"
                error_message = str(e)
                logger.error(f"Missing weights for {query_ref}: {e}")

            except CorruptWeightsError as e:
                error_type = "CORRUPT_WEIGHTS"
                error_message = str(e)
                logger.error(f"Corrupt weights for {query_ref}: {e}")

            except ValueError as e:
                error_type = "DATA_VALIDATION_ERROR"
                error_message = str(e)
                logger.error(f"Data validation error in {query_ref}: {e}")

            except Exception as e:
                error_type = "PROCESSING_ERROR"
                error_message = f"{type(e).__name__}: {str(e)}"
                logger.error(f"Processing error in {query_ref}: {traceback.format_exc()}")

            stats.processed += 1
            if error_type:
                errors.append(ProcessingError(
                    query_ref=query_ref,
                    error_type=error_type,
                    error_message=error_message
                ))
                stats.failed += 1
                error_types[error_type] = error_types.get(error_type, 0) + 1

        stats.end_time = datetime.now()

        logger.info(
            f"Batch classification complete: {stats.successful}/{stats.total_queries} successful, "
            f"{stats.predicted} predicted, time: {stats.processing_time:.1f}s"
        )

        return BatchResult(
            stats=stats,
            results=results,
            errors=errors,
            error_summary=error_types
        )

    def load_queries_from_file(self, path: str) -> List[Tuple[str, str]]:
        """
        Read one query per non-blank line.

        Args:
            path: Text file of queries

        Returns:
            List of ("line-{n}", text) tuples, n counted from 1
        """
        query_file = Path(path)
        if not query_file.exists():
            raise FileNotFoundError(f"Query file not found: {path}")

        queries = []
        with open(query_file, 'r', encoding='utf-8') as f:
            for line_no, line in enumerate(f, start=1):
                text = line.strip()
                if text:
                    queries.append((f"line-{line_no}", text))
        return queries

    def results_to_dataframe(self, results: List[Tuple[str, CategoryPrediction]]):
        """
        Convert classification results to a pandas DataFrame.

        Args:
            results: List of (query_ref, CategoryPrediction)

        Returns:
            pandas DataFrame
        """
        import pandas as pd

        rows = []
        for query_ref, prediction in results:
            row = {
                "Query Ref": query_ref,
                "Query": prediction.text,
                "Category": prediction.category or "",
                "Score": round(prediction.score, 4),
                "Known Category": prediction.is_known_category,
                "Matched Tokens": "; ".join(t.word for t in prediction.tokens),
                "Token Count": len(prediction.tokens),
            }
            if prediction.debug_rationale:
                row["Debug Rationale"] = prediction.debug_rationale
            rows.append(row)

        return pd.DataFrame(rows)

    def errors_to_dataframe(self, errors: List[ProcessingError]):
        """
        Convert processing errors to a pandas DataFrame.

        Args:
            errors: List of ProcessingError objects

        Returns:
            pandas DataFrame
        """
        import pandas as pd

        rows = []
        for error in errors:
            row = {
                "Query Ref": error.query_ref,
                "Error Type": error.error_type,
                "Error Message": error.error_message,
                "Timestamp": error.timestamp,
            }
            rows.append(row)

        return pd.DataFrame(rows)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Classify free-text queries into categories.")
    parser.add_argument("words", nargs="*", help="Query words to classify")
    parser.add_argument("--data-dir", default="data", help="Knowledge base directory (default: data)")
    parser.add_argument("--input", help="Text file with one query per line")
    parser.add_argument("--output", help="CSV file for batch results")
    parser.add_argument("--debug", action="store_true", help="Include prediction rationale and debug logs")
    return parser


def errors_output_path(output: str) -> Path:
    """Sibling CSV for error rows, e.g. results.csv -> results_errors.csv."""
    path = Path(output)
    return path.with_name(f"{path.stem}_errors{path.suffix or '.csv'}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.input and args.words:
        parser.error("query words cannot be combined with --input")

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    try:
        categorizer = TextCategorizer.from_directory(args.data_dir, debug_mode=args.debug)
    except KnowledgeBaseError as e:
        logger.error(f"Unable to load knowledge base: {e}")
        return 2

    if args.input:
        processor = BatchClassifier(categorizer)
        try:
            queries = processor.load_queries_from_file(args.input)
        except FileNotFoundError as e:
            logger.error(f"Unable to read queries: {e}")
            return 2

        batch = processor.process_batch(queries)
        frame = processor.results_to_dataframe(batch.results)
        error_frame = processor.errors_to_dataframe(batch.errors)
        if args.output:
            frame.to_csv(args.output, index=False, encoding="utf-8")
            logger.info(f"Saved {len(frame)} rows to {args.output}")
            if batch.errors:
                errors_path = errors_output_path(args.output)
                error_frame.to_csv(errors_path, index=False, encoding="utf-8")
                logger.info(f"Saved {len(error_frame)} error rows to {errors_path}")
        else:
            print(frame.to_string(index=False))
            if batch.errors:
                print()
                print(error_frame.to_string(index=False))
        return 0 if batch.stats.failed == 0 else 1

    text = join_query_words(args.words)
    prediction = categorizer.categorize(text)
    if prediction.debug_rationale:
        logger.debug(f"Rationale: {prediction.debug_rationale}")
    if not prediction.has_prediction:
        return 1
    print((prediction.category, prediction.score))
    return 0


if __name__ == "__main__":
    sys.exit(main())
