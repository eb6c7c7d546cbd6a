"""
Category catalogue loaders.
Loads the rich parent/category/url catalogue and the plain runtime category list.
"""

import csv
from dataclasses import dataclass
from typing import List
from pathlib import Path


@dataclass(frozen=True)
class Category:
    """Entry of the rich category catalogue."""
    parent: str
    category: str
    url: str

    def __str__(self) -> str:
        return f"{self.parent} {self.category}"


def load_category_catalogue(csv_path: str) -> List[Category]:
    """
    Load the rich category catalogue from a CSV file.

    Args:
        csv_path: Path to CSV file containing category records

    Returns:
        List of Category records in file order

    Example CSV format:
        parent,category,url
        Food,Pizza,https://example.com/food/pizza
        Travel,Flights,https://example.com/travel/flights
    """
    catalogue = []

    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"Category catalogue file not found: {csv_path}")

    with open(csv_path, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for row in reader:
            category = (row.get('category') or '').strip()
            if category:
                catalogue.append(Category(
                    parent=(row.get('parent') or '').strip(),
                    category=category,
                    url=(row.get('url') or '').strip(),
                ))

    return catalogue


def load_runtime_categories(txt_path: str) -> List[str]:
    """
    Load the runtime category names, one per line.

    Blank lines are skipped. Names are not validated against the weight store.

    Args:
        txt_path: Path to newline-delimited category names

    Returns:
        Category names in file order
    """
    txt_file = Path(txt_path)
    if not txt_file.exists():
        raise FileNotFoundError(f"Category list file not found: {txt_path}")

    with open(txt_path, 'r', encoding='utf-8') as f:
        return [line.strip() for line in f if line.strip()]
