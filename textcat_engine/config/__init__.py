"""
Configuration module for the TextCat engine.

This module contains the classifier configuration and the category catalogue loaders.
"""

from .classifier_config import CLASSIFIER_CONFIG
from .category_loader import Category, load_category_catalogue, load_runtime_categories

__all__ = [
    "CLASSIFIER_CONFIG",
    "Category",
    "load_category_catalogue",
    "load_runtime_categories",
]
