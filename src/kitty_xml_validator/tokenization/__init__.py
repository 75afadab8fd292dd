"""Tokenization layer: tag extraction and classification.

Key Components:
    TagExtractor: Pulls bracketed tag tokens out of numbered lines
    RawTag: A token with the line it was found on
    TagClassifier: Sorts tokens into TagKind values and extracts names
"""

from .classifier import (
    TagClassifier,
    TagKind,
    classify,
    extract_name,
)
from .extractor import (
    RawTag,
    TagExtractor,
)

__all__ = [
    "RawTag",
    "TagClassifier",
    "TagExtractor",
    "TagKind",
    "classify",
    "extract_name",
]
