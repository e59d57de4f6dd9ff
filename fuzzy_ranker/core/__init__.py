"""Core matching and ranking functionality."""

from .accessor import FieldValue, deep_value
from .alphabet import pattern_alphabet
from .bitap import BitapMatcher, bitap_search
from .engine import CollectionShape, SearchEngine
from .normalizer import TextNormalizer
from .regex_search import regex_search
from .scoring import bitap_score, matched_indices

__all__ = [
    "SearchEngine",
    "CollectionShape",
    "BitapMatcher",
    "bitap_search",
    "bitap_score",
    "matched_indices",
    "pattern_alphabet",
    "regex_search",
    "deep_value",
    "FieldValue",
    "TextNormalizer",
]
