"""Data models for the fuzzy ranker."""

from .options import KeySpec, SearchOptions
from .results import (
    FieldMatch,
    ItemResult,
    MatchDetail,
    MatchResult,
    SearchHit,
)

__all__ = [
    "KeySpec",
    "SearchOptions",
    "FieldMatch",
    "ItemResult",
    "MatchDetail",
    "MatchResult",
    "SearchHit",
]
