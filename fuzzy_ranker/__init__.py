"""
Fuzzy Ranker - approximate string matching and ranking.

This package ranks collections of strings or structured records against a
query using the Bitap bit-parallel matching algorithm, tolerating typos,
transpositions and partial matches, with per-key weights and optional
token-level scoring.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .core.bitap import BitapMatcher
from .exceptions import FuzzyRankerError, InvalidWeightError
from .log_config import configure_logging
from .models.options import KeySpec, SearchOptions
from .models.results import MatchDetail, MatchResult, SearchHit

__all__ = [
    "SearchEngine",
    "BitapMatcher",
    "SearchOptions",
    "KeySpec",
    "MatchResult",
    "MatchDetail",
    "SearchHit",
    "FuzzyRankerError",
    "InvalidWeightError",
    "configure_logging",
]
