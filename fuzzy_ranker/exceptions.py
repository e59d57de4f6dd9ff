"""Exceptions raised by the fuzzy ranker."""

from typing import Any


class FuzzyRankerError(Exception):
    """Base class for all fuzzy ranker errors."""


class InvalidWeightError(FuzzyRankerError, ValueError):
    """Raised when a search key declares a weight outside (0, 1]."""
    
    def __init__(self, key: str, weight: Any) -> None:
        """
        Initialize the error.
        
        Args:
            key: Name of the offending key
            weight: The declared weight
        """
        self.key = key
        self.weight = weight
        super().__init__(
            f"Key weight has to be > 0 and <= 1 (key={key!r}, weight={weight!r})"
        )
