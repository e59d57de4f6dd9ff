"""Literal token search used for patterns longer than the machine word."""

import re
from typing import Pattern

from ..models.results import MatchResult

# Coarse scores: the bit-parallel search cannot rank patterns this long
REGEX_MATCH_SCORE = 0.5
REGEX_MISS_SCORE = 1.0


def regex_search(
    text: str,
    pattern: str,
    token_separator: Pattern,
    min_match_char_length: int = 1
) -> MatchResult:
    """
    Search for any token of the pattern as a literal substring of the text.
    
    Args:
        text: Normalized text to search in
        pattern: Normalized pattern, split into tokens on the separator
        token_separator: Regex separating the pattern's tokens
        min_match_char_length: Shortest matched range to report
        
    Returns:
        MatchResult with score 0.5 on a match, 1 otherwise
    """
    tokens = [token for token in token_separator.split(pattern) if token]
    if not tokens:
        return MatchResult(False, REGEX_MISS_SCORE, [])
    
    regex = re.compile("|".join(re.escape(token) for token in tokens))
    match = regex.search(text)
    if match is None:
        return MatchResult(False, REGEX_MISS_SCORE, [])
    
    ranges = []
    if match.end() - match.start() >= min_match_char_length:
        ranges.append((match.start(), match.end() - 1))
    
    return MatchResult(True, REGEX_MATCH_SCORE, ranges)
