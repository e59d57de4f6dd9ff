"""Bit-parallel approximate string matching (Bitap)."""

from typing import Dict, List, Optional

from ..models.options import SearchOptions
from ..models.results import MatchResult
from .alphabet import pattern_alphabet
from .normalizer import TextNormalizer
from .regex_search import regex_search
from .scoring import bitap_score, matched_indices

# Fuzzy matches never score a perfect 0; that score is kept for exact equality
FUZZY_PERFECT_SCORE = 0.001


def bitap_search(
    text: str,
    pattern: str,
    alphabet: Dict[str, int],
    location: int = 0,
    distance: int = 100,
    threshold: float = 0.6,
    find_all_matches: bool = False,
    min_match_char_length: int = 1
) -> MatchResult:
    """
    Find the best approximate occurrence of a pattern in a text.
    
    Each pass over the text allows one more error than the previous one. The
    threshold only bounds the search space: any occurrence found within it is
    a match.
    
    Args:
        text: Normalized text to search in
        pattern: Normalized pattern, at most one machine word long
        alphabet: Output of pattern_alphabet(pattern)
        location: Where in the text the pattern is expected
        distance: Tolerance radius around the expected location
        threshold: Highest score beyond which the search gives up
        find_all_matches: Scan the whole text instead of the window around location
        min_match_char_length: Shortest matched range to report
        
    Returns:
        MatchResult with the best score and the matched ranges
    """
    pattern_len = len(pattern)
    text_len = len(text)
    if not pattern_len:
        return MatchResult(False, 1.0, [])
    
    expected_location = location
    current_threshold = threshold
    match_mask = [False] * text_len
    
    # Is there a nearby exact match? (speedup)
    best_location = text.find(pattern, max(expected_location, 0))
    if best_location != -1:
        score = bitap_score(pattern_len, 0, best_location, expected_location, distance)
        current_threshold = min(score, current_threshold)
        
        # What about in the other direction?
        best_location = text.rfind(pattern, 0, max(expected_location + 2 * pattern_len, 0))
        if best_location != -1:
            score = bitap_score(pattern_len, 0, best_location, expected_location, distance)
            current_threshold = min(score, current_threshold)
    
    best_location = -1
    final_score = 1.0
    last_bit_arr: List[int] = []
    bin_max = pattern_len + text_len
    mask = 1 << (pattern_len - 1)
    
    for errors in range(pattern_len):
        # Binary search for how far from the expected location we can stray
        # at this error level
        bin_min = 0
        bin_mid = bin_max
        while bin_min < bin_mid:
            score = bitap_score(
                pattern_len, errors, expected_location + bin_mid, expected_location, distance
            )
            if score <= current_threshold:
                bin_min = bin_mid
            else:
                bin_max = bin_mid
            bin_mid = (bin_max - bin_min) // 2 + bin_min
        
        # The window for this level bounds the next one
        bin_max = bin_mid
        
        start = max(1, expected_location - bin_mid + 1)
        if find_all_matches:
            finish = text_len
        else:
            finish = max(min(expected_location + bin_mid, text_len) + pattern_len, 0)
        
        bit_arr = [0] * (finish + 2)
        bit_arr[finish + 1] = (1 << errors) - 1
        last_len = len(last_bit_arr)
        
        j = finish
        while j >= start:
            current_location = j - 1
            char_match = alphabet.get(text[current_location], 0) if current_location < text_len else 0
            if char_match:
                match_mask[current_location] = True
            
            # First pass: exact match
            bit_arr[j] = ((bit_arr[j + 1] << 1) | 1) & char_match
            
            # Subsequent passes: fuzzy match
            if errors:
                prev_next = last_bit_arr[j + 1] if j + 1 < last_len else 0
                prev_here = last_bit_arr[j] if j < last_len else 0
                bit_arr[j] |= (((prev_next | prev_here) << 1) | 1) | prev_next
            
            if bit_arr[j] & mask:
                score = bitap_score(
                    pattern_len, errors, current_location, expected_location, distance
                )
                if score <= current_threshold:
                    current_threshold = score
                    final_score = score
                    best_location = current_location
                    
                    if not find_all_matches:
                        # Already passed the expected location, downhill from here
                        if best_location <= expected_location:
                            break
                        # Don't stray further from the expected location than this match
                        start = max(1, 2 * expected_location - best_location)
            j -= 1
        
        # No hope for a better match at greater error levels
        score = bitap_score(
            pattern_len, errors + 1, expected_location, expected_location, distance
        )
        if score > current_threshold:
            break
        
        last_bit_arr = bit_arr
    
    return MatchResult(
        best_location >= 0,
        FUZZY_PERFECT_SCORE if final_score == 0 else final_score,
        matched_indices(match_mask, min_match_char_length),
    )


class BitapMatcher:
    """Matches one pattern against many texts under fixed options."""
    
    def __init__(self, pattern: str, options: Optional[SearchOptions] = None) -> None:
        """
        Initialize the matcher.
        
        Args:
            pattern: Query pattern
            options: Search options (defaults if None)
        """
        self.options = options or SearchOptions()
        self.normalizer = TextNormalizer(self.options.is_case_sensitive)
        self.raw_pattern = pattern
        self.pattern = self.normalizer.fold(pattern)
        self.pattern_alphabet: Optional[Dict[str, int]] = None
        if len(self.pattern) <= self.options.max_pattern_length:
            self.pattern_alphabet = pattern_alphabet(self.pattern)
    
    def search(self, text: str) -> MatchResult:
        """
        Compare the pattern against a text.
        
        Args:
            text: Text to search in
            
        Returns:
            MatchResult for this text
        """
        options = self.options
        text = self.normalizer.fold(text)
        
        # Exact match
        if self.pattern == text:
            return MatchResult(True, 0.0, [(0, len(text) - 1)] if text else [])
        
        # Beyond the machine word size, fall back to a literal search
        if self.pattern_alphabet is None:
            return regex_search(
                text, self.pattern, options.token_separator, options.min_match_char_length
            )
        
        return bitap_search(
            text,
            self.pattern,
            self.pattern_alphabet,
            location=options.location,
            distance=options.distance,
            threshold=options.threshold,
            find_all_matches=options.find_all_matches,
            min_match_char_length=options.min_match_char_length,
        )
    
    def __repr__(self) -> str:
        return f"BitapMatcher(pattern={self.raw_pattern!r})"
