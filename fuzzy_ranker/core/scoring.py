"""Score and matched-range helpers shared by the matchers."""

from typing import List, Sequence

from ..models.results import Range


def bitap_score(
    pattern_length: int,
    errors: int = 0,
    current_location: int = 0,
    expected_location: int = 0,
    distance: int = 100
) -> float:
    """
    Score a candidate match: 0 is perfect, larger is worse.
    
    Args:
        pattern_length: Length of the pattern being matched
        errors: Number of errors in the match
        current_location: Where the candidate match starts
        expected_location: Where the match was expected
        distance: Tolerance radius around the expected location
        
    Returns:
        Accuracy plus proximity penalty
    """
    accuracy = errors / pattern_length
    proximity = abs(expected_location - current_location)
    
    if not distance:
        # Dodge divide by zero
        return 1.0 if proximity else accuracy
    
    return accuracy + proximity / distance


def matched_indices(match_mask: Sequence[bool], min_match_char_length: int = 1) -> List[Range]:
    """
    Collapse a per-character match mask into inclusive ranges.
    
    Args:
        match_mask: Truthy entries mark matched text positions
        min_match_char_length: Shortest run to report
        
    Returns:
        Ordered list of (start, end) pairs
    """
    ranges: List[Range] = []
    start = -1
    
    for i, matched in enumerate(match_mask):
        if matched and start == -1:
            start = i
        elif not matched and start != -1:
            if i - start >= min_match_char_length:
                ranges.append((start, i - 1))
            start = -1
    
    # Flush a run reaching the end of the mask
    end = len(match_mask)
    if start != -1 and end - start >= min_match_char_length:
        ranges.append((start, end - 1))
    
    return ranges
