"""Per-character position masks for the Bitap algorithm."""

from typing import Dict


def pattern_alphabet(pattern: str) -> Dict[str, int]:
    """
    Build the Bitap alphabet of a pattern.
    
    Bit ``len(pattern) - 1 - i`` of a character's mask is set when the
    character occurs at position ``i`` of the pattern.
    
    Args:
        pattern: Normalized pattern
        
    Returns:
        Mapping of each distinct character to its position mask
    """
    mask: Dict[str, int] = {}
    length = len(pattern)
    
    for i, char in enumerate(pattern):
        mask[char] = mask.get(char, 0) | (1 << (length - i - 1))
    
    return mask
