"""Text normalization shared by the matchers and the engine."""

from typing import List, Pattern, Sequence


class TextNormalizer:
    """Applies one case policy and splits text into tokens."""
    
    def __init__(self, case_sensitive: bool = False) -> None:
        """
        Initialize the normalizer.
        
        Args:
            case_sensitive: Keep text as-is instead of lower-casing it
        """
        self.case_sensitive = case_sensitive
    
    def fold(self, text: str) -> str:
        """
        Apply the case policy to a text.
        
        Args:
            text: Input text
            
        Returns:
            The text, lower-cased unless case sensitive
        """
        if self.case_sensitive:
            return text
        return text.lower()
    
    @staticmethod
    def tokenize(text: str, separator: Pattern) -> List[str]:
        """
        Split text into tokens.
        
        Empty tokens produced by leading or trailing separators are kept, so
        the number of tokens matches what a plain split returns.
        
        Args:
            text: Input text
            separator: Compiled separator regex
            
        Returns:
            List of tokens
        """
        return separator.split(text)
    
    @staticmethod
    def average(values: Sequence[float]) -> float:
        """Arithmetic mean, or -1 for an empty sequence."""
        if not values:
            return -1
        return sum(values) / len(values)
