"""Text normalization utilities for consistent candidate and search processing."""

import re
from typing import Any, List, Sequence, Union


class TextNormalizer:
    """Handles text normalization for search lines and search strings."""
    
    def __init__(self, case_insensitive: bool = True) -> None:
        """
        Initialize the normalizer.
        
        Args:
            case_insensitive: Whether text is case folded before matching
        """
        self.case_insensitive = case_insensitive
        
        # Compile regex patterns for performance
        self.token_regex = re.compile(r'\S+')
    
    def columns(self, candidate: Union[str, Sequence[Any]]) -> List[str]:
        """
        Get the column strings of a candidate.
        
        Args:
            candidate: Either a single string or a sequence of column values
            
        Returns:
            List of column strings
        """
        if isinstance(candidate, str):
            return [candidate]
        try:
            return [str(column) for column in candidate]
        except TypeError:
            return [str(candidate)]
    
    def join(self, candidate: Union[str, Sequence[Any]]) -> str:
        """Join all columns of a candidate with single spaces, keeping case."""
        return ' '.join(self.columns(candidate))
    
    def fold(self, text: str) -> str:
        """
        Case fold text without changing its length.
        
        Every character folds the same way wherever it appears, and offsets
        computed on folded text must map 1:1 onto the original text, so
        characters whose lowercase form is longer are kept as-is.
        
        Args:
            text: Input text
            
        Returns:
            Folded text (unchanged when case sensitive)
        """
        if not text or not self.case_insensitive:
            return text or ""
        
        # str.lower() maps a word-final capital sigma to the final form
        if "\u03a3" not in text:
            lowered = text.lower()
            if len(lowered) == len(text):
                return lowered
        
        return ''.join(
            char.lower() if len(char.lower()) == 1 else char
            for char in text
        )
    
    def normalize(self, candidate: Union[str, Sequence[Any]]) -> str:
        """
        Build the searchable text of a candidate.
        
        Args:
            candidate: Either a single string or a sequence of column values
            
        Returns:
            Normalized search line text
        """
        return self.fold(self.join(candidate))
    
    def tokenize(self, search: str) -> List[str]:
        """
        Tokenize a search string into whitespace separated tokens.
        
        Args:
            search: Search string
            
        Returns:
            List of tokens, in order
        """
        if not search:
            return []
        
        return self.token_regex.findall(search)
