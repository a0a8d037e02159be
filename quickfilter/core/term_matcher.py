"""Single-token matching with exact substring and fuzzy subsequence passes."""

import re
from typing import NamedTuple, Optional

from .normalizer import TextNormalizer


class TermMatch(NamedTuple):
    """Result of matching one token against a line."""
    
    score: int
    start: int
    end: int
    fuzzy: bool


def fuzzy_pattern(token: str) -> "re.Pattern[str]":
    """
    Build a pattern matching the characters of a token in order.
    
    Every character is escaped, and the gaps between characters are lazy so
    the match ends as early as possible from the leftmost start.
    
    Args:
        token: Search token
        
    Returns:
        Compiled pattern
    """
    return re.compile('.*?'.join(re.escape(char) for char in token), re.DOTALL)


class TermMatcher:
    """Matches one search token against search line text."""
    
    def __init__(
        self,
        token: str,
        fuzzy_enabled: bool = True,
        fuzzy_penalty: int = 0
    ) -> None:
        """
        Initialize the term matcher.
        
        Args:
            token: The (already case normalized) search token
            fuzzy_enabled: Whether to fall back to fuzzy matching
            fuzzy_penalty: Score added to every fuzzy match
        """
        self.token = token
        self.fuzzy_enabled = fuzzy_enabled
        self.fuzzy_penalty = fuzzy_penalty
        self._pattern = fuzzy_pattern(token) if fuzzy_enabled and token else None
    
    def match(self, text: str) -> Optional[TermMatch]:
        """
        Match the token against a line of text.
        
        Args:
            text: Search line text
            
        Returns:
            TermMatch with a score (lower is better), or None for no match
        """
        start = text.find(self.token)
        if start >= 0:
            return TermMatch(start, start, start + len(self.token), False)
        
        if self._pattern is None:
            return None
        
        found = self._pattern.search(text)
        if found is None:
            return None
        
        start, end = found.span()
        return TermMatch((end - start) + self.fuzzy_penalty, start, end, True)
    
    __call__ = match
    
    def __repr__(self) -> str:
        return f"TermMatcher({self.token!r}, fuzzy_enabled={self.fuzzy_enabled})"


def compile_term(
    token: str,
    fuzzy_enabled: bool = True,
    case_insensitive: bool = True,
    fuzzy_penalty: int = 0
) -> TermMatcher:
    """
    Compile a search token into a reusable matcher.
    
    The line text handed to the matcher must be normalized with the same
    case setting.
    """
    token = TextNormalizer(case_insensitive).fold(token)
    return TermMatcher(token, fuzzy_enabled, fuzzy_penalty)
