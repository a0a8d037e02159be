"""Core search, paging and session functionality."""

from .engine import MatchResult, SearchEngine, SearchLine
from .term_matcher import TermMatch, TermMatcher, compile_term
from .normalizer import TextNormalizer
from .pager import PagerState, ResultPager
from .commands import BoundCommand, Command, DirectCommand, invoke
from .session import FilterSession

__all__ = [
    "MatchResult",
    "SearchEngine",
    "SearchLine",
    "TermMatch",
    "TermMatcher",
    "compile_term",
    "TextNormalizer",
    "PagerState",
    "ResultPager",
    "BoundCommand",
    "Command",
    "DirectCommand",
    "invoke",
    "FilterSession",
]
