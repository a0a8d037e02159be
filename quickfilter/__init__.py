"""
quickfilter - Incremental multi-token filtering for interactive lists.

This package ranks a fixed set of single or multi-column rows against a
search string typed one keystroke at a time, combining exact and fuzzy
matching, reusing earlier results while the search narrows, and revealing
the ranked rows a page at a time with highlight information.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .core.pager import PagerState, ResultPager
from .core.session import FilterSession
from .models.response import Explanation, HighlightRange, ListRow, MatchStatus

__all__ = [
    "SearchEngine",
    "ResultPager",
    "PagerState",
    "FilterSession",
    "Explanation",
    "HighlightRange",
    "ListRow",
    "MatchStatus",
]
