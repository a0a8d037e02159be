"""Data models for the quickfilter package."""

from .response import (
    HighlightRange,
    Explanation,
    ListRow,
    MatchStatus,
)
from .request import FilterOptions

__all__ = [
    "HighlightRange",
    "Explanation",
    "ListRow",
    "MatchStatus",
    "FilterOptions",
]
