"""Windowed, append-only materialization of an ordered match list."""

import enum
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

import structlog

from ..models.response import MatchStatus

logger = structlog.get_logger(__name__)

Row = TypeVar("Row")


class PagerState(str, enum.Enum):
    """Lifecycle of a pager over one match list."""

    IDLE = "idle"
    PAGING = "paging"
    COMPLETE = "complete"


def _identity(position: int, candidate: Any) -> Any:
    return candidate


class ResultPager(Generic[Row]):
    """
    Reveals an ordered match list one page at a time.

    Rows are materialized only when revealed and are never changed or
    reordered afterwards; a new match list needs a new pager (or ``reset``).
    """

    def __init__(
        self,
        matches: Sequence[Any],
        page_size: int,
        initial_page_size: Optional[int] = None,
        total: Optional[int] = None,
        materialize: Optional[Callable[[int, Any], Row]] = None,
        search: Optional[str] = None
    ) -> None:
        """
        Initialize the pager and materialize the initial page.

        Args:
            matches: Ordered matching candidates
            page_size: Rows revealed by each load-more request
            initial_page_size: Rows revealed up front (defaults to page_size)
            total: Total candidate count for status (defaults to len(matches))
            materialize: Turns (position, candidate) into a display row
            search: The search that produced the matches, for status

        Raises:
            ValueError: If a page size is smaller than one
        """
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        if initial_page_size is not None and initial_page_size < 1:
            raise ValueError(
                f"initial_page_size must be at least 1, got {initial_page_size}"
            )

        self.page_size = page_size
        self.initial_page_size = initial_page_size or page_size
        self._materialize = materialize or _identity
        self._total = total
        self.reset(matches, search)

    def reset(self, matches: Sequence[Any], search: Optional[str] = None) -> List[Row]:
        """
        Start over with a new match list.

        Returns:
            The rows of the initial page
        """
        self._matches = matches
        self.search = search
        self._rows: List[Row] = []
        self._state = PagerState.IDLE
        return self._reveal(self.initial_page_size)

    def load_more(self) -> List[Row]:
        """
        Reveal the next page of matches.

        Returns:
            Only the newly revealed rows; empty once complete
        """
        if self.state is PagerState.COMPLETE:
            return []

        revealed = self._reveal(self.page_size)
        if self.state is not PagerState.COMPLETE:
            self._state = PagerState.PAGING

        logger.debug(
            "Loaded more rows",
            revealed=len(revealed),
            shown=self.shown_count,
            matched=len(self._matches),
        )
        return revealed

    def _reveal(self, count: int) -> List[Row]:
        start = len(self._rows)
        end = min(start + count, len(self._matches))
        revealed = [
            self._materialize(position, self._matches[position])
            for position in range(start, end)
        ]
        self._rows.extend(revealed)
        return revealed

    @property
    def state(self) -> PagerState:
        if len(self._rows) >= len(self._matches):
            return PagerState.COMPLETE
        return self._state

    @property
    def shown_count(self) -> int:
        return len(self._rows)

    @property
    def match_count(self) -> int:
        return len(self._matches)

    @property
    def total(self) -> int:
        return self._total if self._total is not None else len(self._matches)

    @property
    def remaining(self) -> int:
        return len(self._matches) - len(self._rows)

    @property
    def rows(self) -> List[Row]:
        """The materialized window, in match order."""
        return list(self._rows)

    def candidate_at(self, position: int) -> Optional[Any]:
        """
        Get the candidate behind a materialized row.

        Args:
            position: Row position within the window

        Returns:
            The candidate, or None when the position is not materialized
        """
        if 0 <= position < len(self._rows):
            return self._matches[position]
        return None

    def status(self) -> MatchStatus:
        """Counts for status display."""
        return MatchStatus(
            matched=len(self._matches),
            total=self.total,
            shown=len(self._rows),
            search=self.search or None,
        )

    def more_message(self) -> Optional[str]:
        """Notice for the rows not yet shown, or None when complete."""
        if self.remaining <= 0:
            return None
        return f"[..] ({self.remaining} more items not shown)"
