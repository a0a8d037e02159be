"""Interactive filter session tying the search engine to a result pager."""

from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import structlog

from ..config import Settings, get_settings
from ..models.request import FilterOptions
from ..models.response import ListRow, MatchStatus
from .commands import Command, DirectCommand, as_command, invoke
from .engine import MatchResult, SearchEngine
from .pager import ResultPager

logger = structlog.get_logger(__name__)


def _backspace(session: "FilterSession") -> None:
    session.backspace()


def _clear_search(session: "FilterSession") -> None:
    session.clear_search()


def _load_more(session: "FilterSession") -> None:
    session.load_more()


DEFAULT_KEYS: Dict[str, Command] = {
    "\b": DirectCommand(_backspace),
    "c\b": DirectCommand(_clear_search),
    "a\b": DirectCommand(_clear_search),
    "m\b": DirectCommand(_clear_search),
    "down": DirectCommand(_load_more),
}


class FilterSession:
    """Holds the current search of a list and the rows shown for it."""

    def __init__(
        self,
        candidates: Sequence[Any],
        case_insensitive: bool = True,
        fuzzy: bool = True,
        page_size: int = 50,
        initial_page_size: Optional[int] = None,
        highlight: bool = True,
        title: str = ""
    ) -> None:
        """
        Initialize the session with an empty search.

        Args:
            candidates: Strings or sequences of column strings
            case_insensitive: Whether searches ignore case
            fuzzy: Whether fuzzy matching is used when exact fails
            page_size: Rows revealed by each load-more request
            initial_page_size: Rows shown after each search change
            highlight: Whether rows carry highlight explanations
            title: List title used in status text
        """
        self.engine = SearchEngine(candidates, case_insensitive, fuzzy)
        self.highlight = highlight
        self.title = title
        self.keys: Dict[str, Command] = dict(DEFAULT_KEYS)
        self._search = ""
        self._results = self.engine.match_results("")
        self.pager: ResultPager[ListRow] = ResultPager(
            self._candidates_for(self._results),
            page_size=page_size,
            initial_page_size=initial_page_size,
            total=self.engine.candidate_count,
            materialize=self._make_row,
        )

    @classmethod
    def from_options(
        cls,
        candidates: Sequence[Any],
        options: FilterOptions,
        title: str = ""
    ) -> "FilterSession":
        """Create a session from validated options."""
        return cls(
            candidates,
            case_insensitive=options.case_insensitive,
            fuzzy=options.fuzzy,
            page_size=options.page_size,
            initial_page_size=options.initial_page_size,
            highlight=options.highlight,
            title=title,
        )

    @classmethod
    def from_settings(
        cls,
        candidates: Sequence[Any],
        settings: Optional[Settings] = None,
        title: str = ""
    ) -> "FilterSession":
        """Create a session from application settings."""
        options = FilterOptions.from_settings(settings or get_settings())
        return cls.from_options(candidates, options, title=title)

    @property
    def search(self) -> str:
        return self._search

    def set_search(self, search: Optional[str]) -> List[ListRow]:
        """
        Replace the current search and show the first page of matches.

        Returns:
            The rows of the initial page
        """
        self._search = search or ""
        self._results = self.engine.match_results(self._search)
        matches = self._candidates_for(self._results)
        rows = self.pager.reset(matches, self._search)
        logger.debug(
            "Search changed",
            search=self._search,
            matched=len(matches),
            shown=len(rows),
        )
        return rows

    def append(self, text: str) -> List[ListRow]:
        """Extend the search with typed text."""
        return self.set_search(self._search + text)

    def backspace(self) -> List[ListRow]:
        """Drop the last search character; a no-op on an empty search."""
        if not self._search:
            return self.pager.rows
        return self.set_search(self._search[:-1])

    def clear_search(self) -> List[ListRow]:
        return self.set_search("")

    def load_more(self) -> List[ListRow]:
        """Reveal the next page; returns only the new rows."""
        return self.pager.load_more()

    @property
    def rows(self) -> List[ListRow]:
        return self.pager.rows

    def selection(self, position: int) -> Optional[Any]:
        """The candidate shown at a row position, if materialized."""
        return self.pager.candidate_at(position)

    def status(self) -> MatchStatus:
        return self.pager.status()

    def status_text(self) -> str:
        return self.status().describe(self.title)

    def bind(self, key: str, command: Union[Command, Callable[..., Any]]) -> None:
        """Bind a key to a command; plain callables receive the session."""
        self.keys[key] = as_command(command)

    def handle_key(self, key: str) -> bool:
        """
        Run the command bound to a key.

        Returns:
            True if a command was bound to the key
        """
        command = self.keys.get(key)
        if command is None:
            return False
        invoke(command, self)
        return True

    def _make_row(self, position: int, candidate: Any) -> ListRow:
        text = self.engine.normalizer.join(candidate)
        explanations = (
            self.engine.explain(self._search, text)
            if self.highlight and self._search.strip()
            else []
        )
        return ListRow(
            position=position,
            index=self._results[position].index,
            candidate=candidate,
            text=text,
            explanations=explanations,
        )

    def _candidates_for(self, results: List[MatchResult]) -> List[Any]:
        candidates = self.engine.candidates
        return [candidates[result.index] for result in results]
