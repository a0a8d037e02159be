"""Main search engine implementation."""

import time
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

import structlog

from ..models.response import Explanation, HighlightRange
from .normalizer import TextNormalizer
from .term_matcher import TermMatch, TermMatcher, compile_term

logger = structlog.get_logger(__name__)


class SearchLine(NamedTuple):
    """Normalized searchable text of one candidate."""

    text: str
    index: int


class MatchResult(NamedTuple):
    """A matching candidate index with its aggregate score."""

    index: int
    score: Optional[int]


class SearchEngine:
    """Incremental multi-token search engine over an immutable candidate set."""

    def __init__(
        self,
        candidates: Sequence[Any],
        case_insensitive: bool = True,
        fuzzy_enabled: bool = True
    ) -> None:
        """
        Initialize the search engine and index the candidates.

        Args:
            candidates: Strings or sequences of column strings
            case_insensitive: Whether searches ignore case
            fuzzy_enabled: Whether fuzzy matching is used when exact fails
        """
        self.case_insensitive = case_insensitive
        self.fuzzy_enabled = fuzzy_enabled
        self.normalizer = TextNormalizer(case_insensitive)

        self._candidates: Tuple[Any, ...] = tuple(candidates)
        self._lines: Tuple[SearchLine, ...] = tuple(
            SearchLine(self.normalizer.normalize(candidate), index)
            for index, candidate in enumerate(self._candidates)
        )
        self._fuzzy_penalty = max((len(line.text) for line in self._lines), default=0)

        # search string -> ordered results / matching lines
        self._match_cache: Dict[str, Tuple[MatchResult, ...]] = {}
        self._line_cache: Dict[str, Tuple[SearchLine, ...]] = {}

        # Performance tracking
        self._stats = self._empty_stats()

        logger.debug(
            "Search engine indexed candidates",
            total_candidates=len(self._candidates),
            fuzzy_penalty=self._fuzzy_penalty,
            case_insensitive=case_insensitive,
            fuzzy_enabled=fuzzy_enabled,
        )

    @property
    def candidates(self) -> Tuple[Any, ...]:
        """The candidates, in construction order."""
        return self._candidates

    @property
    def candidate_count(self) -> int:
        return len(self._candidates)

    @property
    def fuzzy_penalty(self) -> int:
        """Score added to fuzzy matches: the longest search line length."""
        return self._fuzzy_penalty

    def match(self, search: Optional[str]) -> List[Any]:
        """
        Match a search string against the candidates.

        Args:
            search: The search string, one or more whitespace separated tokens

        Returns:
            Matching candidates, best first. An empty search returns every
            candidate in construction order.
        """
        candidates = self._candidates
        return [candidates[result.index] for result in self.match_results(search)]

    def match_results(self, search: Optional[str]) -> List[MatchResult]:
        """
        Match a search string, returning candidate indexes and scores.

        Args:
            search: The search string

        Returns:
            Ordered list of MatchResult; scores are None for an empty search
        """
        start_time = time.time()
        self._stats["total_queries"] += 1

        if not search or not search.strip():
            self._stats["empty_queries"] += 1
            return [MatchResult(line.index, None) for line in self._lines]

        search = self.normalizer.fold(search)

        cached = self._match_cache.get(search)
        if cached is not None:
            self._stats["cache_hits"] += 1
            logger.debug("Match cache hit", search=search, matches=len(cached))
            return list(cached)

        pool = self._line_cache.get(search[:-1])
        if pool is None:
            pool = self._lines
            self._stats["full_scans"] += 1
        else:
            self._stats["pool_reuses"] += 1

        matchers = self._matchers_for_search(search)
        matches: List[MatchResult] = []
        matching_lines: List[SearchLine] = []

        for line in pool:
            score = self._match_score(line.text, matchers)
            if score is not None:
                matches.append(MatchResult(line.index, score))
                matching_lines.append(line)

        # Stable: equal scores keep construction order
        matches.sort(key=lambda result: result.score)

        self._line_cache[search] = tuple(matching_lines)
        self._match_cache[search] = tuple(matches)

        execution_time = (time.time() - start_time) * 1000
        self._stats["total_execution_time"] += execution_time

        logger.debug(
            "Scanned search lines",
            search=search,
            scanned=len(pool),
            matches=len(matches),
            execution_time_ms=round(execution_time, 3),
        )
        return matches

    def explain(self, search: Optional[str], text: str) -> List[Explanation]:
        """
        Explain how a search matches a line of displayed text.

        Args:
            search: The search string
            text: The literal text of a rendered row

        Returns:
            One Explanation per matching token, in token order
        """
        if not search or not text:
            return []

        folded = self.normalizer.fold(text)
        explanations = []

        for matcher in self._matchers_for_search(self.normalizer.fold(search)):
            term_match = matcher.match(folded)
            if term_match is None:
                continue

            explanations.append(Explanation(
                token=matcher.token,
                score=term_match.score,
                start_pos=term_match.start,
                end_pos=term_match.end,
                fuzzy=term_match.fuzzy,
                ranges=self._highlight_ranges(matcher.token, folded, term_match),
            ))

        return explanations

    def _matchers_for_search(self, search: str) -> List[TermMatcher]:
        """Compile one matcher per token of an already folded search."""
        return [
            compile_term(
                token,
                fuzzy_enabled=self.fuzzy_enabled,
                case_insensitive=self.case_insensitive,
                fuzzy_penalty=self._fuzzy_penalty,
            )
            for token in self.normalizer.tokenize(search)
        ]

    @staticmethod
    def _match_score(text: str, matchers: List[TermMatcher]) -> Optional[int]:
        """
        Apply every matcher to a line.

        Returns:
            Aggregate score if all tokens match, None otherwise
        """
        score = 0
        for matcher in matchers:
            term_match = matcher.match(text)
            if term_match is None:
                return None
            score += term_match.score
        return score + len(text)

    @staticmethod
    def _highlight_ranges(
        token: str,
        text: str,
        term_match: TermMatch
    ) -> List[HighlightRange]:
        """
        Split a matched span into runs of matched characters.

        Args:
            token: The folded token
            text: The folded text the token matched
            term_match: Where the token matched

        Returns:
            Ranges covering only the matched characters
        """
        if not term_match.fuzzy:
            return [HighlightRange(start=term_match.start, length=len(token))]

        ranges = []
        run_start = None
        position = 0

        for offset in range(term_match.start, term_match.end):
            if position < len(token) and text[offset] == token[position]:
                if run_start is None:
                    run_start = offset
                position += 1
            elif run_start is not None:
                ranges.append(HighlightRange(start=run_start, length=offset - run_start))
                run_start = None

        if run_start is not None:
            ranges.append(HighlightRange(start=run_start, length=term_match.end - run_start))

        return ranges

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_queries": 0,
            "empty_queries": 0,
            "cache_hits": 0,
            "pool_reuses": 0,
            "full_scans": 0,
            "total_execution_time": 0.0,
        }

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        stats = self._stats.copy()

        scans = stats["pool_reuses"] + stats["full_scans"]
        if stats["total_queries"] > 0:
            stats["cache_hit_rate"] = stats["cache_hits"] / stats["total_queries"]
        else:
            stats["cache_hit_rate"] = 0.0
        stats["average_execution_time_ms"] = (
            stats["total_execution_time"] / scans if scans > 0 else 0.0
        )

        stats["total_candidates"] = len(self._candidates)
        stats["cached_searches"] = len(self._match_cache)
        stats["cached_pools"] = len(self._line_cache)

        return stats
