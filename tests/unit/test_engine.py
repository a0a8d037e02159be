"""Unit tests for the search engine core functionality."""

import pytest
from quickfilter.core.engine import MatchResult, SearchEngine
from quickfilter.models.response import HighlightRange


class TestSearchEngine:
    """Test cases for the SearchEngine class."""

    @pytest.fixture
    def candidates(self):
        """Small candidate set used by the documented scenarios."""
        return ["alpha", "alphabet", "beta"]

    @pytest.fixture
    def engine(self, candidates):
        """Create a search engine instance for testing."""
        return SearchEngine(candidates)

    @pytest.fixture
    def paths(self):
        """Realistic file path candidates."""
        return [
            "README.md",
            "setup.py",
            "src/reader.py",
            "src/main.py",
            "docs/readme_old.txt",
            "tests/test_reader.py",
        ]

    def test_engine_initialization(self, engine):
        """Test search engine initialization."""
        assert engine.case_insensitive is True
        assert engine.fuzzy_enabled is True
        assert engine.candidate_count == 3
        assert engine.fuzzy_penalty == len("alphabet")
        assert engine.get_stats()["total_queries"] == 0

    @pytest.mark.parametrize("search", ["", "   ", "\t\n", None])
    def test_empty_search_returns_all_in_order(self, engine, candidates, search):
        """Test that an empty search returns every candidate unscored."""
        assert engine.match(search) == candidates
        assert all(result.score is None for result in engine.match_results(search))

    def test_prefix_match_prefers_shorter_line(self, engine):
        """Shorter lines win when token scores are equal."""
        assert engine.match("al") == ["alpha", "alphabet"]
        assert engine.match_results("al") == [MatchResult(0, 5), MatchResult(1, 8)]

    def test_match_requires_character(self, engine):
        """Only candidates containing every character of the token match."""
        assert engine.match("ab") == ["alphabet"]

    def test_no_match(self, engine):
        """Test search with no matches."""
        assert engine.match("xyz") == []

    def test_case_insensitive_search(self, engine):
        """Test case-insensitive search."""
        assert engine.match("AL") == engine.match("al")
        assert engine.match("Al") == ["alpha", "alphabet"]

    def test_case_sensitive_search(self, candidates):
        """Test that case sensitive engines respect case."""
        engine = SearchEngine(candidates + ["ALPHA"], case_insensitive=False)

        assert engine.match("AL") == ["ALPHA"]
        assert engine.match("al") == ["alpha", "alphabet"]

    def test_tokens_are_and_combined(self, engine):
        """Every token must match."""
        assert engine.match("al bet") == ["alphabet"]
        assert engine.match("bet al") == ["alphabet"]
        assert engine.match("al xyz") == []

    def test_fuzzy_fallback(self, engine):
        """Test fuzzy subsequence matching."""
        assert engine.match("apt") == ["alphabet"]

    def test_fuzzy_disabled(self, candidates):
        """Test exact-only searching."""
        engine = SearchEngine(candidates, fuzzy_enabled=False)

        assert engine.match("apt") == []
        assert engine.match("al") == ["alpha", "alphabet"]

    def test_exact_match_outranks_fuzzy_match(self):
        """Exact matches win over fuzzy matches of comparable lines."""
        engine = SearchEngine(["axxb", "xxab"])

        assert engine.match("ab") == ["xxab", "axxb"]

    def test_stable_order_for_equal_scores(self):
        """Ties keep construction order."""
        engine = SearchEngine(["ya", "xa", "za"])

        assert engine.match("a") == ["ya", "xa", "za"]

    def test_line_length_added_once(self):
        """The line length tie-break is added once, not per token."""
        engine = SearchEngine(["foo bar"])

        assert engine.match_results("foo bar") == [MatchResult(0, 0 + 4 + 7)]

    def test_multi_column_candidates(self):
        """Multi column candidates match against all columns."""
        volvo = ("Volvo", "Vehicle")
        dog = ["Dog", "Animal"]
        hell = ["Hell", "Other people"]
        engine = SearchEngine([volvo, dog, hell])

        assert engine.match("dog an") == [dog]
        assert engine.match("vehicle")[0] is volvo
        assert engine.match("people") == [hell]

    def test_non_string_columns(self):
        """Column values are converted to text."""
        engine = SearchEngine([("file.py", 42), ("other.py", 7)])

        assert engine.match("42") == [("file.py", 42)]

    def test_returns_original_candidate_objects(self):
        """Results are the supplied objects, not copies."""
        row = ["a", "b"]
        engine = SearchEngine([row])

        assert engine.match("a")[0] is row
        assert engine.match("")[0] is row

    def test_empty_candidate_set(self):
        """An empty candidate set yields empty results."""
        engine = SearchEngine([])

        assert engine.fuzzy_penalty == 0
        assert engine.match("a") == []
        assert engine.match("") == []

    def test_every_result_matches_every_token(self, paths):
        """Each result satisfies each token."""
        engine = SearchEngine(paths)
        search = "src rd"

        results = engine.match(search)

        assert results
        for path in results:
            assert len(engine.explain(search, path)) == 2

    def test_repeat_search_is_identical(self, paths):
        """Repeat searches return identical ordered output."""
        engine = SearchEngine(paths)

        first = engine.match_results("rea")
        second = engine.match_results("rea")

        assert first == second
        assert engine.get_stats()["cache_hits"] == 1

    def test_cache_shared_across_case(self, engine):
        """Folded searches share cache entries."""
        engine.match("al")
        engine.match("AL")

        assert engine.get_stats()["cache_hits"] == 1

    def test_prefix_pool_reuse(self, engine):
        """Appending a character scans the previous matching lines only."""
        engine.match("a")
        engine.match("al")
        engine.match("alp")

        stats = engine.get_stats()
        assert stats["full_scans"] == 1
        assert stats["pool_reuses"] == 2

    def test_no_match_results_are_cached(self, engine):
        """A repeated no-match search does not rescan."""
        engine.match("xyz")
        engine.match("xyz")

        stats = engine.get_stats()
        assert stats["cache_hits"] == 1
        assert stats["full_scans"] == 1

    @pytest.mark.parametrize("search", ["src/reader", "test rea", "rd py", "docs old"])
    def test_narrowing_is_monotonic(self, paths, search):
        """Appending a character never adds matches."""
        engine = SearchEngine(paths)

        for length in range(1, len(search)):
            shorter = set(engine.match(search[:length]))
            longer = set(engine.match(search[:length + 1]))
            assert longer <= shorter

    @pytest.mark.parametrize("typed", [
        ["r", "re", "rea", "re", "r", "rx", "r"],
        ["s", "sr", "src", "src ", "src m", "src ", "src r"],
        ["main", "mai", "ma", "m", ""],
        ["x", "xy", "a", "al"],
    ])
    def test_arbitrary_edits_match_fresh_engine(self, paths, typed):
        """Cached results equal the results of an engine without a cache."""
        engine = SearchEngine(paths)

        for search in typed:
            assert engine.match(search) == SearchEngine(paths).match(search)

    @pytest.mark.parametrize("search", [
        "(", ")", "[a-", "\\", "*", "?", ".*", "$^", "%", "a|b", "{2}", "\x00", "é", "☃ x",
    ])
    def test_never_raises(self, paths, search):
        """Any search string is a valid search."""
        engine = SearchEngine(paths)

        assert isinstance(engine.match(search), list)
        assert isinstance(engine.explain(search, "src/[reader].py"), list)

    def test_explain_exact_match(self, engine):
        """Exact matches produce one range covering the substring."""
        explanations = engine.explain("bet", "Alphabet")

        assert len(explanations) == 1
        explanation = explanations[0]
        assert explanation.fuzzy is False
        assert (explanation.start_pos, explanation.end_pos) == (5, 8)
        assert explanation.score == 5
        assert explanation.ranges == [HighlightRange(start=5, length=3)]

    def test_explain_fuzzy_match(self, engine):
        """Fuzzy matches produce one range per run of matched characters."""
        explanation = engine.explain("alet", "alphabet")[0]

        assert explanation.fuzzy is True
        assert (explanation.start_pos, explanation.end_pos) == (0, 8)
        assert explanation.score == 8 + engine.fuzzy_penalty
        assert explanation.ranges == [
            HighlightRange(start=0, length=2),
            HighlightRange(start=6, length=2),
        ]

    def test_explain_single_character_runs(self, engine):
        """Gaps between every character give single character ranges."""
        explanation = engine.explain("apt", "alphabet")[0]

        assert [(r.start, r.length) for r in explanation.ranges] == [(0, 1), (2, 1), (7, 1)]

    @pytest.mark.parametrize("search,text", [
        ("alet", "ALPHABET"),
        ("srdpy", "src/reader.py"),
        ("rdm", "docs/readme_old.txt"),
        ("main", "src/main.py"),
    ])
    def test_explain_ranges_reconstruct_token(self, engine, search, text):
        """Highlighted characters read left to right spell the token."""
        explanation = engine.explain(search, text)[0]

        highlighted = "".join(text[r.start:r.end] for r in explanation.ranges)
        assert highlighted.lower() == search

    def test_explain_multiple_tokens(self, engine):
        """One explanation per token, in token order."""
        explanations = engine.explain("bet al", "alphabet")

        assert [e.token for e in explanations] == ["bet", "al"]
        assert [e.start_pos for e in explanations] == [5, 0]

    def test_explain_skips_unmatched_tokens(self, engine):
        """Tokens that do not match the text are left out."""
        explanations = engine.explain("al zz", "alpha")

        assert [e.token for e in explanations] == ["al"]

    def test_explain_empty_search(self, engine):
        """An empty search explains nothing."""
        assert engine.explain("", "alpha") == []
        assert engine.explain("  ", "alpha") == []

    def test_explain_offsets_follow_literal_text(self):
        """Offsets index the displayed text even when folding changes length."""
        engine = SearchEngine(["İstanbul"])

        assert engine.match("stan") == ["İstanbul"]
        explanation = engine.explain("stan", "İstanbul")[0]
        assert explanation.ranges == [HighlightRange(start=1, length=4)]

    def test_sigma_folds_the_same_everywhere(self):
        """A capital sigma folds identically at the end of a search and inside a line."""
        engine = SearchEngine(["ΟΔΟΣ", "ΑΣΑ"])

        assert engine.match("σ") == ["ΑΣΑ", "ΟΔΟΣ"]
        assert engine.match("ΟΣ") == ["ΟΔΟΣ"]
        assert engine.match("ΑΣ") == ["ΑΣΑ"]
        assert engine.match("ΑΣΑ") == ["ΑΣΑ"]
        assert engine.explain("ΑΣ", "ΑΣΑ")[0].ranges == [HighlightRange(start=0, length=2)]

    def test_narrowing_is_monotonic_with_sigma(self):
        """Appending a character never adds matches for Greek text."""
        engine = SearchEngine(["ΑΣΑ", "ΣΟΦΟΣ", "ΟΔΟΣ ΑΣ"])
        search = "ΑΣΑ"

        for length in range(1, len(search)):
            shorter = set(engine.match(search[:length]))
            longer = set(engine.match(search[:length + 1]))
            assert longer <= shorter
            assert shorter == set(SearchEngine(["ΑΣΑ", "ΣΟΦΟΣ", "ΟΔΟΣ ΑΣ"]).match(search[:length]))

    def test_get_stats(self, engine):
        """Test statistics reporting."""
        engine.match("")
        engine.match("al")
        engine.match("al")

        stats = engine.get_stats()
        assert stats["total_queries"] == 3
        assert stats["empty_queries"] == 1
        assert stats["cache_hits"] == 1
        assert stats["cache_hit_rate"] == pytest.approx(1 / 3)
        assert stats["total_candidates"] == 3
        assert stats["cached_searches"] == 1
        assert stats["cached_pools"] == 1
        assert stats["average_execution_time_ms"] >= 0.0
