import pytest

from services import fuzzy


class TestTrigrams:
    """Tests for trigram extraction."""

    def test_padding(self):
        """Text is padded with two leading spaces and one trailing space."""
        assert fuzzy.trigrams("abc") == ["  a", " ab", "abc", "bc "]

    def test_count_is_length_plus_one(self):
        assert len(fuzzy.trigrams("a")) == 2
        assert len(fuzzy.trigrams("")) == 1

    def test_multibyte_characters_are_single_units(self):
        assert fuzzy.trigrams("ĉĝ") == ["  ĉ", " ĉĝ", "ĉĝ "]


class TestSimilarity:
    """Tests for the trigram similarity score."""

    @pytest.mark.parametrize("text", [
        "kolbasobulko", "sandviĉo", "domo", "ŝatas", "mirinda estonto", "", "a", "ĉ", "ł",
    ])
    def test_identical_strings_score_one(self, text):
        assert fuzzy.similarity(text, text) == 1.0

    def test_disjoint_strings_score_zero(self):
        assert fuzzy.similarity("abc", "xyz") == 0.0
        assert fuzzy.similarity("abc", "def") == 0.0

    def test_multibyte_letters_do_not_match_ascii(self):
        assert fuzzy.similarity("cgs", "ĉĝŝ") == 0.0

    def test_case_insensitive(self):
        assert fuzzy.similarity("ALPHA", "alpha") == 1.0

    def test_asymmetric(self):
        """The score is normalised by the query length."""
        assert fuzzy.similarity("alp", "alpha") == pytest.approx(0.75)
        assert fuzzy.similarity("alpha", "alp") == pytest.approx(3 / 6)

    def test_repeated_candidate_trigrams_count_once(self):
        assert fuzzy.similarity("aa", "aaaaaa") <= 1.0

    @pytest.mark.parametrize("query,candidate", [
        ("bulko", "kolbasobulko"),
        ("aaaa", "a"),
        ("", "something"),
        ("x y z", "x"),
        ("duration", "03:15"),
    ])
    def test_score_in_unit_interval(self, query, candidate):
        assert 0.0 <= fuzzy.similarity(query, candidate) <= 1.0


class TestRanking:
    """Tests for rank, rank_sorted, best_n and filter_threshold."""

    WORDS = ["kolbasobulko", "sandviĉo", "kolbasobulkejo"]

    def test_rank_keeps_every_candidate_in_order(self):
        ranked = fuzzy.rank("bulko", self.WORDS)
        assert [word for word, _ in ranked] == self.WORDS

    def test_rank_sorted_is_descending(self):
        ranked = fuzzy.rank_sorted("bulko", self.WORDS)
        scores = [score for _, score in ranked]
        assert len(ranked) == len(self.WORDS)
        assert scores == sorted(scores, reverse=True)
        assert ranked[-1][0] == "sandviĉo"

    def test_ties_keep_input_order(self):
        ranked = fuzzy.rank_sorted("zzz", ["b", "a", "c"])
        assert [word for word, _ in ranked] == ["b", "a", "c"]

    def test_non_finite_scores_sort_as_zero(self):
        ranked = fuzzy.sort_ranked([("nan", float("nan")), ("half", 0.5), ("none", None)])
        assert ranked[0][0] == "half"
        assert [item for item, _ in ranked[1:]] == ["nan", "none"]

    @pytest.mark.parametrize("n", [0, 1, 2, 3, 10])
    def test_best_n_is_prefix_of_rank_sorted(self, n):
        expected = fuzzy.rank_sorted("bulko", self.WORDS)[:min(n, len(self.WORDS))]
        assert fuzzy.best_n("bulko", self.WORDS, n) == expected

    def test_filter_threshold(self):
        threshold = 0.5
        results = fuzzy.filter_threshold("bulko", self.WORDS, threshold)
        assert results
        assert all(score >= threshold for _, score in results)
        assert "sandviĉo" not in [word for word, _ in results]
