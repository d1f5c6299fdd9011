"""Tests for the prefix-walk fuzzy matcher."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from commands.fuzzy import best_match, score, unique_best_match


@pytest.mark.parametrize("name", ["", "a", "mute", "jinyan", "Mute"])
def test_identical_strings_score_one(name: str) -> None:
    assert score(name, name) == 1.0


@pytest.mark.parametrize(("candidate", "query"), [("mu", "mute"), ("", "a"), ("abc", "abcd")])
def test_query_longer_than_candidate_scores_zero(candidate: str, query: str) -> None:
    assert score(candidate, query) == 0.0


def test_one_char_short_query_is_penalized_for_the_missing_position() -> None:
    # m,u,t match (3), position 3 is past the query (2): 2 / 4
    assert score("mute", "mut") == 0.5


def test_two_chars_short_query_scores_zero() -> None:
    assert score("mute", "mu") == 0.0


def test_much_shorter_query_scores_negative() -> None:
    assert score("mute", "m") == -0.5
    assert score("mute", "") == -1.0


def test_mismatch_on_first_char_scores_zero() -> None:
    assert score("mute", "xute") == 0.0


def test_partial_prefix_ratio() -> None:
    assert score("abc", "ab") == pytest.approx(1 / 3)
    assert score("abcdef", "abcde") == pytest.approx(4 / 6)


def test_quirk_last_char_mismatch_counts_as_perfect() -> None:
    # A run ending one short of the candidate's length is treated as exact.
    assert score("mute", "mutx") == 1.0
    assert score("a", "b") == 1.0


def test_best_match_prefers_highest_score() -> None:
    assert best_match(["mute", "mut"], "mu") == "mut"


def test_best_match_exact_index_wins_immediately() -> None:
    # "muta" would also score 1.0 but the exact one short-circuits
    assert best_match(["muta", "mute"], "mute") == "mute"


def test_best_match_ties_keep_first_seen() -> None:
    assert best_match(["abcx", "abcy"], "abc") == "abcx"


def test_best_match_ignores_non_positive_scores() -> None:
    assert best_match(["mute"], "m") is None
    assert best_match(["xyz"], "abc") is None


def test_best_match_empty_pool() -> None:
    assert best_match([], "mute") is None
    assert unique_best_match([], "mute") is None


def test_best_match_uses_index() -> None:
    members = [SimpleNamespace(card="alice"), SimpleNamespace(card="bob")]
    assert best_match(members, "bo", index=lambda m: m.card) is members[1]
    assert best_match(members, "zz", index=lambda m: m.card) is None


def test_unique_best_match_returns_strictly_better_candidate() -> None:
    assert unique_best_match(["mute", "mut"], "mu") == "mut"


def test_unique_best_match_rejects_several_perfect_scores() -> None:
    assert unique_best_match(["mute", "muta"], "mutx") is None


def test_unique_best_match_has_no_exact_shortcut() -> None:
    # The exact "mute" collides with the lenient perfect score of "muta"
    assert unique_best_match(["mute", "muta"], "mute") is None
    assert unique_best_match(["mute", "jinyan"], "mute") == "mute"


def test_unique_best_match_keeps_first_on_imperfect_tie() -> None:
    assert unique_best_match(["abcx", "abcy"], "abc") == "abcx"
