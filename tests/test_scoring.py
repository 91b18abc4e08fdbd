from __future__ import annotations

import pytest

from helix_trainer.config import ScoringConfig
from helix_trainer.scoring import (
    calculate_score,
    get_star_rating,
    normalize_text,
    validate_challenge,
)


def test_normalize_text_strips_and_unifies_line_endings() -> None:
    assert normalize_text("  a\r\nb \n") == "a\nb"


def test_validate_ignores_outer_whitespace_and_crlf() -> None:
    assert validate_challenge("x", "abc", "abc\r\n  ") is True
    assert validate_challenge("x", "a\nb", "a\r\nb") is True


def test_validate_target_against_itself() -> None:
    for target in ("", "abc", "  indented\nlines  ", "a\r\nb"):
        assert validate_challenge("initial", target, target) is True


def test_validate_detects_inner_differences() -> None:
    assert validate_challenge("x", "a b", "a  b") is False
    assert validate_challenge("x", "    print(x)", "print(x)") is True
    assert validate_challenge("x", "a\n    b", "a\nb") is False


def test_validate_ignores_initial() -> None:
    assert validate_challenge("abc", "abc", "abc") is True
    assert validate_challenge("anything", "target", "target") is True


def test_perfect_run_scores_base() -> None:
    assert calculate_score(8, 8, 0, 10_000) == 1000
    assert calculate_score(5, 8, 0, 0) == 1000


def test_score_penalties() -> None:
    assert calculate_score(12, 8, 0, 0) == 960
    assert calculate_score(8, 8, 2, 0) == 800
    assert calculate_score(8, 8, 0, 40_000) == 990


def test_score_rounds_half_up() -> None:
    assert calculate_score(8, 8, 0, 30_500) == 1000
    assert calculate_score(8, 8, 0, 31_500) == 999
    assert calculate_score(8, 8, 0, 30_400) == 1000
    assert calculate_score(8, 8, 0, 30_600) == 999


def test_score_never_negative() -> None:
    assert calculate_score(500, 1, 10, 10_000_000) == 0


@pytest.mark.parametrize("elapsed_ms", [0, 29_000, 45_500, 600_000])
def test_score_monotonic_in_keystrokes_and_hints(elapsed_ms: int) -> None:
    scores = [calculate_score(keys, 10, 0, elapsed_ms) for keys in range(0, 150)]
    assert all(a >= b for a, b in zip(scores, scores[1:]))

    by_hints = [calculate_score(12, 10, hints, elapsed_ms) for hints in range(0, 15)]
    assert all(a >= b for a, b in zip(by_hints, by_hints[1:]))
    assert min(scores + by_hints) >= 0


def test_score_respects_config() -> None:
    config = ScoringConfig(base_score=500, keystroke_penalty=1, hint_penalty=50)

    assert calculate_score(10, 8, 1, 0, config=config) == 448


def test_star_rating() -> None:
    assert get_star_rating(8, 8, 0) == 3
    assert get_star_rating(5, 8, 0) == 3
    assert get_star_rating(9, 8, 0) == 2
    assert get_star_rating(11, 8, 0) == 2
    assert get_star_rating(12, 8, 0) == 1
    assert get_star_rating(8, 8, 1) == 1


def test_star_rating_tolerance_from_config() -> None:
    config = ScoringConfig(par_tolerance=0)

    assert get_star_rating(9, 8, 0, config=config) == 1
