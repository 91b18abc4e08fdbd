"""Challenge validation, scoring and star rating.

All three functions are pure; the constants come from ``ScoringConfig``.
"""

from __future__ import annotations

import math
from typing import Optional

from helix_trainer.config import ScoringConfig

_DEFAULTS = ScoringConfig()


def normalize_text(text: str) -> str:
    return text.replace("\r\n", "\n").strip()


def validate_challenge(initial: str, target: str, current: str) -> bool:
    """True when ``current`` matches ``target`` up to line endings and outer whitespace.

    ``initial`` is accepted for symmetry with the challenge record and is not
    part of the comparison.
    """

    del initial
    return normalize_text(current) == normalize_text(target)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_score(
    keystrokes: int,
    optimal_keystrokes: int,
    hints_used: int,
    elapsed_ms: int,
    *,
    config: Optional[ScoringConfig] = None,
) -> int:
    cfg = config or _DEFAULTS
    extra_keys = max(0, keystrokes - optimal_keystrokes)
    overtime = max(0.0, elapsed_ms / 1000 - cfg.time_grace_seconds)
    raw = (
        cfg.base_score
        - cfg.keystroke_penalty * extra_keys
        - cfg.hint_penalty * hints_used
        - overtime
    )
    return max(0, _round_half_up(raw))


def get_star_rating(
    keystrokes: int,
    optimal_keystrokes: int,
    hints_used: int,
    *,
    config: Optional[ScoringConfig] = None,
) -> int:
    cfg = config or _DEFAULTS
    if hints_used > 0:
        return 1
    if keystrokes <= optimal_keystrokes:
        return 3
    if keystrokes <= optimal_keystrokes + cfg.par_tolerance:
        return 2
    return 1


__all__ = [
    "calculate_score",
    "get_star_rating",
    "normalize_text",
    "validate_challenge",
]
