"""Engine and scoring configuration loaded from ``HELIX_TRAINER_*`` variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

ENV_PREFIX = "HELIX_TRAINER_"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_int(name: str, fallback: int) -> int:
    raw = _env(name)
    if raw is None:
        return fallback
    try:
        return int(raw)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Knobs consumed by editing actions."""

    indent_unit: str = "    "

    def __post_init__(self) -> None:
        if not self.indent_unit or self.indent_unit.strip(" "):
            raise ValueError("indent_unit must be a non-empty run of spaces")


@dataclass(frozen=True, slots=True)
class ScoringConfig:
    """Constants of the challenge score and star rating."""

    base_score: int = 1000
    keystroke_penalty: int = 10
    hint_penalty: int = 100
    time_grace_seconds: int = 30
    par_tolerance: int = 3


@dataclass(frozen=True, slots=True)
class TrainerConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)


def load_config() -> TrainerConfig:
    """Build a ``TrainerConfig`` honoring environment overrides."""

    defaults = ScoringConfig()
    indent_width = max(1, _env_int("INDENT_WIDTH", len(EngineConfig().indent_unit)))
    scoring = ScoringConfig(
        base_score=_env_int("BASE_SCORE", defaults.base_score),
        keystroke_penalty=_env_int("KEYSTROKE_PENALTY", defaults.keystroke_penalty),
        hint_penalty=_env_int("HINT_PENALTY", defaults.hint_penalty),
        time_grace_seconds=_env_int(
            "TIME_GRACE_SECONDS", defaults.time_grace_seconds
        ),
        par_tolerance=_env_int("PAR_TOLERANCE", defaults.par_tolerance),
    )
    return TrainerConfig(
        engine=EngineConfig(indent_unit=" " * indent_width),
        scoring=scoring,
    )


__all__ = [
    "ENV_PREFIX",
    "EngineConfig",
    "ScoringConfig",
    "TrainerConfig",
    "load_config",
]
