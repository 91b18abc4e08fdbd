"""Helix-style modal editing trainer: editing engine, challenges and scoring."""

from .challenges import (
    Category,
    Challenge,
    ChallengeCatalog,
    ChallengeNotFoundError,
    ChallengeResult,
    Difficulty,
    Keystroke,
)
from .config import EngineConfig, ScoringConfig, TrainerConfig, load_config
from .scoring import calculate_score, get_star_rating, validate_challenge
from .session import ChallengeSession, EngineView

__version__ = "0.1.0"

__all__ = [
    "Category",
    "Challenge",
    "ChallengeCatalog",
    "ChallengeNotFoundError",
    "ChallengeResult",
    "ChallengeSession",
    "Difficulty",
    "EngineConfig",
    "EngineView",
    "Keystroke",
    "ScoringConfig",
    "TrainerConfig",
    "calculate_score",
    "get_star_rating",
    "load_config",
    "validate_challenge",
    "__version__",
]
