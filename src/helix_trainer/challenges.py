"""Challenge records and the read-only catalog they are served from."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Tuple


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Category(str, Enum):
    MOVEMENT = "movement"
    SELECTION = "selection"
    CHANGE = "change"
    SURROUND = "surround"
    MULTICURSOR = "multicursor"


@dataclass(frozen=True, slots=True)
class Challenge:
    """One exercise: turn ``initial`` into ``target`` in as few keys as possible."""

    id: str
    initial: str
    target: str
    optimal_keystrokes: int
    name: str = ""
    description: str = ""
    hints: Tuple[str, ...] = ()
    difficulty: Difficulty = Difficulty.EASY
    category: Category = Category.MOVEMENT

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("challenge id cannot be empty")
        if self.optimal_keystrokes < 0:
            raise ValueError("optimal_keystrokes cannot be negative")
        object.__setattr__(self, "hints", tuple(self.hints))
        object.__setattr__(self, "difficulty", Difficulty(self.difficulty))
        object.__setattr__(self, "category", Category(self.category))


@dataclass(frozen=True, slots=True)
class Keystroke:
    key: str
    timestamp: int


@dataclass(frozen=True, slots=True)
class ChallengeResult:
    """Outcome recorded the first time the buffer matches the target."""

    completed: bool
    keystrokes: int
    optimal_keystrokes: int
    elapsed_ms: int
    hints_used: int


class ChallengeNotFoundError(KeyError):
    """Raised when a catalog lookup names an unknown challenge id."""

    def __init__(self, challenge_id: str) -> None:
        super().__init__(f"Challenge '{challenge_id}' not found")
        self.challenge_id = challenge_id


class ChallengeStore(Protocol):
    """Read-only source of challenge records."""

    def get(self, challenge_id: str) -> Challenge:
        ...

    def __iter__(self) -> Iterator[Challenge]:
        ...


class ChallengeCatalog:
    """In-memory ``ChallengeStore`` keeping challenges in insertion order."""

    def __init__(self, challenges: Iterable[Challenge] = ()) -> None:
        self._challenges: Dict[str, Challenge] = {}
        for challenge in challenges:
            if challenge.id in self._challenges:
                raise ValueError(f"Challenge '{challenge.id}' already registered")
            self._challenges[challenge.id] = challenge

    def __iter__(self) -> Iterator[Challenge]:
        return iter(self._challenges.values())

    def __len__(self) -> int:
        return len(self._challenges)

    def __contains__(self, challenge_id: object) -> bool:
        return challenge_id in self._challenges

    def get(self, challenge_id: str) -> Challenge:
        try:
            return self._challenges[challenge_id]
        except KeyError as exc:
            raise ChallengeNotFoundError(challenge_id) from exc

    def find(self, challenge_id: str) -> Optional[Challenge]:
        return self._challenges.get(challenge_id)

    def by_category(self, category: Category | str) -> List[Challenge]:
        wanted = Category(category)
        return [c for c in self._challenges.values() if c.category is wanted]

    @staticmethod
    def categories() -> Tuple[Category, ...]:
        return tuple(Category)


__all__ = [
    "Category",
    "Challenge",
    "ChallengeCatalog",
    "ChallengeNotFoundError",
    "ChallengeResult",
    "ChallengeStore",
    "Difficulty",
    "Keystroke",
]
