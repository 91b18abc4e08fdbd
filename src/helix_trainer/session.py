"""Per-challenge session: one engine, its keystroke log, hints and result."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

from helix_trainer.buffer import Buffer, Position, Selection
from helix_trainer.challenges import Challenge, ChallengeResult, Keystroke
from helix_trainer.config import TrainerConfig
from helix_trainer.modes import EditorMode, KeyInput, ModeResult, mode_label
from helix_trainer.modes.mode_manager import ModeManager, create_default_manager
from helix_trainer.runtime import telemetry
from helix_trainer.scoring import calculate_score, get_star_rating, validate_challenge

Clock = Callable[[], int]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class EngineView:
    """Read-only snapshot handed to the presentation layer after each key."""

    text: str
    cursor: Position
    selections: Tuple[Selection, ...]
    mode: EditorMode
    mode_label: str
    pending: str
    registers: Mapping[str, str]
    keystrokes: int
    hints: Tuple[str, ...]
    result: Optional[ChallengeResult]


class ChallengeSession:
    """Owns one editing engine for the lifetime of a loaded challenge.

    Every key event is counted, dispatched to the mode manager, and, when it
    changed the text, checked against the target. The first match produces
    the ``ChallengeResult``; later keys never overwrite it.
    """

    def __init__(
        self,
        *,
        config: Optional[TrainerConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or TrainerConfig()
        self._clock = clock or _now_ms
        self.buffer = Buffer(name="challenge")
        self.manager: ModeManager = create_default_manager(
            self.buffer, self.config.engine
        )
        self.logger = telemetry.get_logger("helix_trainer.session")
        self._challenge: Optional[Challenge] = None
        self._keystrokes: List[Keystroke] = []
        self._started_at = 0
        self._hints_used = 0
        self._result: Optional[ChallengeResult] = None

    @property
    def challenge(self) -> Optional[Challenge]:
        return self._challenge

    @property
    def keystrokes(self) -> Sequence[Keystroke]:
        return tuple(self._keystrokes)

    @property
    def hints_used(self) -> int:
        return self._hints_used

    @property
    def result(self) -> Optional[ChallengeResult]:
        return self._result

    def load(self, challenge: Challenge, *, started_at: Optional[int] = None) -> None:
        """Start ``challenge`` from its initial text with zeroed counters."""

        self._challenge = challenge
        self.buffer.load(challenge.initial)
        self.manager.reset()
        self._keystrokes.clear()
        self._hints_used = 0
        self._result = None
        self._started_at = self._clock() if started_at is None else started_at
        telemetry.record_event(
            "challenge.load",
            data={"challenge": challenge.id, "category": challenge.category.value},
            logger_name="helix_trainer.session",
        )

    def reset(self, *, started_at: Optional[int] = None) -> None:
        self.load(self._require_challenge(), started_at=started_at)

    def handle_key(
        self,
        key: str,
        timestamp: Optional[int] = None,
        *,
        text: Optional[str] = None,
        modifiers: Sequence[str] = (),
    ) -> ModeResult:
        challenge = self._require_challenge()
        stamp = self._clock() if timestamp is None else timestamp
        self._keystrokes.append(Keystroke(key=key, timestamp=stamp))

        version = self.buffer.document.version
        outcome = self.manager.handle_key(
            KeyInput(key=key, modifiers=tuple(modifiers), text=text)
        )
        if self.buffer.document.version != version and self._result is None:
            if validate_challenge(challenge.initial, challenge.target, self.buffer.text):
                self._complete(challenge, stamp)
        return outcome

    def use_hint(self) -> Optional[str]:
        """Reveal the next hint, or return ``None`` once all are shown."""

        challenge = self._require_challenge()
        if self._hints_used >= len(challenge.hints):
            return None
        hint = challenge.hints[self._hints_used]
        self._hints_used += 1
        telemetry.record_event(
            "challenge.hint",
            data={"challenge": challenge.id, "hints_used": self._hints_used},
            logger_name="helix_trainer.session",
        )
        return hint

    def score(self) -> Optional[int]:
        if self._result is None:
            return None
        return calculate_score(
            self._result.keystrokes,
            self._result.optimal_keystrokes,
            self._result.hints_used,
            self._result.elapsed_ms,
            config=self.config.scoring,
        )

    def stars(self) -> Optional[int]:
        if self._result is None:
            return None
        return get_star_rating(
            self._result.keystrokes,
            self._result.optimal_keystrokes,
            self._result.hints_used,
            config=self.config.scoring,
        )

    def view(self) -> EngineView:
        state = self.manager.state
        snapshot = self.buffer.snapshot()
        challenge = self._challenge
        hints = challenge.hints[: self._hints_used] if challenge else ()
        return EngineView(
            text=snapshot.text,
            cursor=snapshot.cursor,
            selections=snapshot.selections,
            mode=state,
            mode_label=mode_label(state),
            pending=self.manager.pending,
            registers=dict(self.buffer.registers.serialize()),
            keystrokes=len(self._keystrokes),
            hints=tuple(hints),
            result=self._result,
        )

    def _complete(self, challenge: Challenge, timestamp: int) -> None:
        self._result = ChallengeResult(
            completed=True,
            keystrokes=len(self._keystrokes),
            optimal_keystrokes=challenge.optimal_keystrokes,
            elapsed_ms=max(0, timestamp - self._started_at),
            hints_used=self._hints_used,
        )
        self.manager.context.bus.emit("challenge.complete", self._result)
        telemetry.record_event(
            "challenge.complete",
            data={
                "challenge": challenge.id,
                "keystrokes": self._result.keystrokes,
                "elapsed_ms": self._result.elapsed_ms,
            },
            logger_name="helix_trainer.session",
        )

    def _require_challenge(self) -> Challenge:
        if self._challenge is None:
            raise RuntimeError("No challenge loaded; call load() first")
        return self._challenge


__all__ = ["ChallengeSession", "EngineView"]
