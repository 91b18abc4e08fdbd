"""Executable Textual app that hosts a single trainer challenge."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use helix_trainer.adapters.textual.app"
    ) from exc

from helix_trainer.buffer import BufferMirror
from helix_trainer.challenges import Category, Challenge, ChallengeResult
from helix_trainer.config import load_config
from helix_trainer.modes import MODE_STYLES
from helix_trainer.session import ChallengeSession

from .controller import TextualTrainerAdapter, TextualUIHooks

_NAMED_KEYS = {
    "escape": "Escape",
    "enter": "Enter",
    "return": "Enter",
    "backspace": "Backspace",
    "delete": "Delete",
    "tab": "Tab",
}

DEMO_CHALLENGE = Challenge(
    id="demo-match-inside",
    name="Change inside parentheses",
    description="Replace the argument using match mode.",
    initial="function(old) call",
    target="function(new) call",
    optimal_keystrokes=8,
    hints=("Use m i ( to select inside the parentheses", "Then c to change it"),
    category=Category.SURROUND,
)


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    pending_text: str = ""


class HelixTrainerApp(App[None]):
    """Minimal Textual UI embedding one challenge session."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#target-view {
		height: auto;
		border: round $secondary;
		padding: 0 1;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#pending-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
        ("f1", "hint", "Hint"),
        ("f5", "reset", "Reset"),
    ]

    def __init__(self, challenge: Challenge = DEMO_CHALLENGE) -> None:
        super().__init__()
        self._challenge = challenge
        self._state = UIState()
        self.session: ChallengeSession | None = None
        self.adapter: TextualTrainerAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._pending_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static(f"Target:\n{self._challenge.target}", id="target-view")
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._pending_widget = Static("", id="pending-line")
        yield self._status_widget
        yield self._pending_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.title = self._challenge.name or self._challenge.id
        self.session = ChallengeSession(config=load_config())
        self.session.load(self._challenge)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_pending=self._show_pending,
            show_result=self._show_result,
        )
        self.adapter = TextualTrainerAdapter(self.session, hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def action_hint(self) -> None:
        if self.adapter:
            self.adapter.use_hint()

    def action_reset(self) -> None:
        if self.adapter:
            self.adapter.reset()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.buffer_text = mirror.text
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)
        if self._status_widget and not self._state.status_text:
            self._status_widget.update(mirror.attributes.get("mode", ""))

    def _update_status(self, status: str) -> None:
        mode = ""
        color = None
        if self.session:
            view = self.session.view()
            mode = f"{view.mode_label}  keys={view.keystrokes}  "
            color = MODE_STYLES[view.mode.name].color
        self._state.status_text = f"{mode}{status}"
        if self._status_widget:
            self._status_widget.update(self._state.status_text)
            if color:
                self._status_widget.styles.color = color

    def _show_pending(self, pending: str) -> None:
        self._state.pending_text = pending
        if self._pending_widget:
            self._pending_widget.update(pending)

    def _show_result(self, result: ChallengeResult) -> None:
        if not self.session:
            return
        self._update_status(
            f"solved in {result.keystrokes} keys "
            f"(par {result.optimal_keystrokes}), score {self.session.score()}, "
            f"{'*' * (self.session.stars() or 0)}"
        )

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key in {"ctrl+c", "ctrl+q", "f1", "f5"}:
            return None
        if key in _NAMED_KEYS:
            return (_NAMED_KEYS[key], None, ())
        if event.character and event.is_printable:
            return (event.character, event.character, ())
        modifiers: list[str] = []
        if key.startswith("ctrl+"):
            modifiers.append("CTRL")
            key = key[len("ctrl+") :]
        return (key, None, tuple(modifiers))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a helix-trainer challenge.")
    parser.add_argument("--initial", help="Initial buffer text (\\n for newlines)")
    parser.add_argument("--target", help="Target buffer text (\\n for newlines)")
    parser.add_argument(
        "--optimal",
        type=int,
        default=None,
        help="Optimal keystroke count for the challenge",
    )
    parser.add_argument(
        "--hint",
        action="append",
        default=[],
        help="Hint text; repeat for several hints",
    )
    return parser.parse_args(argv)


def _challenge_from_args(args: Any) -> Challenge:
    if args.initial is None or args.target is None:
        return DEMO_CHALLENGE
    initial = args.initial.replace("\\n", "\n")
    target = args.target.replace("\\n", "\n")
    return Challenge(
        id="custom",
        name="Custom challenge",
        initial=initial,
        target=target,
        optimal_keystrokes=args.optimal if args.optimal is not None else 0,
        hints=tuple(args.hint),
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = HelixTrainerApp(_challenge_from_args(args))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
