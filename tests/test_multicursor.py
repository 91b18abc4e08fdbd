from __future__ import annotations

from helix_trainer.buffer import Buffer, Position, Selection
from helix_trainer.modes import KeyInput, ModeResult
from helix_trainer.modes.mode_manager import ModeManager, create_default_manager


def make_manager(text: str) -> ModeManager:
    return create_default_manager(Buffer.from_text(text))


def press(manager: ModeManager, *keys: str) -> ModeResult:
    result = ModeResult(consumed=False)
    for key in keys:
        result = manager.handle_key(KeyInput(key=key, text=key if len(key) == 1 else None))
    return result


def test_change_applies_to_every_copied_selection() -> None:
    manager = make_manager("foo\nfoo\nfoo")

    press(manager, "v", "l", "l", "l", "Escape", "C", "C")
    assert len(manager.context.buffer.state.selections) == 3

    press(manager, "c", "b", "a", "r", "Escape")

    assert manager.context.buffer.text == "bar\nbar\nbar"
    assert manager.context.buffer.state.selections == []


def test_change_leaves_one_caret_per_selection() -> None:
    manager = make_manager("foo\nfoo")
    press(manager, "v", "l", "Escape", "C")

    press(manager, "c")

    assert manager.context.buffer.text == "oo\noo"
    assert manager.context.buffer.state.selections == [
        Selection.caret(Position(0, 0)),
        Selection.caret(Position(1, 0)),
    ]
    assert manager.context.buffer.state.cursor == Position(1, 0)


def test_delete_applies_to_every_selection() -> None:
    manager = make_manager("foo\nfoo\nfoo")

    press(manager, "v", "l", "Escape", "C", "C", "d")

    assert manager.context.buffer.text == "oo\noo\noo"


def test_switch_case_applies_to_every_selection() -> None:
    manager = make_manager("foo\nfoo\nfoo")

    press(manager, "v", "l", "l", "Escape", "C", "~")

    assert manager.context.buffer.text == "FOo\nFOo\nfoo"


def test_carets_from_bare_cursor_type_on_both_lines() -> None:
    manager = make_manager("ab\ncd")

    press(manager, "C", "i", "-", "Escape")

    assert manager.context.buffer.text == "-ab\n-cd"


def test_backspace_and_newline_at_every_caret() -> None:
    manager = make_manager("xab\nxcd")
    press(manager, "l", "C", "i")

    press(manager, "Backspace")
    assert manager.context.buffer.text == "ab\ncd"

    press(manager, "Enter")
    assert manager.context.buffer.text == "\nab\n\ncd"


def test_same_line_selections_keep_offsets_in_sync() -> None:
    manager = make_manager("aa bb cc")
    manager.context.buffer.state.set_selections(
        [
            Selection(Position(0, 0), Position(0, 2)),
            Selection(Position(0, 3), Position(0, 5)),
            Selection(Position(0, 6), Position(0, 8)),
        ]
    )

    press(manager, "c", "x", "y", "z", "Escape")

    assert manager.context.buffer.text == "xyz xyz xyz"
