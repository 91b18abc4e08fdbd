from __future__ import annotations

from helix_trainer.buffer import Anchor, Buffer, Position, Selection
from helix_trainer.modes import KeyInput, ModeResult
from helix_trainer.modes.mode_manager import ModeManager, create_default_manager


def make_manager(text: str, cursor: Position = Position(0, 0)) -> ModeManager:
    manager = create_default_manager(Buffer.from_text(text))
    manager.context.buffer.state.cursor = cursor
    return manager


def press(manager: ModeManager, *keys: str) -> ModeResult:
    result = ModeResult(consumed=False)
    for key in keys:
        result = manager.handle_key(KeyInput(key=key, text=key if len(key) == 1 else None))
    return result


def cursor(manager: ModeManager) -> Position:
    return manager.context.buffer.state.cursor


def test_h_and_k_clamp_at_buffer_start() -> None:
    manager = make_manager("ab\ncd")

    press(manager, "h", "h", "k", "k", "h")

    assert cursor(manager) == Position(0, 0)


def test_l_and_j_clamp_at_buffer_end() -> None:
    manager = make_manager("ab\ncd")

    press(manager, "j", "j", "j", "l", "l", "l", "l")

    assert cursor(manager) == Position(1, 2)


def test_vertical_motion_reclamps_column() -> None:
    manager = make_manager("long line\nab\nlonger line")

    press(manager, "$", "j")
    assert cursor(manager) == Position(1, 2)

    press(manager, "j")
    assert cursor(manager) == Position(2, 2)


def test_w_lands_after_next_word() -> None:
    manager = make_manager("one two  three")

    press(manager, "w")
    assert cursor(manager) == Position(0, 3)

    press(manager, "w")
    assert cursor(manager) == Position(0, 7)

    press(manager, "w")
    assert cursor(manager) == Position(0, 14)


def test_w_at_line_end_is_noop() -> None:
    manager = make_manager("one\ntwo", Position(0, 3))

    result = press(manager, "w")

    assert result.status == "noop"
    assert cursor(manager) == Position(0, 3)


def test_b_lands_on_word_start() -> None:
    manager = make_manager("one two  three", Position(0, 14))

    press(manager, "b")
    assert cursor(manager) == Position(0, 9)

    press(manager, "b")
    assert cursor(manager) == Position(0, 4)

    press(manager, "b", "b")
    assert cursor(manager) == Position(0, 0)


def test_e_lands_on_last_char_of_word() -> None:
    manager = make_manager("one two")

    press(manager, "e")
    assert cursor(manager) == Position(0, 2)

    press(manager, "e")
    assert cursor(manager) == Position(0, 6)


def test_e_at_end_of_buffer_is_noop() -> None:
    manager = make_manager("ab", Position(0, 1))

    result = press(manager, "e")

    assert result.status == "noop"
    assert cursor(manager) == Position(0, 1)


def test_line_start_and_end() -> None:
    manager = make_manager("hello\nworld", Position(1, 2))

    press(manager, "$")
    assert cursor(manager) == Position(1, 5)

    press(manager, "0")
    assert cursor(manager) == Position(1, 0)


def test_goto_buffer_bounds() -> None:
    manager = make_manager("one\ntwo\nthree", Position(1, 1))

    press(manager, "G")
    assert cursor(manager) == Position(2, 5)

    press(manager, "g", "g")
    assert cursor(manager) == Position(0, 0)


def test_find_and_till_char() -> None:
    manager = make_manager("a,b,c")

    press(manager, "f", ",")
    assert cursor(manager) == Position(0, 1)

    press(manager, "f", ",")
    assert cursor(manager) == Position(0, 3)

    press(manager, "0", "t", "c")
    assert cursor(manager) == Position(0, 3)


def test_find_missing_char_is_noop() -> None:
    manager = make_manager("abc")

    result = press(manager, "f", "z")

    assert result.status == "noop"
    assert cursor(manager) == Position(0, 0)


def test_find_accepts_space() -> None:
    manager = make_manager("(a) (b)")

    press(manager, "f", " ")

    assert cursor(manager) == Position(0, 3)


def test_motions_never_leave_buffer() -> None:
    text = "first line\n\n  indented\nlast"
    keys = ["h", "j", "k", "l", "w", "b", "e", "0", "$", "G", "g"]
    manager = make_manager(text)
    document = manager.context.buffer.document

    for _ in range(3):
        for key in keys:
            press(manager, key)
            position = cursor(manager)
            assert 0 <= position.line < document.line_count
            assert 0 <= position.column <= document.line_length(position.line)


def test_select_mode_extends_forward() -> None:
    manager = make_manager("alpha beta")

    press(manager, "v", "w", "w")

    primary = manager.context.buffer.state.primary
    assert primary == Selection(Position(0, 0), Position(0, 10))
    assert cursor(manager) == Position(0, 10)


def test_select_mode_extends_backward_with_end_anchor() -> None:
    manager = make_manager("one two")

    press(manager, "$", "v", "b")

    primary = manager.context.buffer.state.primary
    assert primary is not None
    assert (primary.start, primary.end) == (Position(0, 4), Position(0, 7))
    assert primary.anchor is Anchor.END
    assert primary.head == Position(0, 4)


def test_select_mode_crossing_anchor_flips_direction() -> None:
    manager = make_manager("abcdef", Position(0, 3))

    press(manager, "v", "l", "h", "h", "h")

    primary = manager.context.buffer.state.primary
    assert primary == Selection(Position(0, 1), Position(0, 3), anchor=Anchor.END)


def test_line_select_k_above_anchor() -> None:
    manager = make_manager("one\ntwo\nthree", Position(2, 0))

    press(manager, "V", "k")

    primary = manager.context.buffer.state.primary
    assert primary == Selection(Position(1, 0), Position(2, 5), anchor=Anchor.END)
    assert cursor(manager) == Position(1, 0)
