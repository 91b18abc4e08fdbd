from __future__ import annotations

from helix_trainer.buffer import Buffer, Position, Selection
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


def selections(manager: ModeManager) -> list[Selection]:
    return list(manager.context.buffer.state.selections)


def span(start: tuple[int, int], end: tuple[int, int]) -> Selection:
    return Selection(Position(*start), Position(*end))


def test_x_selects_line_and_moves_cursor_down() -> None:
    manager = make_manager("one\ntwo\nthree")

    result = press(manager, "x")

    assert result.message == "select_line"
    assert selections(manager) == [span((0, 0), (0, 3))]
    assert manager.context.buffer.state.cursor == Position(1, 0)


def test_repeated_x_grows_selection_by_one_line() -> None:
    manager = make_manager("one\ntwo\nthree")

    press(manager, "x")
    grown = press(manager, "x")

    assert grown.message == "extend_line"
    assert selections(manager) == [span((0, 0), (1, 3))]

    press(manager, "x")
    assert selections(manager) == [span((0, 0), (2, 5))]
    assert manager.context.buffer.state.cursor == Position(2, 5)


def test_repeated_x_on_last_line_is_noop() -> None:
    manager = make_manager("one\ntwo")
    press(manager, "x", "x")

    result = press(manager, "x")

    assert result.status == "noop"
    assert selections(manager) == [span((0, 0), (1, 3))]


def test_x_after_moving_selects_new_line() -> None:
    manager = make_manager("one\ntwo\nthree")

    press(manager, "x", "j", "x")

    assert selections(manager) == [span((2, 0), (2, 5))]


def test_X_without_selection_selects_current_line() -> None:
    manager = make_manager("one\ntwo", Position(1, 1))

    press(manager, "X")

    assert selections(manager) == [span((1, 0), (1, 3))]


def test_X_extends_partial_selection_to_line_bounds() -> None:
    manager = make_manager("alpha\nbeta", Position(0, 2))

    press(manager, "v", "j", "X")

    assert selections(manager) == [span((0, 0), (1, 4))]


def test_semicolon_collapses_selections() -> None:
    manager = make_manager("one\ntwo")
    press(manager, "x")

    press(manager, ";")

    assert selections(manager) == []


def test_comma_keeps_primary_only() -> None:
    manager = make_manager("ab\nab\nab")
    press(manager, "v", "l", "Escape", "C", "C")
    assert len(selections(manager)) == 3

    press(manager, ",")

    assert selections(manager) == [span((2, 0), (2, 1))]


def test_percent_selects_whole_buffer() -> None:
    manager = make_manager("ab\ncd")

    press(manager, "%")

    assert selections(manager) == [span((0, 0), (1, 2))]
    assert manager.context.buffer.state.cursor == Position(1, 2)


def test_C_on_bare_cursor_adds_caret_below() -> None:
    manager = make_manager("abc\nabc", Position(0, 2))

    press(manager, "C")

    assert selections(manager) == [
        Selection.caret(Position(0, 2)),
        Selection.caret(Position(1, 2)),
    ]
    assert manager.context.buffer.state.cursor == Position(1, 2)


def test_C_duplicates_selection_vertically() -> None:
    manager = make_manager("abc\nabc\nabc")
    events: list[object] = []
    manager.context.bus.subscribe("selection.copy_down", events.append)

    press(manager, "v", "l", "Escape", "C")

    assert selections(manager) == [span((0, 0), (0, 1)), span((1, 0), (1, 1))]
    assert manager.context.buffer.state.cursor == Position(1, 1)
    assert events == [{"count": 2}]


def test_C_clamps_columns_to_shorter_line() -> None:
    manager = make_manager("abcd\nab")

    press(manager, "v", "l", "l", "l", "Escape", "C")

    assert selections(manager)[-1] == span((1, 0), (1, 2))


def test_C_moves_multi_line_selection_by_its_span() -> None:
    manager = make_manager("a\nb\nc\nd")

    press(manager, "x", "x", "C")

    assert selections(manager) == [span((0, 0), (1, 1)), span((2, 0), (3, 1))]


def test_C_past_last_line_is_noop() -> None:
    manager = make_manager("ab\nab")
    press(manager, "v", "l", "Escape", "C")

    result = press(manager, "C")

    assert result.status == "noop"
    assert len(selections(manager)) == 2


def test_s_is_acknowledged_without_change() -> None:
    manager = make_manager("a,b,c")
    press(manager, "%")

    result = press(manager, "s")

    assert result.consumed is True
    assert result.status == "split_unsupported"
    assert selections(manager) == [span((0, 0), (0, 5))]


def test_selection_commands_work_in_select_mode() -> None:
    manager = make_manager("one\ntwo")

    press(manager, "v", "x")

    assert selections(manager) == [span((0, 0), (0, 3))]
