from __future__ import annotations

import pytest

from helix_trainer.buffer import Buffer, Position, Selection
from helix_trainer.keymaps import Binding, KeySequence, KeymapRegistry, KeymapResolver
from helix_trainer.keymaps.defaults import load_default_keymaps
from helix_trainer.modes import (
    InsertState,
    KeyInput,
    MatchPending,
    MatchState,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
    NormalState,
    SelectState,
    mode_label,
)
from helix_trainer.modes.mode_manager import ModeManager, create_default_manager


def make_manager(text: str = "") -> ModeManager:
    return create_default_manager(Buffer.from_text(text))


def press(manager: ModeManager, *keys: str) -> ModeResult:
    result = ModeResult(consumed=False)
    for key in keys:
        result = manager.handle_key(KeyInput(key=key, text=key if len(key) == 1 else None))
    return result


def test_manager_starts_in_normal_mode() -> None:
    manager = make_manager("alpha")

    assert manager.state == NormalState()
    assert manager.label == "NORMAL"
    assert manager.pending == ""


def test_insert_keys_switch_to_insert_mode() -> None:
    for key in ("i", "a", "I", "A", "o", "O", "c"):
        manager = make_manager("alpha\nbeta")

        result = press(manager, key)

        assert result.switch_to == "insert", key
        assert manager.state == InsertState()


def test_select_mode_transitions() -> None:
    manager = make_manager("alpha\nbeta")

    press(manager, "v")
    assert manager.state == SelectState(line_wise=False)
    assert manager.label == "SELECT"

    press(manager, "Escape", "V")
    assert manager.state == SelectState(line_wise=True)
    assert manager.label == "SELECT LINE"
    assert manager.context.buffer.state.primary == Selection(Position(0, 0), Position(0, 5))


def test_match_mode_reports_pending_kind() -> None:
    manager = make_manager("f(x)")

    press(manager, "m")
    assert manager.state == MatchState(pending=MatchPending.NONE)

    result = press(manager, "i")
    assert result.status == "pending"
    assert manager.state == MatchState(pending=MatchPending.INSIDE)
    assert manager.label == "MATCH I"
    assert manager.pending == "i"


def test_match_mode_surround_label() -> None:
    manager = make_manager("word")

    press(manager, "m", "s")

    assert manager.label == "MATCH S"


def test_escape_returns_to_normal_from_every_state() -> None:
    prefixes = [
        (),
        ("g",),
        ("r",),
        ("f",),
        ("t",),
        ("i",),
        ("v",),
        ("v", "g"),
        ("V",),
        ("m",),
        ("m", "i"),
        ("m", "a"),
        ("m", "s"),
    ]
    for prefix in prefixes:
        manager = make_manager("one (two)\nthree")
        press(manager, *prefix)

        result = press(manager, "Escape")

        assert result.status == "escape", prefix
        assert manager.state == NormalState(), prefix
        assert manager.pending == "", prefix


def test_escape_is_idempotent() -> None:
    manager = make_manager("text")
    press(manager, "m", "i")

    press(manager, "Escape")
    again = press(manager, "Escape")

    assert again.consumed is True
    assert manager.state == NormalState()
    assert manager.pending == ""


def test_escape_spellings_are_equivalent() -> None:
    for spelling in ("Escape", "ESC", "esc", "<esc>"):
        manager = make_manager("text")
        press(manager, "i")

        press(manager, spelling)

        assert manager.state == NormalState(), spelling


def test_escape_clears_pending_of_inactive_modes() -> None:
    manager = make_manager("text")
    press(manager, "v", "g")
    assert manager.pending == "g"

    press(manager, "Escape", "v")

    assert manager.pending == ""


def test_escape_from_select_keeps_selections() -> None:
    manager = make_manager("alpha")
    press(manager, "v", "l", "l")

    press(manager, "Escape")

    assert manager.context.buffer.state.selections == [
        Selection(Position(0, 0), Position(0, 2))
    ]


def test_escape_from_select_drops_empty_selection() -> None:
    manager = make_manager("alpha")
    press(manager, "v")
    assert len(manager.context.buffer.state.selections) == 1

    press(manager, "Escape")

    assert manager.context.buffer.state.selections == []


def test_escape_from_insert_drops_carets() -> None:
    manager = make_manager("a\nb")
    press(manager, "C", "i")
    assert len(manager.context.buffer.state.selections) == 2

    press(manager, "Escape")

    assert manager.context.buffer.state.selections == []


def test_unmatched_key_is_noop_and_keeps_mode() -> None:
    manager = make_manager("alpha")
    before = manager.context.buffer.snapshot()

    result = press(manager, "Z")

    assert result.consumed is False
    assert result.status == "noop"
    assert manager.state == NormalState()
    assert manager.context.buffer.snapshot() == before


def test_unmatched_key_in_match_mode_stays_in_match() -> None:
    manager = make_manager("alpha")
    press(manager, "m")

    result = press(manager, "q")

    assert result.status == "noop"
    assert isinstance(manager.state, MatchState)


def test_pending_prefix_then_unrelated_key_runs_that_key() -> None:
    manager = make_manager("alpha")

    pending = press(manager, "g")
    assert pending.status == "pending"
    assert pending.message == "awaiting_sequence"

    press(manager, "l")

    assert manager.pending == ""
    assert manager.context.buffer.state.cursor == Position(0, 1)


def test_two_key_goto_buffer_start() -> None:
    manager = make_manager("one\ntwo")
    press(manager, "G")
    assert manager.context.buffer.state.cursor == Position(1, 3)

    press(manager, "g", "g")

    assert manager.context.buffer.state.cursor == Position(0, 0)


def test_no_match_in_match_mode_returns_to_normal() -> None:
    manager = make_manager("no delimiters here")

    result = press(manager, "m", "i", "(")

    assert result.status == "no_match"
    assert manager.state == NormalState()
    assert manager.context.buffer.text == "no delimiters here"


def test_select_line_wise_j_extends_by_whole_lines() -> None:
    manager = make_manager("one\ntwo\nthree")

    press(manager, "V", "j")

    assert manager.context.buffer.state.primary == Selection(
        Position(0, 0), Position(1, 3)
    )

    press(manager, "j")
    assert manager.context.buffer.state.primary == Selection(
        Position(0, 0), Position(2, 5)
    )


def test_select_char_wise_j_extends_to_cursor() -> None:
    manager = make_manager("one\ntwo")

    press(manager, "v", "l", "j")

    assert manager.context.buffer.state.primary == Selection(
        Position(0, 0), Position(1, 1)
    )


def test_select_mode_delete_returns_to_normal() -> None:
    manager = make_manager("alpha")
    press(manager, "v", "l", "l")

    result = press(manager, "d")

    assert result.switch_to == "normal"
    assert manager.state == NormalState()
    assert manager.context.buffer.text == "pha"


def test_mode_switch_events_flow_through_bus() -> None:
    manager = make_manager("alpha beta")
    extends: list[object] = []
    manager.context.bus.subscribe("select.extend", extends.append)

    press(manager, "v", "w")

    assert extends == [{"anchor": Position(0, 0), "cursor": Position(0, 5)}]


def test_manager_with_custom_registry_binding() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    registry.register_binding(
        Binding(
            id="normal.quick_insert",
            mode="normal",
            sequence=KeySequence.from_strings("q", "i"),
            action_id="insert.enter",
        )
    )
    resolver = KeymapResolver(registry)
    buffer = Buffer.from_text("text")
    context = ModeContext(buffer=buffer, registers=buffer.registers, bus=ModeBus())
    manager = ModeManager(
        context,
        keymap_registry=registry,
        keymap_resolver=resolver,
        load_defaults=False,
    )
    manager.register_mode(NormalMode)

    pending = manager.handle_key(KeyInput(key="q", text="q"))
    assert pending.status == "pending"

    result = manager.handle_key(KeyInput(key="i", text="i"))
    assert result.switch_to == "insert"


def test_register_mode_twice_is_rejected() -> None:
    manager = make_manager()

    with pytest.raises(ValueError):
        manager.register_mode(NormalMode)


def test_switch_to_unknown_mode_raises() -> None:
    manager = make_manager()

    with pytest.raises(KeyError):
        manager.switch_mode("command")


def test_manager_without_modes_raises() -> None:
    buffer = Buffer()
    context = ModeContext(buffer=buffer, registers=buffer.registers, bus=ModeBus())
    manager = ModeManager(context)

    with pytest.raises(RuntimeError):
        manager.handle_key(KeyInput(key="x"))


def test_reset_clears_line_wise_flag() -> None:
    manager = make_manager("one\ntwo")
    press(manager, "V")

    manager.reset()

    assert manager.state == NormalState()
    assert manager.context.extras["keymap_flags"] == {}
    assert "select_state" not in manager.context.extras


def test_mode_label_table() -> None:
    assert mode_label(NormalState()) == "NORMAL"
    assert mode_label(InsertState()) == "INSERT"
    assert mode_label(SelectState()) == "SELECT"
    assert mode_label(MatchState(pending=MatchPending.AROUND)) == "MATCH A"
