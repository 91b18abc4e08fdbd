"""Built-in keymaps that seed each mode with the trainer's command table."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from helix_trainer.actions import core as core_actions
from helix_trainer.actions import edit as edit_actions
from helix_trainer.actions import insert as insert_actions
from helix_trainer.actions import match as match_actions
from helix_trainer.actions import motion as motion_actions
from helix_trainer.actions import selection as selection_actions

from .models import ANY_CHAR, ActionRef, Binding, KeySequence, WhenClause
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    # Mode transitions and stubs
    ActionRef(
        id="core.enter_select",
        handler=core_actions.enter_select_mode,
        description="Enter select mode",
    ),
    ActionRef(
        id="core.enter_line_select",
        handler=core_actions.enter_line_select_mode,
        description="Select the line and enter line-wise select mode",
    ),
    ActionRef(
        id="core.enter_match",
        handler=core_actions.enter_match_mode,
        description="Enter match mode",
    ),
    ActionRef(id="core.undo", handler=core_actions.undo, description="Undo (unavailable)"),
    ActionRef(id="core.redo", handler=core_actions.redo, description="Redo (unavailable)"),
    ActionRef(
        id="core.split_selection",
        handler=core_actions.split_selection,
        description="Split selection (unsupported)",
    ),
    # Movement
    ActionRef(id="motion.left", handler=motion_actions.move_left, description="Move left"),
    ActionRef(id="motion.right", handler=motion_actions.move_right, description="Move right"),
    ActionRef(id="motion.up", handler=motion_actions.move_up, description="Move up"),
    ActionRef(id="motion.down", handler=motion_actions.move_down, description="Move down"),
    ActionRef(
        id="motion.word_forward",
        handler=motion_actions.move_word_forward,
        description="Move past the next word",
    ),
    ActionRef(
        id="motion.word_backward",
        handler=motion_actions.move_word_backward,
        description="Move to the previous word start",
    ),
    ActionRef(
        id="motion.word_end",
        handler=motion_actions.move_word_end,
        description="Move to the next word end",
    ),
    ActionRef(
        id="motion.line_start",
        handler=motion_actions.move_line_start,
        description="Go to line start",
    ),
    ActionRef(
        id="motion.line_end",
        handler=motion_actions.move_line_end,
        description="Go to line end",
    ),
    ActionRef(
        id="motion.buffer_start",
        handler=motion_actions.goto_buffer_start,
        description="Go to the first line",
    ),
    ActionRef(
        id="motion.buffer_end",
        handler=motion_actions.goto_buffer_end,
        description="Go to the end of the last line",
    ),
    ActionRef(
        id="motion.find_char",
        handler=motion_actions.find_char,
        description="Find the next character on the line",
    ),
    ActionRef(
        id="motion.till_char",
        handler=motion_actions.till_char,
        description="Move till the next character on the line",
    ),
    # Select-mode extension
    ActionRef(
        id="select.extend_left",
        handler=motion_actions.extend_left,
        description="Extend selection left",
    ),
    ActionRef(
        id="select.extend_right",
        handler=motion_actions.extend_right,
        description="Extend selection right",
    ),
    ActionRef(
        id="select.extend_up",
        handler=motion_actions.extend_up,
        description="Extend selection up",
    ),
    ActionRef(
        id="select.extend_down",
        handler=motion_actions.extend_down,
        description="Extend selection down",
    ),
    ActionRef(
        id="select.extend_line_up",
        handler=motion_actions.extend_line_up,
        description="Extend line selection up",
    ),
    ActionRef(
        id="select.extend_line_down",
        handler=motion_actions.extend_line_down,
        description="Extend line selection down",
    ),
    ActionRef(
        id="select.extend_word_forward",
        handler=motion_actions.extend_word_forward,
        description="Extend selection past the next word",
    ),
    ActionRef(
        id="select.extend_word_backward",
        handler=motion_actions.extend_word_backward,
        description="Extend selection to the previous word start",
    ),
    ActionRef(
        id="select.extend_word_end",
        handler=motion_actions.extend_word_end,
        description="Extend selection to the next word end",
    ),
    ActionRef(
        id="select.extend_line_start",
        handler=motion_actions.extend_line_start,
        description="Extend selection to line start",
    ),
    ActionRef(
        id="select.extend_line_end",
        handler=motion_actions.extend_line_end,
        description="Extend selection to line end",
    ),
    ActionRef(
        id="select.extend_buffer_start",
        handler=motion_actions.extend_buffer_start,
        description="Extend selection to the first line",
    ),
    ActionRef(
        id="select.extend_buffer_end",
        handler=motion_actions.extend_buffer_end,
        description="Extend selection to the end of the buffer",
    ),
    ActionRef(
        id="select.extend_find_char",
        handler=motion_actions.extend_find_char,
        description="Extend selection to the next character",
    ),
    ActionRef(
        id="select.extend_till_char",
        handler=motion_actions.extend_till_char,
        description="Extend selection till the next character",
    ),
    # Selection set
    ActionRef(
        id="selection.select_line",
        handler=selection_actions.select_line,
        description="Select line, extend to the next if already selected",
    ),
    ActionRef(
        id="selection.line_bounds",
        handler=selection_actions.extend_to_line_bounds,
        description="Extend selections to line bounds",
    ),
    ActionRef(
        id="selection.collapse",
        handler=selection_actions.collapse_selections,
        description="Collapse selections to the cursor",
    ),
    ActionRef(
        id="selection.keep_primary",
        handler=selection_actions.keep_primary_selection,
        description="Keep only the primary selection",
    ),
    ActionRef(
        id="selection.select_all",
        handler=selection_actions.select_all,
        description="Select the whole buffer",
    ),
    ActionRef(
        id="selection.copy_down",
        handler=selection_actions.copy_selection_down,
        description="Copy selection to the next line (add cursor below)",
    ),
    # Changes
    ActionRef(
        id="edit.delete",
        handler=edit_actions.delete_selection,
        description="Delete selections or the character under the cursor",
    ),
    ActionRef(
        id="edit.delete_exit",
        handler=edit_actions.delete_and_exit,
        description="Delete selections and return to normal mode",
    ),
    ActionRef(
        id="edit.change",
        handler=edit_actions.change_selection,
        description="Change selections (delete and insert)",
    ),
    ActionRef(
        id="edit.replace_char",
        handler=edit_actions.replace_char,
        description="Replace the character under the cursor",
    ),
    ActionRef(
        id="edit.yank",
        handler=edit_actions.yank_selection,
        description="Copy the primary selection to the register",
    ),
    ActionRef(
        id="edit.paste_after",
        handler=edit_actions.paste_after,
        description="Paste the register as a line below",
    ),
    ActionRef(
        id="edit.paste_before",
        handler=edit_actions.paste_before,
        description="Paste the register as a line above",
    ),
    ActionRef(
        id="edit.switch_case",
        handler=edit_actions.switch_case,
        description="Switch case",
    ),
    ActionRef(id="edit.indent", handler=edit_actions.indent, description="Indent lines"),
    ActionRef(id="edit.outdent", handler=edit_actions.outdent, description="Unindent lines"),
    ActionRef(
        id="edit.join_lines",
        handler=edit_actions.join_lines,
        description="Join the line below with a space",
    ),
    # Insert mode
    ActionRef(
        id="insert.enter",
        handler=insert_actions.enter_insert_mode,
        description="Insert before selection",
    ),
    ActionRef(
        id="insert.append",
        handler=insert_actions.enter_append_mode,
        description="Insert after selection",
    ),
    ActionRef(
        id="insert.line_start",
        handler=insert_actions.insert_at_line_start,
        description="Insert at line start",
    ),
    ActionRef(
        id="insert.line_end",
        handler=insert_actions.insert_at_line_end,
        description="Insert at line end",
    ),
    ActionRef(
        id="insert.open_below",
        handler=insert_actions.open_below,
        description="Open a new line below",
    ),
    ActionRef(
        id="insert.open_above",
        handler=insert_actions.open_above,
        description="Open a new line above",
    ),
    ActionRef(
        id="insert.type_char",
        handler=insert_actions.type_char,
        description="Insert the typed character",
    ),
    ActionRef(
        id="insert.newline",
        handler=insert_actions.insert_newline,
        description="Insert a line break",
    ),
    ActionRef(
        id="insert.indent",
        handler=insert_actions.insert_indent,
        description="Insert one indentation unit",
    ),
    ActionRef(
        id="insert.backspace",
        handler=insert_actions.delete_backward,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="insert.delete",
        handler=insert_actions.delete_forward,
        description="Delete the character after the cursor",
    ),
    # Match mode
    ActionRef(
        id="match.inside",
        handler=match_actions.select_inside,
        description="Select inside a delimiter pair",
    ),
    ActionRef(
        id="match.around",
        handler=match_actions.select_around,
        description="Select around a delimiter pair",
    ),
    ActionRef(
        id="match.surround",
        handler=match_actions.surround_add,
        description="Surround selections with a delimiter pair",
    ),
)


def _bind(
    mode: str,
    name: str,
    keys: str,
    action_id: str,
    *,
    when: Sequence[str] = (),
    tags: Sequence[str] = (),
) -> Binding:
    return Binding(
        id=f"{mode}.{name}",
        mode=mode,
        sequence=KeySequence.from_strings(*keys.split(" ")),
        action_id=action_id,
        when=tuple(WhenClause.parse(expr) for expr in when),
        tags=tuple(tags),
    )


# Keys shared by normal and select mode that act on the selection set.
_SELECTION_KEYS: tuple[tuple[str, str, str], ...] = (
    ("select_line", "x", "selection.select_line"),
    ("line_bounds", "X", "selection.line_bounds"),
    ("collapse", ";", "selection.collapse"),
    ("keep_primary", ",", "selection.keep_primary"),
    ("select_all", "%", "selection.select_all"),
    ("copy_down", "C", "selection.copy_down"),
    ("change", "c", "edit.change"),
    ("yank", "y", "edit.yank"),
    ("switch_case", "~", "edit.switch_case"),
    ("indent", ">", "edit.indent"),
    ("outdent", "<", "edit.outdent"),
    ("enter_match", "m", "core.enter_match"),
)

_NORMAL_KEYS: tuple[tuple[str, str, str], ...] = (
    ("move_left", "h", "motion.left"),
    ("move_right", "l", "motion.right"),
    ("move_up", "k", "motion.up"),
    ("move_down", "j", "motion.down"),
    ("word_forward", "w", "motion.word_forward"),
    ("word_backward", "b", "motion.word_backward"),
    ("word_end", "e", "motion.word_end"),
    ("line_start", "0", "motion.line_start"),
    ("line_end", "$", "motion.line_end"),
    ("buffer_start", "g g", "motion.buffer_start"),
    ("buffer_end", "G", "motion.buffer_end"),
    ("find_char", f"f {ANY_CHAR}", "motion.find_char"),
    ("till_char", f"t {ANY_CHAR}", "motion.till_char"),
    ("enter_select", "v", "core.enter_select"),
    ("enter_line_select", "V", "core.enter_line_select"),
    ("split_selection", "s", "core.split_selection"),
    ("enter_insert", "i", "insert.enter"),
    ("append", "a", "insert.append"),
    ("insert_line_start", "I", "insert.line_start"),
    ("insert_line_end", "A", "insert.line_end"),
    ("open_below", "o", "insert.open_below"),
    ("open_above", "O", "insert.open_above"),
    ("delete", "d", "edit.delete"),
    ("replace_char", f"r {ANY_CHAR}", "edit.replace_char"),
    ("paste_after", "p", "edit.paste_after"),
    ("paste_before", "P", "edit.paste_before"),
    ("join_lines", "J", "edit.join_lines"),
    ("undo", "u", "core.undo"),
    ("redo", "U", "core.redo"),
)

_SELECT_KEYS: tuple[tuple[str, str, str], ...] = (
    ("extend_left", "h", "select.extend_left"),
    ("extend_right", "l", "select.extend_right"),
    ("extend_word_forward", "w", "select.extend_word_forward"),
    ("extend_word_backward", "b", "select.extend_word_backward"),
    ("extend_word_end", "e", "select.extend_word_end"),
    ("extend_line_start", "0", "select.extend_line_start"),
    ("extend_line_end", "$", "select.extend_line_end"),
    ("extend_buffer_start", "g g", "select.extend_buffer_start"),
    ("extend_buffer_end", "G", "select.extend_buffer_end"),
    ("extend_find_char", f"f {ANY_CHAR}", "select.extend_find_char"),
    ("extend_till_char", f"t {ANY_CHAR}", "select.extend_till_char"),
    ("delete", "d", "edit.delete_exit"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *(_bind("normal", name, keys, action) for name, keys, action in _NORMAL_KEYS),
    *(_bind("normal", name, keys, action) for name, keys, action in _SELECTION_KEYS),
    *(_bind("select", name, keys, action) for name, keys, action in _SELECT_KEYS),
    *(_bind("select", name, keys, action) for name, keys, action in _SELECTION_KEYS),
    _bind("select", "extend_down", "j", "select.extend_down", when=("!line_wise",)),
    _bind("select", "extend_up", "k", "select.extend_up", when=("!line_wise",)),
    _bind("select", "extend_line_down", "j", "select.extend_line_down", when=("line_wise",)),
    _bind("select", "extend_line_up", "k", "select.extend_line_up", when=("line_wise",)),
    _bind("insert", "type_char", ANY_CHAR, "insert.type_char"),
    _bind("insert", "newline", "Enter", "insert.newline"),
    _bind("insert", "indent", "Tab", "insert.indent"),
    _bind("insert", "backspace", "Backspace", "insert.backspace"),
    _bind("insert", "delete", "Delete", "insert.delete"),
    _bind("match", "inside", f"i {ANY_CHAR}", "match.inside"),
    _bind("match", "around", f"a {ANY_CHAR}", "match.around"),
    _bind("match", "surround", f"s {ANY_CHAR}", "match.surround"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not _selected(binding.action_id, allowed_actions):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True
