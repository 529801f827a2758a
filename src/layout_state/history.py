"""
Linear undo/redo timeline of layout snapshots.

The timeline lives inside EditorState (history + history_index) so that the
reducer stays a pure function. Snapshots are shared between states and never
mutated after they enter the history; every mutating path copies first.
"""
from __future__ import annotations
from dataclasses import replace
from typing import Optional

from .model import EditorState, LayoutDocument


def can_undo(state: EditorState) -> bool:
    return state.history_index > 0


def can_redo(state: EditorState) -> bool:
    return state.history_index < len(state.history) - 1


def push(state: EditorState, layout: LayoutDocument, **changes) -> EditorState:
    """Drop the redo tail, append `layout` and make it current."""
    history = state.history[: state.history_index + 1] + [layout]
    return replace(
        state,
        layout=layout,
        history=history,
        history_index=len(history) - 1,
        is_dirty=True,
        **changes,
    )


def undo(state: EditorState) -> EditorState:
    if not can_undo(state):
        return state
    return _jump(state, state.history_index - 1)


def redo(state: EditorState) -> EditorState:
    if not can_redo(state):
        return state
    return _jump(state, state.history_index + 1)


def _jump(state: EditorState, index: int) -> EditorState:
    layout = state.history[index]
    return replace(
        state,
        layout=layout,
        history_index=index,
        is_dirty=True,
        selected_block_id=_surviving_selection(layout, state.selected_block_id),
    )


def _surviving_selection(layout: LayoutDocument, block_id: Optional[str]) -> Optional[str]:
    _, blk = layout.find_block(block_id)
    return block_id if blk is not None else None
