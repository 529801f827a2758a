from __future__ import annotations
from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Optional
import copy

from .model import EditorState, Block, Position
from .commands import (
    Command, SetLayout, SelectBlock, AddBlock, UpdateBlock, RemoveBlock,
    MoveBlock, CommitMove, ReorderBlocks, UpdateGlobalStyles, Undo, Redo,
    SetZoom, ToggleGrid, ToggleSnap, SetGridSize, MarkSaved,
)
from . import history


ZOOM_MIN = 25
ZOOM_MAX = 200

# Block fields merged key-by-key by UpdateBlock; the rest are replaced.
_MERGED_FIELDS = ("position", "style", "config")
_REPLACED_FIELDS = ("type", "locked", "visible")


@dataclass
class ReduceResult:
    state: EditorState
    applied: bool = True
    reason: Optional[str] = None


def reduce(state: EditorState, cmd: Command) -> EditorState:
    """
    Pure state transformer. Never mutates the input state and never raises:
    references to unknown sections/blocks leave the state untouched (the very
    same object is returned).
    """
    return apply_command(state, cmd).state


def apply_command(state: EditorState, cmd: Command) -> ReduceResult:
    """Like reduce(), but tells whether the command changed anything and why not."""

    # --- Session seed ---
    if isinstance(cmd, SetLayout):
        layout = copy.deepcopy(cmd.layout)
        return ReduceResult(replace(
            state,
            layout=layout,
            history=[layout],
            history_index=0,
            is_dirty=False,
            selected_block_id=None,
        ))

    # --- Selection (no history) ---
    if isinstance(cmd, SelectBlock):
        return ReduceResult(replace(state, selected_block_id=cmd.block_id))

    # --- Structural edits ---
    if isinstance(cmd, AddBlock):
        if state.layout.find_section(cmd.section_id) is None:
            return _noop(state, f"unknown section: {cmd.section_id}")
        if cmd.block.id in state.layout.block_ids():
            return _noop(state, f"duplicate block id: {cmd.block.id}")
        layout = copy.deepcopy(state.layout)
        layout.find_section(cmd.section_id).blocks.append(copy.deepcopy(cmd.block))
        return ReduceResult(history.push(state, layout, selected_block_id=cmd.block.id))

    if isinstance(cmd, UpdateBlock):
        if state.layout.find_block(cmd.block_id)[1] is None:
            return _noop(state, f"unknown block: {cmd.block_id}")
        layout = copy.deepcopy(state.layout)
        _, blk = layout.find_block(cmd.block_id)
        _merge_block(blk, cmd.updates)
        return ReduceResult(history.push(state, layout))

    if isinstance(cmd, RemoveBlock):
        if state.layout.find_block(cmd.block_id)[1] is None:
            return _noop(state, f"unknown block: {cmd.block_id}")
        layout = copy.deepcopy(state.layout)
        sec, _ = layout.find_block(cmd.block_id)
        sec.blocks = [b for b in sec.blocks if b.id != cmd.block_id]
        selected = None if state.selected_block_id == cmd.block_id else state.selected_block_id
        return ReduceResult(history.push(state, layout, selected_block_id=selected))

    if isinstance(cmd, MoveBlock):
        _, found = state.layout.find_block(cmd.block_id)
        if found is None:
            return _noop(state, f"unknown block: {cmd.block_id}")
        if found.locked:
            return _noop(state, f"block is locked: {cmd.block_id}")
        moved = found.position.merged(_as_mapping(cmd.position))
        if moved == found.position:
            return _noop(state, "position unchanged")
        layout = copy.deepcopy(state.layout)
        _, blk = layout.find_block(cmd.block_id)
        blk.position = moved
        return ReduceResult(replace(state, layout=layout, is_dirty=True))

    if isinstance(cmd, CommitMove):
        if state.layout == state.history[state.history_index]:
            return _noop(state, "no pending move")
        return ReduceResult(history.push(state, state.layout))

    if isinstance(cmd, ReorderBlocks):
        if state.layout.find_section(cmd.section_id) is None:
            return _noop(state, f"unknown section: {cmd.section_id}")
        layout = copy.deepcopy(state.layout)
        sec = layout.find_section(cmd.section_id)
        by_id = {b.id: b for b in sec.blocks}
        ordered = []
        seen = set()
        for bid in cmd.block_ids:
            if bid in by_id and bid not in seen:  # unknown ids are dropped
                ordered.append(by_id[bid])
                seen.add(bid)
        # unlisted blocks stay in the section, after the listed ones
        ordered.extend(b for b in sec.blocks if b.id not in seen)
        sec.blocks = ordered
        return ReduceResult(history.push(state, layout))

    if isinstance(cmd, UpdateGlobalStyles):
        layout = copy.deepcopy(state.layout)
        layout.global_styles.update(cmd.styles)
        return ReduceResult(history.push(state, layout))

    # --- Undo / redo ---
    if isinstance(cmd, Undo):
        if not history.can_undo(state):
            return _noop(state, "nothing to undo")
        return ReduceResult(history.undo(state))

    if isinstance(cmd, Redo):
        if not history.can_redo(state):
            return _noop(state, "nothing to redo")
        return ReduceResult(history.redo(state))

    # --- View (not dirty, no history) ---
    if isinstance(cmd, SetZoom):
        return ReduceResult(replace(state, zoom=max(ZOOM_MIN, min(cmd.zoom, ZOOM_MAX))))

    if isinstance(cmd, ToggleGrid):
        value = (not state.show_grid) if cmd.value is None else bool(cmd.value)
        return ReduceResult(replace(state, show_grid=value))

    if isinstance(cmd, ToggleSnap):
        value = (not state.snap_to_grid) if cmd.value is None else bool(cmd.value)
        return ReduceResult(replace(state, snap_to_grid=value))

    if isinstance(cmd, SetGridSize):
        return ReduceResult(replace(state, grid_size=cmd.size))

    # --- Save acknowledgment ---
    if isinstance(cmd, MarkSaved):
        return ReduceResult(replace(state, is_dirty=False))

    # Unhandled command → no-op (future-proof)
    return _noop(state, f"unhandled command: {type(cmd).__name__}")


# ----- helpers -----

def _noop(state: EditorState, reason: str) -> ReduceResult:
    return ReduceResult(state, applied=False, reason=reason)


def _as_mapping(value: Any) -> Dict[str, Any]:
    if isinstance(value, Position):
        return asdict(value)
    return dict(value or {})


def _merge_block(blk: Block, updates: Dict[str, Any]) -> None:
    """
    One-level merge: position/style/config are merged key-by-key (a nested
    value inside config is replaced wholesale). `id` is never rewritten.
    """
    for key, value in updates.items():
        value = copy.deepcopy(value)
        if key == "position":
            blk.position = blk.position.merged(_as_mapping(value))
        elif key in _MERGED_FIELDS:
            getattr(blk, key).update(value or {})
        elif key in _REPLACED_FIELDS:
            setattr(blk, key, value)
