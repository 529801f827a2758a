from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
import copy
import logging

from .model import EditorState, LayoutDocument, Block, new_block_id
from .commands import (
    Command, SetLayout, SelectBlock, AddBlock, UpdateBlock, RemoveBlock,
    MoveBlock, CommitMove, ReorderBlocks, UpdateGlobalStyles, Undo, Redo,
    SetZoom, ToggleGrid, ToggleSnap, SetGridSize, MarkSaved,
)
from .reducer import apply_command, ReduceResult
from .protocol import BlockRegistryProtocol

logger = logging.getLogger(__name__)

# Bounds of the standard property sliders (percent, 5-unit steps).
WIDTH_RANGE = (25, 100)
X_RANGE = (0, 75)
SLIDER_STEP = 5

Listener = Callable[[EditorState], None]


@dataclass
class Store:
    """
    Owns the single mutable EditorState reference of one editing session and
    funnels every change through the pure reducer.

    Usage:
        store = Store(registry=my_registry)
        bid = store.add_block("header", "logo")
        store.set_block_width(bid, 40)
        store.undo(); store.redo()
    """
    state: EditorState = field(default_factory=EditorState.fresh)
    registry: BlockRegistryProtocol = field(default=None)  # inject at construction
    _listeners: List[Listener] = field(default_factory=list)

    # ----- dispatch -----

    def apply(self, cmd: Command) -> EditorState:
        return self.try_apply(cmd).state

    def try_apply(self, cmd: Command) -> ReduceResult:
        result = apply_command(self.state, cmd)
        if not result.applied:
            logger.debug("%s ignored: %s", type(cmd).__name__, result.reason)
            return result
        self.state = result.state
        for listener in list(self._listeners):
            listener(self.state)
        return result

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback for state changes; returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return _unsubscribe

    # ----- read accessors -----

    @property
    def layout(self) -> LayoutDocument:
        return self.state.layout

    @property
    def can_undo(self) -> bool:
        return self.state.can_undo

    @property
    def can_redo(self) -> bool:
        return self.state.can_redo

    def selected_block(self) -> Optional[Block]:
        return self.state.selected_block()

    # ----- session -----

    def load(self, layout: LayoutDocument) -> EditorState:
        return self.apply(SetLayout(layout))

    def undo(self) -> EditorState:
        return self.apply(Undo())

    def redo(self) -> EditorState:
        return self.apply(Redo())

    def mark_saved(self) -> EditorState:
        return self.apply(MarkSaved())

    # ----- block editing -----

    def select(self, block_id: Optional[str]) -> EditorState:
        return self.apply(SelectBlock(block_id))

    def add_block(self, section_id: str, block_type: str) -> Optional[str]:
        """Drop a new default block of `block_type` (type id or alias) into a section."""
        type_id = self.registry.resolve_token(block_type) or block_type
        block = self.registry.default_block(type_id, new_block_id(self.layout.block_ids()))
        result = self.try_apply(AddBlock(section_id, block))
        return block.id if result.applied else None

    def duplicate_block(self, block_id: str) -> Optional[str]:
        """Copy a block (unlocked, fresh id) to the end of its own section."""
        sec, blk = self.layout.find_block(block_id)
        if blk is None:
            logger.debug("duplicate ignored: unknown block %s", block_id)
            return None
        clone = copy.deepcopy(blk)
        clone.id = new_block_id(self.layout.block_ids())
        clone.locked = False
        result = self.try_apply(AddBlock(sec.id, clone))
        return clone.id if result.applied else None

    def update_block(self, block_id: str, updates: Dict[str, Any]) -> EditorState:
        return self.apply(UpdateBlock(block_id, updates))

    def update_config(self, block_id: str, key: str, value: Any) -> EditorState:
        """Set one config key, normalised through the registry. Raises ValueError when rejected."""
        _, blk = self.layout.find_block(block_id)
        if blk is None:
            return self.state
        ok, normalized, err = self.registry.validate_config(blk.type, key, value)
        if not ok:
            raise ValueError(err or f"Invalid value for {key}: {value!r}")
        return self.apply(UpdateBlock(block_id, {"config": {key: normalized}}))

    def update_style(self, block_id: str, key: str, value: Any) -> EditorState:
        return self.apply(UpdateBlock(block_id, {"style": {key: value}}))

    def set_block_width(self, block_id: str, width: float) -> EditorState:
        value = _snap_clamp(width, *WIDTH_RANGE)
        return self.apply(UpdateBlock(block_id, {"position": {"width": value}}))

    def set_block_x(self, block_id: str, x: float) -> EditorState:
        value = _snap_clamp(x, *X_RANGE)
        return self.apply(UpdateBlock(block_id, {"position": {"x": value}}))

    def toggle_locked(self, block_id: str) -> EditorState:
        _, blk = self.layout.find_block(block_id)
        if blk is None:
            return self.state
        return self.apply(UpdateBlock(block_id, {"locked": not blk.locked}))

    def toggle_visible(self, block_id: str) -> EditorState:
        _, blk = self.layout.find_block(block_id)
        if blk is None:
            return self.state
        return self.apply(UpdateBlock(block_id, {"visible": not blk.visible}))

    def remove_block(self, block_id: str) -> EditorState:
        return self.apply(RemoveBlock(block_id))

    # ----- drag & drop -----

    def move_block(self, block_id: str, **position: float) -> EditorState:
        """Drag feedback; y (mm) snaps to the grid when snapping is on.

        x is a percentage of the section width, so it is left as given.
        """
        y = position.get("y")
        if self.state.snap_to_grid and self.state.grid_size and isinstance(y, (int, float)):
            position["y"] = _snap(y, self.state.grid_size)
        return self.apply(MoveBlock(block_id, position))

    def end_drag(self) -> EditorState:
        return self.apply(CommitMove())

    def move_block_over(self, active_id: str, over_id: str) -> EditorState:
        """Drag-end reorder: move `active_id` to the slot of `over_id` within their section."""
        if active_id == over_id:
            return self.state
        for sec in self.layout.sections:
            ids = [b.id for b in sec.blocks]
            if active_id in ids and over_id in ids:
                src, dst = ids.index(active_id), ids.index(over_id)
                ids.insert(dst, ids.pop(src))
                return self.apply(ReorderBlocks(sec.id, ids))
        logger.debug("reorder ignored: %s and %s share no section", active_id, over_id)
        return self.state

    # ----- global styles & view -----

    def update_global_styles(self, **styles: str) -> EditorState:
        return self.apply(UpdateGlobalStyles(styles))

    def set_zoom(self, zoom: float) -> EditorState:
        return self.apply(SetZoom(zoom))

    def toggle_grid(self, value: Optional[bool] = None) -> EditorState:
        return self.apply(ToggleGrid(value))

    def toggle_snap(self, value: Optional[bool] = None) -> EditorState:
        return self.apply(ToggleSnap(value))

    def set_grid_size(self, size: float) -> EditorState:
        return self.apply(SetGridSize(size))


def _snap(value: float, step: float) -> float:
    snapped = round(value / step) * step
    return int(snapped) if float(snapped).is_integer() else snapped


def _snap_clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(_snap(value, SLIDER_STEP), hi))
