from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .model import Block, LayoutDocument


class Command:
    """Marker base class for all commands (intents)."""
    pass


@dataclass
class SetLayout(Command):
    """Seed a session: replaces the layout and resets history. Not undoable."""
    layout: LayoutDocument


@dataclass
class SelectBlock(Command):
    block_id: Optional[str] = None  # None clears selection


@dataclass
class AddBlock(Command):
    section_id: str
    block: Block


@dataclass
class UpdateBlock(Command):
    """position/style/config are merged key-by-key; other keys replace."""
    block_id: str
    updates: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RemoveBlock(Command):
    block_id: str


@dataclass
class MoveBlock(Command):
    """Continuous drag feedback. Does not push history."""
    block_id: str
    position: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CommitMove(Command):
    """End of a drag gesture: records the moved layout as one undo step."""


@dataclass
class ReorderBlocks(Command):
    section_id: str
    block_ids: List[str] = field(default_factory=list)


@dataclass
class UpdateGlobalStyles(Command):
    styles: Dict[str, str] = field(default_factory=dict)


@dataclass
class Undo(Command):
    pass


@dataclass
class Redo(Command):
    pass


@dataclass
class SetZoom(Command):
    zoom: float  # percent; reducer clamps bounds


@dataclass
class ToggleGrid(Command):
    value: Optional[bool] = None  # None flips


@dataclass
class ToggleSnap(Command):
    value: Optional[bool] = None  # None flips


@dataclass
class SetGridSize(Command):
    size: float


@dataclass
class MarkSaved(Command):
    """Signals that an external save succeeded; clears dirty."""
