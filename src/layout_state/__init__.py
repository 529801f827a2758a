"""
Public API for the layout_state package.

Import from here everywhere else, so you can refactor internals freely:
    from layout_state import (
        EditorState, LayoutDocument, Section, Block, Position,
        AddBlock, UpdateBlock, RemoveBlock, MoveBlock, ReorderBlocks, ...
        reduce, apply_command, Store
    )
"""
from .model import (
    EditorState, LayoutDocument, Section, Block, Position,
    SECTION_IDS, DEFAULT_GLOBAL_STYLES, default_layout, new_block_id,
)
from .commands import (
    Command,
    SetLayout, SelectBlock, AddBlock, UpdateBlock, RemoveBlock, MoveBlock,
    CommitMove, ReorderBlocks, UpdateGlobalStyles, Undo, Redo,
    SetZoom, ToggleGrid, ToggleSnap, SetGridSize, MarkSaved,
)
from .protocol import BlockRegistryProtocol
from .reducer import reduce, apply_command, ReduceResult, ZOOM_MIN, ZOOM_MAX
from .store import Store

__all__ = [
    # model
    "EditorState", "LayoutDocument", "Section", "Block", "Position",
    "SECTION_IDS", "DEFAULT_GLOBAL_STYLES", "default_layout", "new_block_id",
    # commands
    "Command",
    "SetLayout", "SelectBlock", "AddBlock", "UpdateBlock", "RemoveBlock", "MoveBlock",
    "CommitMove", "ReorderBlocks", "UpdateGlobalStyles", "Undo", "Redo",
    "SetZoom", "ToggleGrid", "ToggleSnap", "SetGridSize", "MarkSaved",
    # protocol & reducer & store
    "BlockRegistryProtocol", "reduce", "apply_command", "ReduceResult",
    "ZOOM_MIN", "ZOOM_MAX", "Store",
]
