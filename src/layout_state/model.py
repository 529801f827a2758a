from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union
import uuid


Height = Union[str, float]

SECTION_IDS = ("header", "body", "footer")

DEFAULT_GLOBAL_STYLES: Dict[str, str] = {
    "font_family": "Helvetica, Arial, sans-serif",
    "primary_color": "#3b82f6",
    "secondary_color": "#64748b",
    "text_color": "#1e293b",
    "background_color": "#ffffff",
}


@dataclass
class Position:
    x: float = 0
    y: float = 0
    width: float = 100        # % of container width
    height: Height = "auto"   # "auto" or document-length units

    def merged(self, partial: Dict[str, Any]) -> "Position":
        """Shallow merge; keys that are not position fields are ignored."""
        known = {k: v for k, v in partial.items() if k in ("x", "y", "width", "height")}
        return replace(self, **known)


@dataclass
class Block:
    id: str
    type: str
    position: Position = field(default_factory=Position)
    style: Dict[str, Any] = field(default_factory=dict)
    config: Dict[str, Any] = field(default_factory=dict)
    locked: bool = False
    visible: bool = True


@dataclass
class Section:
    id: str
    name: str
    blocks: List[Block] = field(default_factory=list)
    height: Height = "auto"


@dataclass
class LayoutDocument:
    sections: List[Section] = field(default_factory=list)
    global_styles: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_GLOBAL_STYLES))

    def find_section(self, section_id: str) -> Optional[Section]:
        for sec in self.sections:
            if sec.id == section_id:
                return sec
        return None

    def find_block(self, block_id: Optional[str]) -> Tuple[Optional[Section], Optional[Block]]:
        """Locate a block anywhere in the document; (None, None) when absent."""
        if block_id is None:
            return None, None
        for sec in self.sections:
            for blk in sec.blocks:
                if blk.id == block_id:
                    return sec, blk
        return None, None

    def find_block_by_type(self, block_type: str) -> Optional[Block]:
        """First block of this type in display order."""
        for blk in self.iter_blocks():
            if blk.type == block_type:
                return blk
        return None

    def iter_blocks(self) -> Iterator[Block]:
        for sec in self.sections:
            yield from sec.blocks

    def block_ids(self) -> List[str]:
        return [b.id for b in self.iter_blocks()]


def default_layout() -> LayoutDocument:
    """Empty header/body/footer layout with the default global styles."""
    return LayoutDocument(
        sections=[
            Section(id="header", name="Header"),
            Section(id="body", name="Body"),
            Section(id="footer", name="Footer"),
        ],
        global_styles=dict(DEFAULT_GLOBAL_STYLES),
    )


def new_block_id(existing: Iterable[str] = ()) -> str:
    taken = set(existing)
    while True:
        candidate = f"block-{uuid.uuid4().hex[:12]}"
        if candidate not in taken:
            return candidate


@dataclass
class EditorState:
    layout: LayoutDocument = field(default_factory=default_layout)
    selected_block_id: Optional[str] = None
    history: List[LayoutDocument] = field(default_factory=list)
    history_index: int = 0
    is_dirty: bool = False
    # view-only, outside undo scope
    zoom: float = 100
    show_grid: bool = True
    snap_to_grid: bool = True
    grid_size: float = 5

    def __post_init__(self) -> None:
        if not self.history:
            self.history = [self.layout]
            self.history_index = 0

    @classmethod
    def fresh(cls, layout: Optional[LayoutDocument] = None, **view: Any) -> "EditorState":
        """New editing session seeded from `layout` (or the default layout)."""
        seed = layout if layout is not None else default_layout()
        return cls(layout=seed, history=[seed], history_index=0, **view)

    @property
    def can_undo(self) -> bool:
        return self.history_index > 0

    @property
    def can_redo(self) -> bool:
        return self.history_index < len(self.history) - 1

    def selected_block(self) -> Optional[Block]:
        """Stale ids simply yield None."""
        _, blk = self.layout.find_block(self.selected_block_id)
        return blk
