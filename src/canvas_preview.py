# src/canvas_preview.py
"""
Wireframe of the editor canvas: an A4-wide page scaled by the editor zoom,
optional grid, sections stacked top to bottom and blocks flowed left to right
by their percentage width. Meant for quick visual checks of a layout, not for
document rendering.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

from PIL import Image, ImageColor, ImageDraw

from layout_state import EditorState, Block

PAGE_WIDTH_MM = 210
PAGE_HEIGHT_MM = 297
MARGIN_MM = 10
LABEL_MM = 6           # section name strip
SECTION_GAP_MM = 4
MIN_SECTION_MM = 20
AUTO_BLOCK_MM = 16     # height used for "auto" blocks
BLOCK_ALPHA = 60
HIDDEN_ALPHA = 24

Box = Tuple[int, int, int, int]


@dataclass
class CanvasLayout:
    size: Tuple[int, int]
    sections: Dict[str, Box]
    blocks: Dict[str, Box]


def compute_boxes(state: EditorState, px_per_mm: float = 2.0) -> CanvasLayout:
    """Pixel boxes of every section and block at the current zoom."""
    scale = px_per_mm * state.zoom / 100.0
    content_w = PAGE_WIDTH_MM - 2 * MARGIN_MM
    sections: Dict[str, Box] = {}
    blocks: Dict[str, Box] = {}

    y_mm = MARGIN_MM
    for sec in state.layout.sections:
        top = y_mm
        y_mm += LABEL_MM
        cursor = 0.0        # percent of content width used in the current row
        row_h = 0.0
        for blk in sec.blocks:
            width = max(_num(blk.position.width, 100), 0.0)
            x = min(max(_num(blk.position.x, 0), 0), 100)
            start = max(cursor, x)
            if cursor > 0 and start + width > 100:
                y_mm += row_h
                row_h = 0.0
                start = x
            cursor = start
            h = _block_height(blk)
            x0 = MARGIN_MM + content_w * cursor / 100.0
            x1 = x0 + content_w * max(min(width, 100 - cursor), 0.0) / 100.0
            blocks[blk.id] = _px((x0, y_mm, x1, y_mm + h), scale)
            cursor += width
            row_h = max(row_h, h)
        y_mm += row_h
        bottom = max(y_mm, top + MIN_SECTION_MM)
        sections[sec.id] = _px((MARGIN_MM / 2, top, PAGE_WIDTH_MM - MARGIN_MM / 2, bottom), scale)
        y_mm = bottom + SECTION_GAP_MM

    height_mm = max(PAGE_HEIGHT_MM, y_mm + MARGIN_MM)
    size = (round(PAGE_WIDTH_MM * scale), round(height_mm * scale))
    return CanvasLayout(size=size, sections=sections, blocks=blocks)


def render_canvas(state: EditorState, px_per_mm: float = 2.0) -> Image.Image:
    geo = compute_boxes(state, px_per_mm)
    gs = state.layout.global_styles
    background = _rgb(gs.get("background_color"), (255, 255, 255))
    primary = _rgb(gs.get("primary_color"), (59, 130, 246))
    secondary = _rgb(gs.get("secondary_color"), (100, 116, 139))
    text = _rgb(gs.get("text_color"), (30, 41, 59))

    base = Image.new("RGBA", geo.size, background + (255,))
    draw = ImageDraw.Draw(base)

    if state.show_grid and state.grid_size and state.grid_size > 0:
        step = state.grid_size * px_per_mm * state.zoom / 100.0
        if step >= 2:  # too dense to be useful below that
            _draw_grid(draw, geo.size, step, (226, 232, 240, 255))

    for sec in state.layout.sections:
        x0, y0, x1, y1 = geo.sections[sec.id]
        draw.rectangle([x0, y0, x1, y1], outline=secondary + (255,), width=1)
        draw.text((x0 + 4, y0 + 2), sec.name, fill=secondary + (255,))

    overlay = Image.new("RGBA", geo.size, (0, 0, 0, 0))
    odraw = ImageDraw.Draw(overlay)
    for blk in state.layout.iter_blocks():
        alpha = BLOCK_ALPHA if blk.visible else HIDDEN_ALPHA
        odraw.rectangle(geo.blocks[blk.id], fill=primary + (alpha,))
    out = Image.alpha_composite(base, overlay)

    draw = ImageDraw.Draw(out)
    for blk in state.layout.iter_blocks():
        box = geo.blocks[blk.id]
        if blk.id == state.selected_block_id:
            draw.rectangle(box, outline=primary + (255,), width=3)
        elif blk.locked:
            draw.rectangle(box, outline=secondary + (255,), width=2)
        else:
            draw.rectangle(box, outline=text + (160,), width=1)
        label = blk.type if blk.visible else f"{blk.type} (hidden)"
        draw.text((box[0] + 3, box[1] + 2), label, fill=text + (255,))

    return out.convert("RGB")


def save_canvas(state: EditorState, path: str | Path, px_per_mm: float = 2.0) -> Path:
    p = Path(path)
    render_canvas(state, px_per_mm).save(p)
    return p


# ----- helpers -----

def _draw_grid(draw: ImageDraw.ImageDraw, size: Tuple[int, int], step: float, color) -> None:
    w, h = size
    x = step
    while x < w:
        draw.line([(round(x), 0), (round(x), h)], fill=color, width=1)
        x += step
    y = step
    while y < h:
        draw.line([(0, round(y)), (w, round(y))], fill=color, width=1)
        y += step


def _block_height(blk: Block) -> float:
    h = blk.position.height
    return max(float(h), 0.0) if isinstance(h, (int, float)) and not isinstance(h, bool) else AUTO_BLOCK_MM


def _num(value, default: float) -> float:
    return float(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else default


def _px(box_mm: Tuple[float, float, float, float], scale: float) -> Box:
    return tuple(round(v * scale) for v in box_mm)  # type: ignore[return-value]


def _rgb(value, fallback: Tuple[int, int, int]) -> Tuple[int, int, int]:
    try:
        return ImageColor.getrgb(value)[:3]
    except (ValueError, AttributeError, TypeError):
        return fallback
