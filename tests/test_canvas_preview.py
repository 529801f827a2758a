from canvas_preview import compute_boxes, render_canvas, save_canvas
from layout_import import layout_from_template
from layout_state import EditorState, SetZoom, SelectBlock, UpdateBlock, reduce


def _state():
    layout = layout_from_template({
        "header": {"show_logo": True, "show_company_info": True},
        "footer": {"show_signature": True},
    })
    return EditorState.fresh(layout)


def test_zoom_scales_canvas():
    s = _state()
    full = compute_boxes(s, px_per_mm=2.0)
    half = compute_boxes(reduce(s, SetZoom(50)), px_per_mm=2.0)
    assert full.size[0] == 420
    assert half.size[0] == 210
    assert half.size[1] * 2 == full.size[1] or abs(half.size[1] * 2 - full.size[1]) <= 1


def test_blocks_flow_by_width_and_wrap():
    geo = compute_boxes(_state(), px_per_mm=1.0)
    logo = geo.blocks["block-logo"]
    company = geo.blocks["block-company"]
    title = geo.blocks["block-title"]
    doc_info = geo.blocks["block-doc-info"]
    # logo (25%) and company (40%) share a row
    assert logo[1] == company[1]
    assert logo[2] <= company[0]
    # title (x=60%, 40%) no longer fits: next row, still at 60%
    assert title[1] > company[1]
    assert title[0] == 10 + 114
    # doc-info stacks under the title at the same x
    assert doc_info[1] > title[1]
    assert doc_info[0] == title[0]
    # every block sits inside its section
    header = geo.sections["header"]
    for bid in ("block-logo", "block-client"):
        box = geo.blocks[bid]
        assert header[1] <= box[1] and box[3] <= header[3]


def test_render_and_save(tmp_path):
    s = reduce(_state(), SelectBlock("block-logo"))
    img = render_canvas(s, px_per_mm=1.0)
    assert img.mode == "RGB"
    assert img.size == compute_boxes(s, px_per_mm=1.0).size
    out = save_canvas(s, tmp_path / "canvas.png", px_per_mm=1.0)
    assert out.exists() and out.stat().st_size > 0


def test_negative_geometry_renders_as_empty_box():
    s = reduce(_state(), UpdateBlock("block-logo", {"position": {"width": -10, "height": -5}}))
    geo = compute_boxes(s, px_per_mm=1.0)
    x0, y0, x1, y1 = geo.blocks["block-logo"]
    assert x1 >= x0 and y1 >= y0
    img = render_canvas(s, px_per_mm=1.0)
    assert img.size == geo.size
