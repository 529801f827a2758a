# src/layout_import.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from layout_state import (
    LayoutDocument, Section, Block, Position, DEFAULT_GLOBAL_STYLES, default_layout,
)
from block_registry import LINE_COLUMNS


def layout_from_dict(data: Dict[str, Any]) -> LayoutDocument:
    """Inverse of layout_export.layout_to_dict; missing keys fall back to model defaults."""
    if not isinstance(data, dict):
        raise ValueError("Layout must be a JSON object")
    sections_in = data.get("sections")
    if sections_in is None:
        layout = default_layout()
    else:
        layout = LayoutDocument(sections=[_section_from_dict(s) for s in sections_in])
    styles = dict(DEFAULT_GLOBAL_STYLES)
    styles.update(data.get("global_styles") or {})
    layout.global_styles = styles
    return layout


def _section_from_dict(data: Dict[str, Any]) -> Section:
    if "id" not in data:
        raise ValueError("Section missing 'id'")
    return Section(
        id=data["id"],
        name=data.get("name", data["id"].title()),
        blocks=[_block_from_dict(b) for b in data.get("blocks", [])],
        height=data.get("height", "auto"),
    )


def _block_from_dict(data: Dict[str, Any]) -> Block:
    if "id" not in data or "type" not in data:
        raise ValueError(f"Block needs 'id' and 'type': {data!r}")
    return Block(
        id=data["id"],
        type=data["type"],
        position=Position().merged(data.get("position") or {}),
        style=dict(data.get("style") or {}),
        config=dict(data.get("config") or {}),
        locked=bool(data.get("locked", False)),
        visible=bool(data.get("visible", True)),
    )


# ---------------------------
# Persisted template -> seed layout
# ---------------------------

def layout_from_template(template: Dict[str, Any]) -> LayoutDocument:
    """
    Build the editor's starting layout from a persisted document template
    (the same shape Exporter.build() produces, plus `texts` and
    `client.position`). Block ids are stable per kind ("block-logo", ...).
    """
    header = template.get("header") or {}
    client = template.get("client") or {}
    lines = template.get("lines") or {}
    totals = template.get("totals") or {}
    footer = template.get("footer") or {}
    texts = template.get("texts") or {}
    colors = template.get("colors") or {}
    fonts = template.get("fonts") or {}

    placed: List[Tuple[str, Block]] = []

    def place(section_id: str, block_id: str, block_type: str, width: float, x: float = 0,
              height: Any = "auto", style: Optional[Dict[str, Any]] = None, **config: Any) -> None:
        placed.append((section_id, Block(
            id=block_id,
            type=block_type,
            position=Position(x=x, y=0, width=width, height=height),
            style=style or {},
            config=config,
        )))

    if header.get("show_logo"):
        place("header", "block-logo", "logo", 25,
              show_logo=True, max_width=header.get("logo_width") or 150)
    if header.get("show_company_info"):
        place("header", "block-company", "company-info", 40,
              show_tax_id=header.get("show_tax_id", True),
              show_address=header.get("show_address", True),
              show_contact=header.get("show_contact", True),
              show_web=header.get("show_web", False))

    place("header", "block-title", "document-title", 40, x=60, style={"text_align": "right"},
          title=texts.get("document_title") or "INVOICE")
    place("header", "block-doc-info", "document-info", 40, x=60, style={"text_align": "right"},
          show_number=True, show_date=True, show_due_date=True)

    place("header", "block-client", "client-info", 45,
          x=55 if client.get("position") == "right" else 0,
          show_heading=client.get("show_heading", True),
          show_code=client.get("show_code", False),
          show_tax_id=client.get("show_tax_id", True),
          show_address=client.get("show_address", True),
          show_contact=client.get("show_contact", True))

    columns = [col for col in LINE_COLUMNS if lines.get(f"show_{col}")]
    place("body", "block-table", "line-items-table", 100,
          columns=columns, zebra_rows=lines.get("zebra_rows", True))

    place("body", "block-totals", "totals", 40, x=60, style={"text_align": "right"},
          **{key: totals.get(key, True) for key in (
              "show_subtotal", "show_discount", "show_tax_base",
              "show_tax", "show_total", "highlight_total")})

    if footer.get("show_payment_method"):
        place("footer", "block-payment", "payment-method", 50,
              show_payment_method=True, show_due_dates=footer.get("show_due_dates", True))
    if footer.get("show_bank_details"):
        place("footer", "block-bank", "bank-details", 50, x=50,
              show_bank_account=True, show_iban=True)
    if footer.get("show_terms"):
        place("footer", "block-terms", "terms", 100, text=texts.get("payment_terms") or "")
    if footer.get("show_signature"):
        place("footer", "block-signature", "signature", 30, x=70, height=40,
              show_line=True, caption="Signature and stamp")

    layout = default_layout()
    for sec in layout.sections:
        sec.blocks = [blk for sid, blk in placed if sid == sec.id]

    styles = layout.global_styles
    for key, source in (("primary_color", "primary"), ("secondary_color", "secondary"),
                        ("text_color", "text"), ("background_color", "background")):
        if colors.get(source):
            styles[key] = colors[source]
    if fonts.get("family"):
        styles["font_family"] = fonts["family"]
    return layout
