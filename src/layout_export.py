# src/layout_export.py
from __future__ import annotations

import json
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from layout_state import LayoutDocument, Block, SECTION_IDS
from block_registry import BlockRegistry, LINE_COLUMNS
from block_registry.normalize import normalize_color


# ---------------------------
# Public Facade
# ---------------------------

class Exporter:
    """
    Turn a LayoutDocument into the template payload handed to the save
    routine, validate layouts against the block registry, and produce a
    filename from a template.

    Typical usage:
        xp = Exporter(registry)
        ok, errors = xp.validate(store.layout)
        if ok:
            data = xp.build(store.layout)         # dict
            text = xp.dumps(data, pretty=True)
            out_path = xp.filename("Invoice A4", "{name}_template.json")
            Path(out_path).write_text(text, encoding="utf-8")
    """

    def __init__(self, registry: BlockRegistry):
        self.registry = registry

    # ---- Build commit payload (dict) ----
    def build(self, layout: LayoutDocument) -> Dict[str, Any]:
        return _build_template_payload(layout)

    # ---- Validate against registry specs ----
    def validate(self, layout: LayoutDocument) -> Tuple[bool, List[str]]:
        return _validate_layout(layout, self.registry)

    # ---- JSON text ----
    def dumps(self, data: Dict[str, Any], pretty: bool = True) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False) if pretty else json.dumps(data, separators=(",", ":"))

    # ---- Filename from template ----
    def filename(self, name: str, template: str = "{name}_template.json", directory: Optional[str | Path] = None) -> str:
        out = template.format(name=_sanitize_filename(name))
        # if no directory, place under `directory` (or cwd)
        if os.path.dirname(out):
            return out
        return str(Path(directory or Path.cwd()) / out)

    # ---- (Optional) JSON Schema (informational) ----
    def schema(self) -> Dict[str, Any]:
        return _build_schema_from_registry(self.registry)


# ---------------------------
# Layout <-> plain dict
# ---------------------------

def layout_to_dict(layout: LayoutDocument) -> Dict[str, Any]:
    """Plain JSON-ready form of the in-memory document shape."""
    return asdict(layout)


# ---------------------------
# Commit payload construction
# ---------------------------

def _build_template_payload(layout: LayoutDocument) -> Dict[str, Any]:
    """
    Projects the layout onto the persisted template shape: global styles plus
    the configuration of the first block of each relevant kind. Absent blocks
    fall back to the template defaults (or to "hidden" for optional blocks).
    """
    gs = layout.global_styles
    return {
        "colors": {
            "primary": gs.get("primary_color"),
            "secondary": gs.get("secondary_color"),
            "text": gs.get("text_color"),
            "background": gs.get("background_color"),
        },
        "fonts": {
            "family": gs.get("font_family"),
        },
        "header": _header_config(layout),
        "client": _client_config(layout),
        "lines": _lines_config(layout),
        "totals": _totals_config(layout),
        "footer": _footer_config(layout),
    }


def _cfg(block: Optional[Block], key: str, default: Any) -> Any:
    if block is None:
        return default
    value = block.config.get(key)
    return default if value is None else value


def _header_config(layout: LayoutDocument) -> Dict[str, Any]:
    logo = layout.find_block_by_type("logo")
    company = layout.find_block_by_type("company-info")
    return {
        "show_logo": _cfg(logo, "show_logo", True),
        "logo_width": _cfg(logo, "max_width", 150),
        "show_company_info": company is not None,
        "show_tax_id": _cfg(company, "show_tax_id", True),
        "show_address": _cfg(company, "show_address", True),
        "show_contact": _cfg(company, "show_contact", True),
        "show_web": _cfg(company, "show_web", False),
    }


def _client_config(layout: LayoutDocument) -> Dict[str, Any]:
    client = layout.find_block_by_type("client-info")
    return {
        "show_heading": _cfg(client, "show_heading", True),
        "show_code": _cfg(client, "show_code", False),
        "show_tax_id": _cfg(client, "show_tax_id", True),
        "show_address": _cfg(client, "show_address", True),
        "show_contact": _cfg(client, "show_contact", True),
    }


def _lines_config(layout: LayoutDocument) -> Dict[str, Any]:
    table = layout.find_block_by_type("line-items-table")
    columns = _cfg(table, "columns", [])
    out: Dict[str, Any] = {f"show_{col}": col in columns for col in LINE_COLUMNS}
    out["zebra_rows"] = _cfg(table, "zebra_rows", True)
    return out


def _totals_config(layout: LayoutDocument) -> Dict[str, Any]:
    totals = layout.find_block_by_type("totals")
    return {
        key: _cfg(totals, key, True)
        for key in ("show_subtotal", "show_discount", "show_tax_base", "show_tax", "show_total", "highlight_total")
    }


def _footer_config(layout: LayoutDocument) -> Dict[str, Any]:
    payment = layout.find_block_by_type("payment-method")
    return {
        "show_payment_method": payment is not None,
        "show_due_dates": _cfg(payment, "show_due_dates", True),
        "show_bank_details": layout.find_block_by_type("bank-details") is not None,
        "show_signature": layout.find_block_by_type("signature") is not None,
        "show_terms": layout.find_block_by_type("terms") is not None,
    }


def _sanitize_filename(s: str) -> str:
    return "".join(c for c in s if c not in r'\/:*?"<>|').strip() or "layout"


# ---------------------------
# Validation
# ---------------------------

def _validate_layout(layout: LayoutDocument, registry: BlockRegistry) -> Tuple[bool, List[str]]:
    """
    Structural checks (sections, unique ids, known block types) plus every
    config value run through the registry normalisers.
    Return (ok, errors).
    """
    errors: List[str] = []

    section_ids = [sec.id for sec in layout.sections]
    for sid in section_ids:
        if sid not in SECTION_IDS:
            errors.append(f"Unknown section '{sid}'")
    for sid in SECTION_IDS:
        if section_ids.count(sid) > 1:
            errors.append(f"Section '{sid}' appears {section_ids.count(sid)} times")

    seen: Dict[str, str] = {}
    for sec in layout.sections:
        for bi, blk in enumerate(sec.blocks, start=1):
            where = f"Section {sec.id} Block {bi} ({blk.id})"
            if blk.id in seen:
                errors.append(f"{where}: duplicate id, already used in section {seen[blk.id]}")
            else:
                seen[blk.id] = sec.id

            if not registry.get_spec(blk.type):
                errors.append(f"{where}: unknown block type '{blk.type}'")
                continue

            for key, value in blk.config.items():
                ok, _, err = registry.validate_config(blk.type, key, value)
                if not ok:
                    errors.append(f"{where}: invalid config '{key}': {err}")

            height = blk.position.height
            if height != "auto" and not isinstance(height, (int, float)):
                errors.append(f"{where}: height must be 'auto' or a number, got {height!r}")

    for key, value in layout.global_styles.items():
        if key.endswith("_color"):
            ok, _, err = normalize_color(value)
            if not ok:
                errors.append(f"Global style '{key}': {err}")

    return (len(errors) == 0), errors


# ---------------------------
# Schema (informational)
# ---------------------------

def _build_schema_from_registry(registry: BlockRegistry) -> Dict[str, Any]:
    """
    Produces a JSON-Schema-like dict (draft-07 flavored) of the per-type block
    config, mainly for tooling/IDE hints. Not used for validation.
    """
    configs: Dict[str, Any] = {}
    for type_id, spec in registry.all_specs().items():
        props: Dict[str, Any] = {}
        for key, fdef in spec.get("fields", {}).items():
            ftype = fdef.get("type", "text")
            if ftype == "enum":
                node: Dict[str, Any] = {"type": "string", "enum": list(fdef.get("choices", []))}
            elif ftype == "multi":
                node = {"type": "array", "items": {"type": "string", "enum": list(fdef.get("choices", []))}, "uniqueItems": True}
            elif ftype == "bool":
                node = {"type": "boolean"}
            elif ftype in ("int", "number"):
                node = {"type": "integer" if ftype == "int" else "number"}
                if "min" in fdef: node["minimum"] = fdef["min"]
                if "max" in fdef: node["maximum"] = fdef["max"]
            else:
                node = {"type": "string"}
                if "max_length" in fdef: node["maxLength"] = fdef["max_length"]
            props[key] = node
        configs[type_id] = {
            "type": "object",
            "properties": props,
            "additionalProperties": False,
        }

    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "Document layout",
        "type": "object",
        "properties": {
            "global_styles": {"type": "object", "additionalProperties": {"type": "string"}},
            "sections": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "string", "enum": list(SECTION_IDS)},
                        "name": {"type": "string"},
                        "height": {"type": ["string", "number"]},
                        "blocks": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "properties": {
                                    "id": {"type": "string"},
                                    "type": {"type": "string", "enum": registry.type_ids()},
                                    "locked": {"type": "boolean"},
                                    "visible": {"type": "boolean"},
                                    # config shape depends on "type"; see definitions.block_configs
                                    "config": {"type": "object"},
                                },
                                "required": ["id", "type"],
                            },
                        },
                    },
                    "required": ["id", "blocks"],
                },
            },
        },
        "required": ["sections"],
        "definitions": {
            "block_configs": configs,
        },
    }
