# tests/test_export_success.py
import json

from layout_export import Exporter, layout_to_dict
from layout_import import layout_from_dict, layout_from_template
from layout_state import Store, EditorState

TEMPLATE = {
    "colors": {"primary": "#0f766e", "secondary": "#475569", "text": "#111827", "background": "#ffffff"},
    "fonts": {"family": "Inter"},
    "header": {"show_logo": True, "logo_width": 120, "show_company_info": True,
               "show_tax_id": True, "show_address": False, "show_contact": True, "show_web": True},
    "client": {"position": "right", "show_heading": True, "show_code": True},
    "lines": {"show_description": True, "show_quantity": True, "show_price": True, "show_subtotal": True,
              "zebra_rows": False},
    "totals": {"show_discount": False},
    "footer": {"show_payment_method": True, "show_due_dates": False, "show_terms": True, "show_signature": True},
    "texts": {"document_title": "QUOTE", "payment_terms": "30 days"},
}


def test_template_seed_and_commit_payload(registry, tmp_path):
    layout = layout_from_template(TEMPLATE)
    header_ids = [b.id for b in layout.find_section("header").blocks]
    assert header_ids == ["block-logo", "block-company", "block-title", "block-doc-info", "block-client"]
    assert [b.id for b in layout.find_section("footer").blocks] == ["block-payment", "block-terms", "block-signature"]
    assert layout.find_block("block-client")[1].position.x == 55
    assert layout.find_block("block-title")[1].config == {"title": "QUOTE"}
    assert layout.global_styles["font_family"] == "Inter"

    store = Store(state=EditorState.fresh(layout), registry=registry)
    table = "block-table"
    store.update_config(table, "columns", ["reference", "description", "quantity", "price", "subtotal"])
    bank = store.add_block("footer", "bank")
    store.update_global_styles(primary_color="#b91c1c")

    xp = Exporter(registry)
    ok, errs = xp.validate(store.layout)
    assert ok, f"Expected valid layout, got errors: {errs}"

    data = xp.build(store.layout)
    assert data["colors"]["primary"] == "#b91c1c"
    assert data["fonts"] == {"family": "Inter"}
    assert data["header"]["logo_width"] == 120
    assert data["header"]["show_address"] is False
    assert data["client"]["show_code"] is True
    assert data["lines"]["show_reference"] is True
    assert data["lines"]["show_unit"] is False
    assert data["lines"]["zebra_rows"] is False
    assert data["totals"]["show_discount"] is False
    assert data["totals"]["show_total"] is True
    assert data["footer"] == {
        "show_payment_method": True,
        "show_due_dates": False,
        "show_bank_details": True,
        "show_signature": True,
        "show_terms": True,
    }

    # removing the bank block flips the footer flag back
    store.remove_block(bank)
    assert xp.build(store.layout)["footer"]["show_bank_details"] is False

    out_path = tmp_path / xp.filename("Quote: A4", "{name}.json").split("/")[-1]
    out_path.write_text(xp.dumps(data, pretty=True), encoding="utf-8")
    assert json.loads(out_path.read_text(encoding="utf-8"))["fonts"]["family"] == "Inter"


def test_empty_layout_uses_template_defaults(registry):
    data = Exporter(registry).build(EditorState.fresh().layout)
    assert data["header"]["show_logo"] is True
    assert data["header"]["show_company_info"] is False
    assert data["lines"]["show_description"] is False
    assert data["footer"]["show_payment_method"] is False
    assert data["colors"]["background"] == "#ffffff"


def test_layout_dict_round_trip(registry):
    layout = layout_from_template(TEMPLATE)
    restored = layout_from_dict(json.loads(json.dumps(layout_to_dict(layout))))
    assert restored == layout


def test_filename_sanitizes_and_places(registry, tmp_path):
    xp = Exporter(registry)
    assert xp.filename('inv/oice:"A"', directory=tmp_path) == str(tmp_path / "invoiceA_template.json")
    assert xp.filename("x", "out/{name}.json") == "out/x.json"


def test_schema_lists_block_configs(registry):
    schema = Exporter(registry).schema()
    configs = schema["definitions"]["block_configs"]
    assert configs["qr-code"]["properties"]["size"] == {"type": "integer", "minimum": 40, "maximum": 120}
    assert configs["line-items-table"]["properties"]["columns"]["type"] == "array"
