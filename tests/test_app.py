import json

import pytest

from layout_app import load_config, main, run_script, DEFAULT_CONFIG


def test_load_config_shallow_merges_yaml(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("editor:\n  zoom: 150\nexport:\n  pretty: false\n", encoding="utf-8")
    cfg = load_config(str(cfg_path))
    assert cfg["editor"]["zoom"] == 150
    assert cfg["editor"]["grid_size"] == 5          # untouched key kept
    assert cfg["export"]["pretty"] is False
    assert DEFAULT_CONFIG["editor"]["zoom"] == 100  # defaults not mutated


def test_load_config_missing_file_uses_defaults(tmp_path):
    assert load_config(str(tmp_path / "nope.yaml")) == DEFAULT_CONFIG


def test_run_script_names_and_history(store):
    names = run_script(store, [
        {"op": "add", "section": "header", "type": "logo", "as": "logo"},
        {"op": "width", "block": "$logo", "value": 42},
        {"op": "config", "block": "$logo", "key": "show_logo", "value": "no"},
        {"op": "duplicate", "block": "$logo", "as": "copy"},
        {"op": "undo"},
    ])
    assert set(names) == {"logo", "copy"}
    assert store.layout.block_ids() == [names["logo"]]
    blk = store.layout.find_block(names["logo"])[1]
    assert blk.position.width == 40 and blk.config["show_logo"] is False
    assert store.can_redo is True


def test_run_script_reports_bad_actions(store):
    with pytest.raises(ValueError, match="action 1"):
        run_script(store, [{"op": "teleport"}])
    with pytest.raises(ValueError, match="unknown block reference"):
        run_script(store, [{"op": "remove", "block": "$ghost"}])
    with pytest.raises(ValueError, match="missing"):
        run_script(store, [{"op": "add", "type": "logo"}])


def test_main_writes_payload_layout_and_preview(tmp_path):
    template = tmp_path / "template.json"
    template.write_text(json.dumps({"header": {"show_logo": True}, "fonts": {"family": "Inter"}}), encoding="utf-8")
    script = tmp_path / "actions.json"
    script.write_text(json.dumps([
        {"op": "add", "section": "footer", "type": "payment", "as": "pay"},
        {"op": "global_styles", "styles": {"primary_color": "#000000"}},
        {"op": "zoom", "value": 50},
    ]), encoding="utf-8")
    out = tmp_path / "payload.json"
    raw = tmp_path / "layout.json"
    png = tmp_path / "canvas.png"

    rc = main([str(template), "--script", str(script), "--out", str(out),
               "--save-layout", str(raw), "--preview", str(png)])

    assert rc == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["colors"]["primary"] == "#000000"
    assert payload["fonts"]["family"] == "Inter"
    assert payload["footer"]["show_payment_method"] is True
    layout = json.loads(raw.read_text(encoding="utf-8"))
    assert [s["id"] for s in layout["sections"]] == ["header", "body", "footer"]
    assert png.exists()


def test_main_rejects_invalid_script(tmp_path):
    script = tmp_path / "actions.json"
    script.write_text(json.dumps({"op": "undo"}), encoding="utf-8")
    assert main(["--script", str(script), "--out", str(tmp_path / "p.json")]) == 2


def test_main_refuses_invalid_layout(tmp_path):
    layout = tmp_path / "layout.json"
    layout.write_text(json.dumps({"sections": [
        {"id": "body", "blocks": [{"id": "a", "type": "logo"}, {"id": "a", "type": "logo"}]},
    ]}), encoding="utf-8")
    out = tmp_path / "p.json"
    assert main(["--layout", str(layout), "--out", str(out)]) == 1
    assert not out.exists()


def test_load_config_null_section_keeps_defaults(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("plugins: null\npreview:\n", encoding="utf-8")
    cfg = load_config(str(cfg_path))
    assert cfg["plugins"] == DEFAULT_CONFIG["plugins"]
    assert cfg["preview"]["px_per_mm"] == 2.0


def test_load_config_rejects_non_mapping_section(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("editor: 3\n", encoding="utf-8")
    with pytest.raises(ValueError, match="editor"):
        load_config(str(cfg_path))
    assert main(["--config", str(cfg_path), "--out", str(tmp_path / "p.json")]) == 2


def test_main_reports_unwritable_output(tmp_path):
    out = tmp_path / "missing" / "payload.json"
    assert main(["--out", str(out)]) == 2
    assert not out.exists()
