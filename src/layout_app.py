# src/layout_app.py
from __future__ import annotations


import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


# local imports
from block_registry import BlockRegistry
from layout_state import EditorState, LayoutDocument, ReorderBlocks, Store, default_layout
from layout_export import Exporter, layout_to_dict
from layout_import import layout_from_dict, layout_from_template
from canvas_preview import save_canvas

logger = logging.getLogger("layout_app")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# ---------------------------
# Config loading
# ---------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "zoom": 100,
        "show_grid": True,
        "snap_to_grid": True,
        "grid_size": 5,
    },
    "export": {
        "filename_template": "{name}_template.json",
        "pretty": True,
    },
    "plugins": {
        "dir": None,   # folder of *.yaml block specs
    },
    "preview": {
        "px_per_mm": 2.0,
    },
}

def load_config(path: Optional[str]) -> Dict[str, Any]:
    cfg = {k: dict(v) for k, v in DEFAULT_CONFIG.items()}
    if path:
        p = Path(path)
        if not p.exists():
            logger.warning("config not found: %s (using defaults)", p)
            return cfg
        with p.open("r", encoding="utf-8") as f:
            user = yaml.safe_load(f) or {}
        if not isinstance(user, dict):
            raise ValueError(f"{p}: config must be a mapping")
        # shallow merge per top-level section
        for k, v in user.items():
            if k in cfg and isinstance(cfg[k], dict):
                if v is None:
                    continue
                if not isinstance(v, dict):
                    raise ValueError(f"{p}: section '{k}' must be a mapping")
                cfg[k].update(v)
            else:
                cfg[k] = v
    return cfg


def setup_logging(verbose: bool = False) -> None:
    """Console handler on the root logger; -v switches to DEBUG."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not any(getattr(h, "_layout_app", False) for h in root.handlers):
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        console._layout_app = True  # type: ignore[attr-defined]
        root.addHandler(console)


# ---------------------------
# Action scripts
# ---------------------------

def run_script(store: Store, actions: List[Dict[str, Any]]) -> Dict[str, str]:
    """
    Replay UI actions against the store, e.g.:
        [{"op": "add", "section": "header", "type": "logo", "as": "logo"},
         {"op": "width", "block": "$logo", "value": 40},
         {"op": "undo"}]
    Blocks created with "as" can be referenced later as "$name".
    Returns the name → block id table.
    """
    names: Dict[str, str] = {}

    def ref(value: Any) -> Any:
        if isinstance(value, str) and value.startswith("$"):
            if value[1:] not in names:
                raise ValueError(f"unknown block reference {value}")
            return names[value[1:]]
        return value

    for i, action in enumerate(actions, start=1):
        if not isinstance(action, dict) or "op" not in action:
            raise ValueError(f"action {i}: expected an object with 'op'")
        op = action["op"]
        try:
            block = ref(action.get("block"))
            if op in ("add", "duplicate"):
                new_id = (store.add_block(action["section"], action["type"]) if op == "add"
                          else store.duplicate_block(block))
                if new_id and action.get("as"):
                    names[action["as"]] = new_id
            elif op == "select":
                store.select(block)
            elif op == "update":
                store.update_block(block, action.get("updates", {}))
            elif op == "config":
                store.update_config(block, action["key"], action.get("value"))
            elif op == "style":
                store.update_style(block, action["key"], action.get("value"))
            elif op == "width":
                store.set_block_width(block, action["value"])
            elif op == "x":
                store.set_block_x(block, action["value"])
            elif op == "lock":
                store.toggle_locked(block)
            elif op == "hide":
                store.toggle_visible(block)
            elif op == "remove":
                store.remove_block(block)
            elif op == "move":
                store.move_block(block, **{k: action[k] for k in ("x", "y", "width", "height") if k in action})
            elif op == "end_drag":
                store.end_drag()
            elif op == "move_over":
                store.move_block_over(block, ref(action["over"]))
            elif op == "reorder":
                store.apply(ReorderBlocks(action["section"], [ref(b) for b in action.get("blocks", [])]))
            elif op == "global_styles":
                store.update_global_styles(**action.get("styles", {}))
            elif op == "undo":
                store.undo()
            elif op == "redo":
                store.redo()
            elif op == "zoom":
                store.set_zoom(action["value"])
            elif op == "grid":
                store.toggle_grid(action.get("value"))
            elif op == "snap":
                store.toggle_snap(action.get("value"))
            elif op == "grid_size":
                store.set_grid_size(action["value"])
            else:
                raise ValueError(f"unknown op '{op}'")
        except KeyError as exc:
            raise ValueError(f"action {i} ({op}): missing {exc}") from exc
        except ValueError as exc:
            raise ValueError(f"action {i} ({op}): {exc}") from exc
    return names


# ---------------------------
# App bootstrap
# ---------------------------

def _read_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _seed_layout(args: argparse.Namespace) -> LayoutDocument:
    if args.layout:
        return layout_from_dict(_read_json(args.layout))
    if args.template:
        return layout_from_template(_read_json(args.template))
    return default_layout()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Document template layout editor")
    parser.add_argument("template", nargs="?", help="Persisted template JSON to seed the editor from")
    parser.add_argument("--layout", help="Layout JSON (as written by --save-layout) to seed from instead")
    parser.add_argument("--script", "-s", help="JSON list of editor actions to replay")
    parser.add_argument("--config", "-c", help="Path to config.yaml", default=None)
    parser.add_argument("--out", "-o", help="Where to write the template payload")
    parser.add_argument("--name", default="layout", help="Template name used for the default output filename")
    parser.add_argument("--save-layout", help="Also write the raw layout JSON here")
    parser.add_argument("--preview", help="Write a PNG wireframe of the canvas here")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        config = load_config(args.config)
        registry = BlockRegistry(plugins_dir=config["plugins"].get("dir"))

        editor = config["editor"]
        store = Store(
            state=EditorState.fresh(
                _seed_layout(args),
                show_grid=bool(editor.get("show_grid", True)),
                snap_to_grid=bool(editor.get("snap_to_grid", True)),
                grid_size=editor.get("grid_size", 5),
            ),
            registry=registry,
        )
        store.set_zoom(editor.get("zoom", 100))

        if args.script:
            actions = _read_json(args.script)
            if not isinstance(actions, list):
                raise ValueError(f"{args.script}: expected a JSON list of actions")
            run_script(store, actions)
            logger.info("replayed %d actions (undo=%s, redo=%s)", len(actions), store.can_undo, store.can_redo)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 2

    exporter = Exporter(registry)
    ok, errors = exporter.validate(store.layout)
    if not ok:
        for err in errors:
            logger.error("invalid layout: %s", err)
        return 1

    pretty = bool(config["export"].get("pretty", True))
    try:
        out_path = Path(args.out or exporter.filename(args.name, config["export"].get("filename_template", "{name}_template.json")))
        out_path.write_text(exporter.dumps(exporter.build(store.layout), pretty=pretty), encoding="utf-8")
        store.mark_saved()
        logger.info("template saved: %s", out_path)

        if args.save_layout:
            Path(args.save_layout).write_text(exporter.dumps(layout_to_dict(store.layout), pretty=pretty), encoding="utf-8")
            logger.info("layout saved: %s", args.save_layout)

        if args.preview:
            save_canvas(store.state, args.preview, float(config["preview"].get("px_per_mm", 2.0)))
            logger.info("preview written: %s", args.preview)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
