from __future__ import annotations
from typing import Dict, Any, List, Optional, Tuple, Iterable
from pathlib import Path
import copy

from layout_state.model import Block, Position
from layout_state.protocol import BlockRegistryProtocol
from .normalize import (
    normalize_enum, normalize_multi, normalize_bool, normalize_int,
    normalize_number, normalize_text,
)
from .specs import BUILTIN_SPECS
from .loader import load_plugin_specs

def _lc(x: Any) -> str:
    return str(x).strip().lower()

class BlockRegistry(BlockRegistryProtocol):
    """
    Concrete block catalogue with:
      - Built-in specs for all layout block kinds
      - Optional YAML plugin overrides/extensions
      - Optional extra_specs dict injection (for tests)
    """

    def __init__(self, plugins_dir: Optional[str | Path] = None, extra_specs: Optional[Dict[str, Dict[str, Any]]] = None):
        self._specs: Dict[str, Dict[str, Any]] = {}
        self._aliases: Dict[str, str] = {}

        # 1) built-ins
        for tid, spec in BUILTIN_SPECS.items():
            self._register_spec(tid, spec)

        # 2) caller-provided extra specs (override/extend)
        if extra_specs:
            for tid, spec in extra_specs.items():
                self._register_spec(tid, spec)

        # 3) YAML plugins (override/extend)
        for tid, spec in load_plugin_specs(plugins_dir).items():
            self._register_spec(tid, spec)

        self._rebuild_alias_index()

    # ----- Protocol methods -----

    def resolve_token(self, token: str) -> Optional[str]:
        if not token:
            return None
        return self._aliases.get(_lc(token))

    def get_spec(self, type_id: str) -> Dict[str, Any]:
        return self._specs.get(type_id, {})

    def default_block(self, type_id: str, block_id: str) -> Block:
        """A fresh block of `type_id` carrying the spec's default geometry, style and config."""
        spec = self._specs.get(type_id)
        if not spec:
            raise ValueError(f"Unknown block type: {type_id}")
        return Block(
            id=block_id,
            type=type_id,
            position=Position(**copy.deepcopy(spec["position"])),
            style=copy.deepcopy(spec["style"]),
            config=copy.deepcopy(spec["config"]),
            locked=False,
            visible=True,
        )

    def validate_config(self, type_id: str, key: str, value: Any) -> Tuple[bool, Any, Optional[str]]:
        spec = self._specs.get(type_id)
        if not spec:
            return False, None, f"Unknown block type: {type_id}"
        fdef = spec.get("fields", {}).get(key)
        if not fdef:
            return False, None, f"Unknown config key for {type_id}: {key}"

        ftype = fdef.get("type", "text")
        if ftype == "enum":
            return normalize_enum(value, fdef.get("choices", []))
        if ftype == "multi":
            return normalize_multi(value, fdef.get("choices", []))
        if ftype == "bool":
            return normalize_bool(value)
        if ftype == "int":
            return normalize_int(value, fdef.get("min"), fdef.get("max"))
        if ftype == "number":
            return normalize_number(value, fdef.get("min"), fdef.get("max"))
        if ftype == "text":
            return normalize_text(value, fdef.get("max_length"))

        return False, None, f"Unsupported field type '{ftype}' for {type_id}.{key}"

    # ----- Catalogue queries -----

    def all_specs(self) -> Dict[str, Dict[str, Any]]:
        return dict(self._specs)

    def type_ids(self) -> List[str]:
        return list(self._specs.keys())

    def metadata(self) -> List[Dict[str, Any]]:
        """Toolbar entries in catalogue order."""
        return [
            {
                "type": tid,
                "label": spec["label"],
                "description": spec["description"],
                "icon": spec["icon"],
                "default_section": spec["default_section"],
            }
            for tid, spec in self._specs.items()
        ]

    # ----- internal plumbing -----

    def _register_spec(self, type_id: str, spec: Dict[str, Any]) -> None:
        spec = dict(spec)
        spec.setdefault("label", type_id)
        spec.setdefault("description", "")
        spec.setdefault("icon", "Square")
        spec.setdefault("default_section", "body")
        spec.setdefault("position", {})
        spec.setdefault("style", {})
        spec.setdefault("config", {})
        spec.setdefault("fields", {})
        spec.setdefault("aliases", [])
        spec.pop("type_id", None)

        try:
            Position(**spec["position"])
        except TypeError as exc:
            raise ValueError(f"Spec for {type_id} has an invalid default position: {exc}") from exc

        # ensure config defaults are declared fields
        fields = spec["fields"]
        for key in spec["config"]:
            if key not in fields:
                raise ValueError(f"Spec for {type_id} has default for unknown config key '{key}'")

        self._specs[type_id] = spec

    def _rebuild_alias_index(self) -> None:
        self._aliases.clear()
        for tid, spec in self._specs.items():
            tokens: Iterable[str] = list(spec.get("aliases", [])) + [tid, spec.get("label", "")]
            for t in tokens:
                if not t:
                    continue
                self._aliases.setdefault(_lc(t), tid)  # first writer wins
