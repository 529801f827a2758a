from __future__ import annotations
from typing import Dict, Any, Optional
from pathlib import Path
import logging

import yaml

logger = logging.getLogger(__name__)


def load_plugin_specs(path: Optional[str | Path]) -> Dict[str, Dict[str, Any]]:
    """
    Load YAML block specs from a directory (optional).
    Returns a dict {type_id: spec}. Safe no-op if path is missing.
    """
    specs: Dict[str, Dict[str, Any]] = {}
    if not path:
        return specs
    p = Path(path)
    if not p.exists() or not p.is_dir():
        logger.warning("block plugin dir not found: %s", p)
        return specs
    for yml in sorted(p.glob("*.yaml")):
        data = (yaml.safe_load(yml.read_text(encoding="utf-8")) or {})
        # Allow single or multi-block files
        if "blocks" in data and isinstance(data["blocks"], list):
            for spec in data["blocks"]:
                tid = spec.get("type_id")
                if not tid:
                    raise ValueError(f"{yml}: block missing 'type_id'")
                specs[tid] = spec
        else:
            tid = data.get("type_id")
            if not tid:
                raise ValueError(f"{yml}: spec missing 'type_id'")
            specs[tid] = data
        logger.debug("loaded block specs from %s", yml)
    return specs
