from __future__ import annotations
from typing import Any, Iterable, List, Optional, Tuple
import re

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _lc(x: Any) -> str:
    return str(x).strip().lower()

def normalize_enum(value: Any, choices: Iterable[str]) -> Tuple[bool, Any, Optional[str]]:
    if value is None:
        return False, None, "Value is required."
    lower_to_canon = {_lc(c): c for c in choices}
    key = _lc(value)
    if key in lower_to_canon:
        return True, lower_to_canon[key], None
    return False, None, f"Invalid value: {value}"

def normalize_multi(value: Any, choices: Iterable[str]) -> Tuple[bool, Any, Optional[str]]:
    """List of choices (or a comma separated string); order kept, duplicates dropped."""
    if value is None:
        return False, None, "Value is required."
    items = value.split(",") if isinstance(value, str) else list(value)
    out: List[str] = []
    for item in items:
        if isinstance(item, str) and not item.strip():
            continue
        ok, canon, err = normalize_enum(item, choices)
        if not ok:
            return False, None, err
        if canon not in out:
            out.append(canon)
    return True, out, None

def normalize_bool(value: Any) -> Tuple[bool, Any, Optional[str]]:
    if value is None:
        return False, None, "Value is required."
    if isinstance(value, bool):
        return True, value, None
    s = _lc(value)
    if s in {"y","yes","true","1","on"}:
        return True, True, None
    if s in {"n","no","false","0","off"}:
        return True, False, None
    return False, None, f"Invalid boolean: {value}"

def normalize_int(value: Any, min_val: Optional[int] = None, max_val: Optional[int] = None) -> Tuple[bool, Any, Optional[str]]:
    if value is None or value == "" or isinstance(value, bool):
        return False, None, "Value is required."
    try:
        iv = int(value)
    except (TypeError, ValueError):
        return False, None, f"Expected integer, got: {value}"
    if min_val is not None and iv < min_val:
        return False, None, f"Minimum is {min_val}"
    if max_val is not None and iv > max_val:
        return False, None, f"Maximum is {max_val}"
    return True, iv, None

def normalize_number(value: Any, min_val: Optional[float] = None, max_val: Optional[float] = None) -> Tuple[bool, Any, Optional[str]]:
    if value is None or value == "" or isinstance(value, bool):
        return False, None, "Value is required."
    try:
        fv = float(value)
    except (TypeError, ValueError):
        return False, None, f"Expected number, got: {value}"
    if min_val is not None and fv < min_val:
        return False, None, f"Minimum is {min_val}"
    if max_val is not None and fv > max_val:
        return False, None, f"Maximum is {max_val}"
    return True, fv, None

def normalize_text(value: Any, max_length: Optional[int] = None) -> Tuple[bool, Any, Optional[str]]:
    if value is None:
        return True, "", None
    s = str(value)
    if max_length is not None and len(s) > max_length:
        return False, None, f"Maximum length is {max_length}"
    return True, s, None

def normalize_color(value: Any) -> Tuple[bool, Any, Optional[str]]:
    """'#abc' / '#aabbcc' (lower-cased); 'transparent' passes through."""
    if value is None:
        return False, None, "Value is required."
    s = _lc(value)
    if s == "transparent" or _HEX_COLOR.match(s):
        return True, s, None
    return False, None, f"Invalid color: {value}"
