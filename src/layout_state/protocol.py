from __future__ import annotations
from typing import Protocol, Optional, Any, Tuple, Dict

from .model import Block


class BlockRegistryProtocol(Protocol):
    """
    Minimal contract used by the store to stay decoupled from the block catalogue.

    Implementations must provide:
      - resolve_token(token) -> type_id | None
      - get_spec(type_id) -> dict with keys:
            label: str
            position / style / config: defaults for new blocks
            fields: {config_key: {"type": ..., ...}}
      - default_block(type_id, block_id) -> Block
      - validate_config(type_id, key, value) -> (ok: bool, normalized: Any, error: str|None)
    """
    def resolve_token(self, token: str) -> Optional[str]: ...
    def get_spec(self, type_id: str) -> Dict[str, Any]: ...
    def default_block(self, type_id: str, block_id: str) -> Block: ...
    def validate_config(self, type_id: str, key: str, value: Any) -> Tuple[bool, Any, Optional[str]]: ...
