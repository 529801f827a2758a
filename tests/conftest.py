# tests/conftest.py
import sys
from pathlib import Path
import pytest

# Make "src" importable
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from block_registry import BlockRegistry
from layout_state import Store, EditorState, Block, Position

@pytest.fixture(scope="session")
def registry():
    # Loads built-in specs from block_registry/specs.py
    return BlockRegistry()

@pytest.fixture
def store(registry):
    # Fresh store per test, seeded with the empty three-section layout
    return Store(state=EditorState.fresh(), registry=registry)

@pytest.fixture
def logo_block():
    return Block(
        id="b1",
        type="logo",
        position=Position(x=0, y=0, width=25, height="auto"),
        style={},
        config={},
    )
