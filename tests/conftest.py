import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


SAMPLE_TEXTS = [
    "abracadabra",
    "The quick brown fox jumps over the lazy dog.\n",
    "AAAAAAAAAABBBBBBBBBBBCCCCCCCCCCDDDDDDDDDDEEEEEEEEEE",
    "ab",
    "mississippi river",
    "héllo wörld ✓✓✓",
]


@pytest.fixture(params=SAMPLE_TEXTS)
def sample_text(request):
    """Non-empty inputs with more than one distinct character."""
    return request.param


@pytest.fixture()
def abc_tree():
    """Tree for ``"abc"``: codes are c=0, a=10, b=11.

    Structure:
        root
        ├── 0: c
        └── 1: *
               ├── 0: a
               └── 1: b
    """
    from huffman import build_tree

    return build_tree({"a": 1, "b": 1, "c": 1})
