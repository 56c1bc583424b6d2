"""
Pytest configuration for algebraic_hash tests.
"""

import random
import sys
from pathlib import Path

import pytest

# Add the repository root to the path so the package imports without installation
# (tests/ is inside the repository root, so parent is the root)
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def rng():
    """Deterministic random source so failures reproduce."""
    return random.Random(0x5EED)
