"""Shared helpers for the test modules."""

from pathlib import Path

from algebraic_hash.registry import INSTANTIATIONS

TEST_DATA_DIR = Path(__file__).parent / "test-data"

RESCUE_NAMES = [name for name in INSTANTIATIONS if name.startswith("rescue-")]


def random_state(rng, params):
    """Uniform random state for a parameter set."""
    p = params.field.modulus
    return [rng.randrange(p) for _ in range(params.width)]
