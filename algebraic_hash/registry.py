"""Named hash instantiations.

Each entry binds a parameter set to the sponge operations. Names follow
family-width-rate, e.g. "rescue-64-8-4" is Rescue-Prime over the 64-bit field
with an 8-element state and rate 4.
"""

import logging
from typing import Iterable, List, Optional

from .digest import Digest
from .field import F63, GOLDILOCKS, STARK252
from .params import AnemoiParams, ParameterSet, RescuePrimeParams
from .sponge import Hasher, hash_bytes, hash_elements, merge, merge_with_int

logger = logging.getLogger(__name__)


# --- Facade ---

class HashFunction:
    """A concrete hash: one parameter set plus the sponge operations."""

    def __init__(self, params: ParameterSet):
        self.params = params

    @property
    def name(self) -> str:
        return self.params.name

    @property
    def field(self):
        return self.params.field

    @property
    def digest_size(self) -> int:
        return self.params.digest_size

    def hash(self, elements: Iterable[int]) -> Digest:
        return hash_elements(self.params, elements)

    def hash_bytes(self, data: bytes) -> Digest:
        return hash_bytes(self.params, data)

    def merge(self, left: Digest, right: Digest) -> Digest:
        return merge(self.params, left, right)

    def merge_with_int(self, seed: Digest, value: int) -> Digest:
        return merge_with_int(self.params, seed, value)

    def hasher(self) -> Hasher:
        return Hasher(self.params)

    def permute(self, state):
        return self.params.permute(state)

    def digest_from_bytes(self, data: bytes) -> Digest:
        """Decode a digest and check it has digest_size elements."""
        digest = Digest.from_bytes(self.field, data)
        if len(digest) != self.digest_size:
            raise ValueError(
                f"{self.name} digests have {self.digest_size} elements, got {len(digest)}"
            )
        return digest

    def __repr__(self) -> str:
        return f"HashFunction({self.name})"


# --- Parameter Sets ---

_PARAMS: List[ParameterSet] = [
    RescuePrimeParams("rescue-63-8-4", F63, width=8, rate=4, digest_size=4,
                      num_rounds=7, alpha=3),
    RescuePrimeParams("rescue-63-14-7", F63, width=14, rate=7, digest_size=7,
                      num_rounds=7, alpha=3),
    RescuePrimeParams("rescue-64-8-4", GOLDILOCKS, width=8, rate=4, digest_size=4,
                      num_rounds=7, alpha=7),
    RescuePrimeParams("rescue-64-12-8", GOLDILOCKS, width=12, rate=8, digest_size=4,
                      num_rounds=7, alpha=7),
    RescuePrimeParams("rescue-64-14-7", GOLDILOCKS, width=14, rate=7, digest_size=7,
                      num_rounds=7, alpha=7),
    RescuePrimeParams("rescue-252-4-2", STARK252, width=4, rate=2, digest_size=2,
                      num_rounds=14, alpha=3),
    AnemoiParams("anemoi-64-8-4", GOLDILOCKS, width=8, rate=4, digest_size=4,
                 num_rounds=10, alpha=7),
]

INSTANTIATIONS = {params.name: HashFunction(params) for params in _PARAMS}

FAMILIES = {
    family: tuple(p.name for p in _PARAMS if p.field.name == family)
    for family in (F63.name, GOLDILOCKS.name, STARK252.name)
}

logger.debug("registered %d hash instantiations: %s", len(INSTANTIATIONS), list(INSTANTIATIONS))


# --- Lookup ---

def get_instantiation(name: str) -> HashFunction:
    """Look up a hash function by name.

    Raises:
        KeyError: If no instantiation has that name
    """
    if name in INSTANTIATIONS:
        return INSTANTIATIONS[name]
    raise KeyError(
        f"No hash instantiation '{name}'. "
        f"Available: {list(INSTANTIATIONS.keys())}"
    )


def instantiations(family: Optional[str] = None) -> List[HashFunction]:
    """All registered hash functions, optionally restricted to one field family.

    Raises:
        KeyError: If the family is unknown
    """
    if family is None:
        return list(INSTANTIATIONS.values())
    if family not in FAMILIES:
        raise KeyError(f"Unknown family '{family}'. Available: {list(FAMILIES.keys())}")
    return [INSTANTIATIONS[name] for name in FAMILIES[family]]
