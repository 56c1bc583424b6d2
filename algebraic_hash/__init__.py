"""Algebraic sponge hash functions (Rescue-Prime and Anemoi) over prime fields."""

from algebraic_hash.digest import Digest
from algebraic_hash.encoding import bytes_to_elements
from algebraic_hash.field import (
    F63,
    F63_PRIME,
    GOLDILOCKS,
    GOLDILOCKS_PRIME,
    STARK252,
    STARK252_PRIME,
    PrimeField,
    SerializationError,
)
from algebraic_hash.merkle import MerkleTree
from algebraic_hash.params import AnemoiParams, ParameterSet, RescuePrimeParams
from algebraic_hash.registry import (
    FAMILIES,
    INSTANTIATIONS,
    HashFunction,
    get_instantiation,
    instantiations,
)
from algebraic_hash.sponge import (
    Hasher,
    hash_bytes,
    hash_elements,
    merge,
    merge_with_int,
    padded_stream,
)

__all__ = [
    # Fields
    "PrimeField",
    "SerializationError",
    "F63",
    "F63_PRIME",
    "GOLDILOCKS",
    "GOLDILOCKS_PRIME",
    "STARK252",
    "STARK252_PRIME",
    # Parameters
    "ParameterSet",
    "RescuePrimeParams",
    "AnemoiParams",
    # Sponge
    "Digest",
    "Hasher",
    "bytes_to_elements",
    "hash_elements",
    "hash_bytes",
    "padded_stream",
    "merge",
    "merge_with_int",
    # Registry
    "HashFunction",
    "INSTANTIATIONS",
    "FAMILIES",
    "get_instantiation",
    "instantiations",
    # Merkle Tree
    "MerkleTree",
]
