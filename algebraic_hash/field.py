"""Prime fields used by the hash instantiations, backed by the galois library.

This module provides a thin wrapper around galois for the three prime fields the
hash functions are instantiated over, plus the canonical byte encoding used to
move field elements across the algebraic boundary.

Fields:
    F63:        p = 2^62 + 2^56 + 2^55 + 1
    GOLDILOCKS: p = 2^64 - 2^32 + 1
    STARK252:   p = 2^251 + 17 * 2^192 + 1
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, List, Optional

import galois

# --- Moduli ---

F63_PRIME = (1 << 62) + (1 << 56) + (1 << 55) + 1

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

STARK252_PRIME = (1 << 251) + 17 * (1 << 192) + 1


class SerializationError(ValueError):
    """The bytes do not represent a canonical field element."""


# --- Field Description ---

@dataclass(frozen=True)
class PrimeField:
    """Description of GF(p) with a lazily constructed galois field class.

    The galois class is built on first access and cached for the lifetime of
    the process; it is shared read-only by every hash invocation.

    Attributes:
        name: Short identifier used in instantiation names (e.g. "f64")
        modulus: The prime p
        primitive_element: Known multiplicative generator. When None, galois
            searches for one (only cheap when p - 1 factors easily).
    """

    name: str
    modulus: int
    primitive_element: Optional[int] = None

    @cached_property
    def GF(self):
        """The galois FieldArray subclass for this field."""
        if self.primitive_element is None:
            return galois.GF(self.modulus)
        # Skip galois' primitivity check, it would factor p - 1.
        return galois.GF(self.modulus, primitive_element=self.primitive_element, verify=False)

    @property
    def generator(self) -> int:
        """Multiplicative generator used by the constant generation procedures."""
        if self.primitive_element is not None:
            return self.primitive_element
        return int(self.GF.primitive_element)

    @property
    def num_bits(self) -> int:
        return self.modulus.bit_length()

    @property
    def num_bytes(self) -> int:
        """Width of the canonical encoding of one element."""
        return (self.num_bits + 7) // 8

    @property
    def bytes_per_element(self) -> int:
        """Number of raw bytes that always map below the modulus."""
        return (self.num_bits - 1) // 8

    # --- Construction ---

    def array(self, values: Iterable[int]):
        """Build a field vector.

        Values outside [0, p) are rejected by galois rather than reduced.
        """
        return self.GF([int(v) for v in values])

    def zeros(self, n: int):
        return self.GF.Zeros(n)

    def power(self, x, exponent: int):
        """Element-wise x^exponent for a public exponent of any size.

        The exponent may exceed 64 bits (inverse S-box exponents do), so the
        exponentiation is carried out on Python integers.
        """
        p = self.modulus
        return self.GF([pow(int(v), exponent, p) for v in x])

    # --- Canonical Encoding ---

    def element_to_bytes(self, value) -> bytes:
        """Little-endian encoding of a single element in num_bytes bytes."""
        return int(value).to_bytes(self.num_bytes, "little")

    def element_from_bytes(self, data: bytes) -> int:
        """Decode a single element, rejecting non-canonical encodings.

        Raises:
            SerializationError: If the length is wrong or the value is >= p
        """
        if len(data) != self.num_bytes:
            raise SerializationError(
                f"{self.name} element must be {self.num_bytes} bytes, got {len(data)}"
            )
        value = int.from_bytes(data, "little")
        if value >= self.modulus:
            raise SerializationError(
                f"non-canonical {self.name} element: {value} is not below the modulus"
            )
        return value

    def elements_to_bytes(self, values: Iterable[int]) -> bytes:
        return b"".join(self.element_to_bytes(v) for v in values)

    def elements_from_bytes(self, data: bytes) -> List[int]:
        """Decode a concatenation of canonical element encodings."""
        size = self.num_bytes
        if len(data) % size != 0:
            raise SerializationError(
                f"byte length {len(data)} is not a multiple of the {self.name} element size {size}"
            )
        return [self.element_from_bytes(data[i:i + size]) for i in range(0, len(data), size)]

    def __repr__(self) -> str:
        return f"PrimeField({self.name}, p={self.modulus})"


# --- Field Instances ---

F63 = PrimeField("f63", F63_PRIME)
"""Small 63-bit field; p - 1 = 2^55 * 131."""

GOLDILOCKS = PrimeField("f64", GOLDILOCKS_PRIME, primitive_element=7)
"""Goldilocks field."""

STARK252 = PrimeField("f252", STARK252_PRIME, primitive_element=3)
"""252-bit STARK-friendly field."""
