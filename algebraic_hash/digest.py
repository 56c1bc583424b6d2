"""Hash output type."""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from .field import PrimeField


@dataclass(frozen=True)
class Digest:
    """Fixed-length sequence of field elements produced by a hash.

    Attributes:
        elements: Canonical element values, each in [0, p)
        field: Field the elements belong to
    """

    elements: Tuple[int, ...]
    field: PrimeField

    def __post_init__(self) -> None:
        values = tuple(int(v) for v in self.elements)
        for v in values:
            if not 0 <= v < self.field.modulus:
                raise ValueError(f"digest element {v} is not in [0, {self.field.name} modulus)")
        object.__setattr__(self, "elements", values)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[int]:
        return iter(self.elements)

    def as_elements(self):
        """Digest as a field vector."""
        return self.field.array(self.elements)

    def to_bytes(self) -> bytes:
        return self.field.elements_to_bytes(self.elements)

    @classmethod
    def from_bytes(cls, field: PrimeField, data: bytes) -> "Digest":
        """Decode a digest written by to_bytes.

        Raises:
            SerializationError: On a length that is not a multiple of the
                element size, or on a non-canonical element
        """
        return cls(tuple(field.elements_from_bytes(data)), field)

    @staticmethod
    def concat(digests: Iterable["Digest"]) -> List[int]:
        """Flatten digests into one list of element values."""
        return [v for d in digests for v in d.elements]

    def __repr__(self) -> str:
        return f"Digest({self.field.name}, {list(self.elements)})"
