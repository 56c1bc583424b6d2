"""Sponge construction over any parameter set.

Absorbing adds input elements into the first `rate` positions of an all-zero
state, permuting after every full block. Finalisation always writes the pad
element 1 at the next rate position and permutes once more, even when the input
filled its last block exactly; this "10*" rule makes the absorbed stream
injective over input lengths. The digest is squeezed from the rate portion,
permuting again whenever more elements are needed than one block provides.
"""

import numbers
from typing import Iterable, List, Sequence

import numpy as np

from .digest import Digest
from .encoding import bytes_to_elements
from .field import SerializationError
from .params import ParameterSet

PAD_ELEMENT = 1

CURSOR_BYTES = 8


def _check_elements(params: ParameterSet, elements: Iterable[int]) -> List[int]:
    p = params.field.modulus
    values = []
    for e in elements:
        if isinstance(e, np.ndarray) and e.ndim == 0:
            e = e.item()
        if not isinstance(e, numbers.Integral):
            raise ValueError(f"{e!r} is not an integer field element")
        e = int(e)
        if not 0 <= e < p:
            raise ValueError(f"{e} is not a canonical {params.field.name} element")
        values.append(e)
    return values


def _check_digest(params: ParameterSet, digest: Digest) -> None:
    if digest.field != params.field:
        raise ValueError(
            f"digest belongs to {digest.field.name}, {params.name} works over {params.field.name}"
        )
    if len(digest) != params.digest_size:
        raise ValueError(
            f"{params.name} digests have {params.digest_size} elements, got {len(digest)}"
        )


# --- Incremental Hasher ---

class Hasher:
    """Incremental sponge.

    Feeding the same element sequence through any split of absorb calls gives
    the same digest as hash_elements. The hasher is single-use: finalize
    consumes it.
    """

    def __init__(self, params: ParameterSet):
        self.params = params
        self.state = params.field.zeros(params.width)
        self.idx = 0
        self._finalized = False

    def _check_live(self) -> None:
        if self._finalized:
            raise RuntimeError("hasher has already been finalized")

    def absorb(self, elements: Iterable[int]) -> "Hasher":
        """Add field elements to the sponge; returns self for chaining."""
        self._check_live()
        params = self.params
        GF = params.field.GF
        for e in _check_elements(params, elements):
            self.state[self.idx] += GF(e)
            self.idx += 1
            if self.idx == params.rate:
                self.state = params.permute(self.state)
                self.idx = 0
        return self

    def absorb_bytes(self, data: bytes) -> "Hasher":
        """Encode `data` on its own and absorb the resulting elements."""
        return self.absorb(bytes_to_elements(self.params.field, data))

    def finalize(self) -> Digest:
        """Pad, permute and squeeze a digest.

        Raises:
            RuntimeError: If the hasher was already finalized
        """
        self._check_live()
        self._finalized = True
        params = self.params
        state = self.state.copy()
        state[self.idx] += params.field.GF(PAD_ELEMENT)
        state = params.permute(state)

        out: List[int] = []
        while True:
            take = min(params.rate, params.digest_size - len(out))
            out.extend(int(v) for v in state[:take])
            if len(out) == params.digest_size:
                break
            state = params.permute(state)
        return Digest(tuple(out), params.field)

    def copy(self) -> "Hasher":
        self._check_live()
        clone = Hasher(self.params)
        clone.state = self.state.copy()
        clone.idx = self.idx
        return clone

    # --- Serialization ---

    def to_bytes(self) -> bytes:
        """State elements in canonical encoding followed by the rate cursor."""
        self._check_live()
        field = self.params.field
        return field.elements_to_bytes(self.state) + self.idx.to_bytes(CURSOR_BYTES, "little")

    @classmethod
    def from_bytes(cls, params: ParameterSet, data: bytes) -> "Hasher":
        """Restore a hasher written by to_bytes.

        Raises:
            SerializationError: On a wrong length, a non-canonical state
                element or a cursor outside the rate
        """
        field = params.field
        expected = params.width * field.num_bytes + CURSOR_BYTES
        if len(data) != expected:
            raise SerializationError(
                f"{params.name} hasher encoding must be {expected} bytes, got {len(data)}"
            )
        state = field.elements_from_bytes(data[:-CURSOR_BYTES])
        idx = int.from_bytes(data[-CURSOR_BYTES:], "little")
        if idx >= params.rate:
            raise SerializationError(f"rate cursor {idx} is outside the rate {params.rate}")
        hasher = cls(params)
        hasher.state = field.array(state)
        hasher.idx = idx
        return hasher

    def __repr__(self) -> str:
        status = "finalized" if self._finalized else f"idx={self.idx}"
        return f"Hasher({self.params.name}, {status})"


# --- One-shot Operations ---

def hash_elements(params: ParameterSet, elements: Iterable[int]) -> Digest:
    """Hash a sequence of field elements."""
    return Hasher(params).absorb(elements).finalize()


def hash_bytes(params: ParameterSet, data: bytes) -> Digest:
    """Hash a byte string through the injective byte encoding."""
    return hash_elements(params, bytes_to_elements(params.field, data))


def padded_stream(params: ParameterSet, elements: Sequence[int]) -> List[int]:
    """The exact element stream the sponge absorbs for `elements`.

    The input, then the pad element, then zeros up to a multiple of the rate.
    """
    stream = _check_elements(params, elements) + [PAD_ELEMENT]
    stream += [0] * (-len(stream) % params.rate)
    return stream


def merge(params: ParameterSet, left: Digest, right: Digest) -> Digest:
    """Two-to-one compression of two digests.

    Raises:
        ValueError: If a digest has the wrong field or size
    """
    _check_digest(params, left)
    _check_digest(params, right)
    return Digest(tuple(params.compress(left, right)), params.field)


def merge_with_int(params: ParameterSet, seed: Digest, value: int) -> Digest:
    """Combine a digest with an integer (e.g. a counter or leaf index).

    The value is reduced into the field; the last state element records the
    number of meaningful inputs.
    """
    _check_digest(params, seed)
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    d = params.digest_size
    GF = params.field.GF
    state = params.field.zeros(params.width)
    state[:d] = seed.as_elements()
    state[d] = GF(value % params.field.modulus)
    state[params.width - 1] = GF(d + 1)
    state = params.permute(state)
    return Digest(tuple(int(v) for v in state[:d]), params.field)
