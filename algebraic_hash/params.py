"""Parameter sets: the constant bundles that turn one round structure into many hashes.

A parameter set fixes the field, the state width m, the rate r, the digest size,
the round count and the S-box exponent. Constant tables (diffusion matrix and
round constants) are derived from these with the published generation procedures
the first time they are needed, then cached and frozen for the lifetime of the
process.

References:
    Rescue-Prime: https://eprint.iacr.org/2020/1143.pdf (Algorithms 5 and 6)
    Anemoi:       https://eprint.iacr.org/2022/840.pdf
"""

import hashlib
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

import numpy as np

from .field import PrimeField

if TYPE_CHECKING:
    from .digest import Digest

logger = logging.getLogger(__name__)

# Digits of pi used to derive the Anemoi round constants.
ANEMOI_PI_0 = 1415926535
ANEMOI_PI_1 = 8979323846


def _frozen(arr):
    arr.setflags(write=False)
    return arr


# --- Base Class ---

@dataclass(frozen=True)
class ParameterSet(ABC):
    """Common shape of every hash instantiation.

    Attributes:
        name: Registry name, e.g. "rescue-64-8-4"
        field: Field the permutation operates over
        width: State width m
        rate: Rate r (capacity is m - r)
        digest_size: Number of field elements in a digest
        num_rounds: Number of permutation rounds
        alpha: Forward S-box exponent
    """

    name: str
    field: PrimeField
    width: int
    rate: int
    digest_size: int
    num_rounds: int
    alpha: int

    def __post_init__(self) -> None:
        if not 0 < self.rate < self.width:
            raise ValueError(f"rate must be in (0, {self.width}), got {self.rate}")
        if not 0 < self.digest_size <= self.width:
            raise ValueError(f"digest_size must be in (0, {self.width}], got {self.digest_size}")
        if 2 * self.digest_size > self.width:
            raise ValueError(
                f"two digests of {self.digest_size} elements do not fit a state of width {self.width}"
            )
        if self.num_rounds <= 0:
            raise ValueError(f"num_rounds must be positive, got {self.num_rounds}")
        if math.gcd(self.alpha, self.field.modulus - 1) != 1:
            raise ValueError(f"x^{self.alpha} is not a permutation of {self.field.name}")

    @property
    def capacity(self) -> int:
        return self.width - self.rate

    @cached_property
    def inv_alpha(self) -> int:
        """Integer such that (x^alpha)^inv_alpha == x for every x."""
        return pow(self.alpha, -1, self.field.modulus - 1)

    def check_state(self, state) -> None:
        """Reject a state of the wrong width."""
        if len(state) != self.width:
            raise ValueError(f"{self.name} state must have {self.width} elements, got {len(state)}")

    @abstractmethod
    def permute(self, state):
        """Apply the full permutation; returns a new state."""

    @abstractmethod
    def inverse_permute(self, state):
        """Apply the inverse permutation; returns a new state."""

    def compress(self, left: "Digest", right: "Digest") -> list:
        """Two-to-one compression used for Merkle trees.

        The two digests are written side by side at the start of an otherwise
        zero state, the state is permuted once and the first digest_size
        elements are returned.
        """
        d = self.digest_size
        state = self.field.zeros(self.width)
        state[:d] = left.as_elements()
        state[d:2 * d] = right.as_elements()
        state = self.permute(state)
        return [int(v) for v in state[:d]]


# --- Rescue-Prime ---

@dataclass(frozen=True)
class RescuePrimeParams(ParameterSet):
    """Rescue-Prime (Rescue-XLIX) parameter set.

    Each round applies x^alpha, the MDS matrix and the first half of the round
    constants, then x^(1/alpha), the MDS matrix and the second half.
    """

    security_level: int = 128

    @cached_property
    def mds(self):
        """Vandermonde-derived MDS matrix.

        V[i][j] = g^(i*j) for i < m, j < 2m. Reducing V to [I | A] and
        transposing A gives the matrix, i.e. (V_L^-1 * V_R)^T.
        """
        GF = self.field.GF
        m = self.width
        g = GF(self.field.generator)
        V = GF([[int(g ** (i * j)) for j in range(2 * m)] for i in range(m)])
        A = np.linalg.inv(V[:, :m]) @ V[:, m:]
        logger.debug("generated %dx%d MDS matrix for %s", m, m, self.name)
        return _frozen(GF(A.T.copy()))

    @cached_property
    def inv_mds(self):
        return _frozen(np.linalg.inv(self.mds))

    @cached_property
    def round_constants(self):
        """num_rounds x 2m table of round constants.

        Produced by SHAKE256 seeded with "Rescue-XLIX(p,m,c,lambda)". Every
        constant consumes ceil(bits(p) / 8) + 1 bytes read little-endian and
        reduced modulo p.
        """
        p = self.field.modulus
        m = self.width
        seed = f"Rescue-XLIX({p},{m},{self.capacity},{self.security_level})"
        bytes_per_int = math.ceil(self.field.num_bits / 8) + 1
        count = 2 * m * self.num_rounds
        stream = hashlib.shake_256(seed.encode("ascii")).digest(bytes_per_int * count)
        constants = [
            int.from_bytes(stream[k * bytes_per_int:(k + 1) * bytes_per_int], "little") % p
            for k in range(count)
        ]
        logger.debug("generated %d round constants for %s", count, self.name)
        table = self.field.GF(constants).reshape(self.num_rounds, 2 * m)
        return _frozen(table)

    def permute(self, state):
        from .rescue_prime import apply_permutation
        return apply_permutation(state, self)

    def inverse_permute(self, state):
        from .rescue_prime import invert_permutation
        return invert_permutation(state, self)


# --- Anemoi ---

@dataclass(frozen=True)
class AnemoiParams(ParameterSet):
    """Anemoi parameter set.

    The state is split into two rows x | y of num_columns elements each, which
    are mixed by the open Flystel S-box.
    """

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.width % 2 != 0:
            raise ValueError(f"Anemoi state width must be even, got {self.width}")
        if self.num_columns != 4:
            raise ValueError(f"only 4 Anemoi columns are supported, got {self.num_columns}")

    @property
    def num_columns(self) -> int:
        return self.width // 2

    @property
    def beta(self) -> int:
        """Multiplier of the Flystel quadratic, the field generator g."""
        return self.field.generator

    @cached_property
    def delta(self) -> int:
        """Constant of the closed quadratic, g^-1."""
        return pow(self.beta, -1, self.field.modulus)

    @cached_property
    def mds(self):
        """The 4x4 Anemoi matrix expressed in terms of g."""
        GF = self.field.GF
        g = self.beta
        rows = [
            [1, 1 + g, g, g],
            [g * g, g + g * g, 1 + g, 1 + 2 * g],
            [g * g, g * g, 1, 1 + g],
            [1 + g, 1 + 2 * g, g, 1 + g],
        ]
        return _frozen(GF(rows))

    @cached_property
    def inv_mds(self):
        return _frozen(np.linalg.inv(self.mds))

    @cached_property
    def _round_constants(self):
        p = self.field.modulus
        g = self.beta
        c_rows, d_rows = [], []
        for r in range(self.num_rounds):
            pi_0_r = pow(ANEMOI_PI_0, r, p)
            c_row, d_row = [], []
            for i in range(self.num_columns):
                pi_1_i = pow(ANEMOI_PI_1, i, p)
                pow_alpha = pow(pi_0_r + pi_1_i, self.alpha, p)
                c_row.append((g * pi_0_r * pi_0_r + pow_alpha) % p)
                d_row.append((g * pi_1_i * pi_1_i + pow_alpha + self.delta) % p)
            c_rows.append(c_row)
            d_rows.append(d_row)
        logger.debug("generated %d Anemoi round constants for %s",
                     2 * self.num_rounds * self.num_columns, self.name)
        return _frozen(self.field.GF(c_rows)), _frozen(self.field.GF(d_rows))

    @property
    def round_constants_c(self):
        """Constants added to the x row, one row per round."""
        return self._round_constants[0]

    @property
    def round_constants_d(self):
        """Constants added to the y row, one row per round."""
        return self._round_constants[1]

    def permute(self, state):
        from .anemoi import apply_permutation
        return apply_permutation(state, self)

    def inverse_permute(self, state):
        from .anemoi import invert_permutation
        return invert_permutation(state, self)

    def compress(self, left: "Digest", right: "Digest") -> list:
        """Anemoi-Jive compression.

        Saves the extra permutation a sponge would need to absorb two digests:
        out[i] = left[i] + right[i] + P(s)[i] + P(s)[i + num_columns] with
        s = left || right.
        """
        d = self.digest_size
        state = self.field.zeros(self.width)
        state[:d] = left.as_elements()
        state[d:2 * d] = right.as_elements()
        permuted = self.permute(state)
        ncols = self.num_columns
        out = left.as_elements() + right.as_elements() + permuted[:d] + permuted[ncols:ncols + d]
        return [int(v) for v in out]
