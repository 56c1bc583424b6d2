"""Rescue-Prime permutation.

One round is two half-rounds sharing the same MDS matrix:

    x^alpha -> MDS -> + RC[r][0:m] -> x^(1/alpha) -> MDS -> + RC[r][m:2m]

Every function is pure: the state passed in is never modified and a new field
vector is returned. States may be given as galois arrays or as plain int lists.
"""

from .params import RescuePrimeParams


def _load_state(state, params: RescuePrimeParams):
    params.check_state(state)
    return params.field.array(state)


# --- S-boxes ---

def apply_sbox(state, params: RescuePrimeParams):
    """Raise every element to alpha."""
    return _load_state(state, params) ** params.alpha


def apply_inv_sbox(state, params: RescuePrimeParams):
    """Raise every element to alpha^-1 mod (p - 1)."""
    return params.field.power(_load_state(state, params), params.inv_alpha)


# --- Linear Layer ---

def apply_mds(state, params: RescuePrimeParams):
    return params.mds @ _load_state(state, params)


def apply_inv_mds(state, params: RescuePrimeParams):
    return params.inv_mds @ _load_state(state, params)


# --- Rounds ---

def apply_round(state, params: RescuePrimeParams, step: int):
    """Apply round `step` (0-indexed)."""
    m = params.width
    rc = params.round_constants[step]
    state = apply_mds(apply_sbox(state, params), params) + rc[:m]
    state = apply_mds(apply_inv_sbox(state, params), params) + rc[m:]
    return state


def invert_round(state, params: RescuePrimeParams, step: int):
    """Undo round `step`, i.e. invert_round(apply_round(s, p, i), p, i) == s."""
    m = params.width
    rc = params.round_constants[step]
    state = _load_state(state, params) - rc[m:]
    state = apply_sbox(apply_inv_mds(state, params), params) - rc[:m]
    state = apply_inv_sbox(apply_inv_mds(state, params), params)
    return state


# --- Permutation ---

def apply_permutation(state, params: RescuePrimeParams):
    """Run all num_rounds rounds.

    Args:
        state: params.width field elements
        params: Rescue-Prime parameter set

    Returns:
        The permuted state as a new field vector

    Raises:
        ValueError: If the state width does not match params.width
    """
    state = _load_state(state, params)
    for step in range(params.num_rounds):
        state = apply_round(state, params, step)
    return state


def invert_permutation(state, params: RescuePrimeParams):
    """Inverse of apply_permutation."""
    state = _load_state(state, params)
    for step in reversed(range(params.num_rounds)):
        state = invert_round(state, params, step)
    return state
