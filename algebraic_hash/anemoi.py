"""Anemoi permutation.

The state is laid out as two rows, x = state[0:l] and y = state[l:2l], where
l = params.num_columns. A round adds the round constants, mixes each row with
the linear layer, then applies the open Flystel S-box column by column. A final
linear layer follows the last round.
"""

from .params import AnemoiParams


def _load_state(state, params: AnemoiParams):
    params.check_state(state)
    return params.field.array(state)


def _split(state, params: AnemoiParams):
    ncols = params.num_columns
    return state[:ncols], state[ncols:]


def _join(x, y, params: AnemoiParams):
    return params.field.array(list(x) + list(y))


def _rotate(row, shift: int, params: AnemoiParams):
    """Rotate a row left by `shift` positions (right when negative)."""
    values = list(row)
    shift %= len(values)
    return params.field.array(values[shift:] + values[:shift])


# --- Linear Layer ---

def apply_linear_layer(state, params: AnemoiParams):
    """x <- M.x and y <- M.(y rotated left by one)."""
    x, y = _split(_load_state(state, params), params)
    return _join(params.mds @ x, params.mds @ _rotate(y, 1, params), params)


def invert_linear_layer(state, params: AnemoiParams):
    x, y = _split(_load_state(state, params), params)
    return _join(params.inv_mds @ x, _rotate(params.inv_mds @ y, -1, params), params)


# --- Flystel ---

def apply_flystel(state, params: AnemoiParams):
    """Open Flystel S-box applied to every (x[i], y[i]) column.

    x <- x - beta*y^2; y <- y - x^(1/alpha); x <- x + beta*y^2 + delta
    """
    GF = params.field.GF
    beta = GF(params.beta)
    delta = GF(params.delta)
    x, y = _split(_load_state(state, params), params)
    x = x - beta * y ** 2
    y = y - params.field.power(x, params.inv_alpha)
    x = x + beta * y ** 2 + delta
    return _join(x, y, params)


def invert_flystel(state, params: AnemoiParams):
    """x <- x - beta*y^2 - delta; y <- y + x^(1/alpha); x <- x + beta*y^2"""
    GF = params.field.GF
    beta = GF(params.beta)
    delta = GF(params.delta)
    x, y = _split(_load_state(state, params), params)
    x = x - beta * y ** 2 - delta
    y = y + params.field.power(x, params.inv_alpha)
    x = x + beta * y ** 2
    return _join(x, y, params)


# --- Rounds ---

def apply_round(state, params: AnemoiParams, step: int):
    """Apply round `step` (0-indexed)."""
    x, y = _split(_load_state(state, params), params)
    x = x + params.round_constants_c[step]
    y = y + params.round_constants_d[step]
    state = apply_linear_layer(_join(x, y, params), params)
    return apply_flystel(state, params)


def invert_round(state, params: AnemoiParams, step: int):
    state = invert_linear_layer(invert_flystel(state, params), params)
    x, y = _split(state, params)
    x = x - params.round_constants_c[step]
    y = y - params.round_constants_d[step]
    return _join(x, y, params)


# --- Permutation ---

def apply_permutation(state, params: AnemoiParams):
    """Run num_rounds rounds followed by a final linear layer.

    Raises:
        ValueError: If the state width does not match params.width
    """
    state = _load_state(state, params)
    for step in range(params.num_rounds):
        state = apply_round(state, params, step)
    return apply_linear_layer(state, params)


def invert_permutation(state, params: AnemoiParams):
    """Inverse of apply_permutation."""
    state = invert_linear_layer(state, params)
    for step in reversed(range(params.num_rounds)):
        state = invert_round(state, params, step)
    return state
