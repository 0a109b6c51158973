from functools import lru_cache

import numpy as np


def each_combination(choices, dim):
    """Lazily iterate over all vectors of dimension dim whose components are drawn, with repetition, from choices.

    The i-th vector is the base-L digit expansion of i with L = len(choices), least significant digit on axis 0.
    Every call starts again from the first combination.

    Parameters
    ----------
        choices: A small sequence of L offsets, e.g. (-2, -1, 0, 1, 2) or (0, 1).

        dim: The dimension D of the produced vectors.

    Returns
    -------
        A generator yielding L**D integer arrays of shape (D, ).
    """
    choices = np.asarray(choices)
    n_choices = len(choices)
    for cur in range(n_choices ** dim):
        result = np.empty(dim, dtype=choices.dtype)
        div = cur
        for n in range(dim):
            div, rem = divmod(div, n_choices)
            result[n] = choices[rem]
        yield result


@lru_cache(maxsize=None)
def _combination_array(choices, dim):
    combinations = np.array(list(each_combination(choices, dim)), dtype=np.int64).reshape(-1, dim)
    combinations.flags.writeable = False
    return combinations


def combination_array(choices, dim):
    """Same sequence as each_combination, materialized as a read-only (L**D, D) int64 array."""
    return _combination_array(tuple(int(c) for c in choices), int(dim))
