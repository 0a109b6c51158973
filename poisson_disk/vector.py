import numpy as np


def zero(dim):
    return np.zeros(dim, dtype=np.float64)


def one(dim):
    return np.ones(dim, dtype=np.float64)


def dimension(v):
    return int(np.shape(v)[-1])


def sqnorm(v):
    """Squared euclidean norm along the last axis. Works on a single point of shape (D, ) or on a stack of points of
    shape (..., D)."""
    v = np.asarray(v, dtype=np.float64)
    return np.einsum("...i,...i->...", v, v)


def as_point(values, dim=None):
    """Copy values into a float64 point of shape (D, ).

    Parameters
    ----------
        values: Any array-like holding D coordinates.

        dim: Optional expected dimension. If given and the shape does not agree, a ValueError is raised.

    Returns
    -------
        point: A fresh (D, ) float64 array. Points have value semantics in this package, so callers never share the
            buffer of the input.
    """
    point = np.array(values, dtype=np.float64).reshape(-1)
    if dim is not None and point.shape[0] != dim:
        raise ValueError(f"Expected a point of dimension {dim}, got shape {np.shape(values)}.")
    return point


def as_array(samples, dim=None):
    """Stack the positions of a sequence of samples into an (n, D) array."""
    positions = [np.asarray(sample.pos, dtype=np.float64) for sample in samples]
    if not positions:
        return np.zeros((0, 0 if dim is None else dim), dtype=np.float64)
    return np.vstack(positions)
