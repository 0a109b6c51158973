import numpy as np

from poisson_disk.combinatorics import combination_array
from poisson_disk.grid import index_to_sample
from poisson_disk.vector import dimension, sqnorm

_PERIODIC_SHIFTS = np.array([-1.0, 0.0, 1.0])


def sqdist(p, q, periodic=False):
    """Squared distance between two points. In periodic mode the domain is the unit torus and the distance is the
    minimum over the 3^D translations of the difference by -1, 0 or 1 on every axis."""
    diff = np.asarray(q, dtype=np.float64) - np.asarray(p, dtype=np.float64)
    if periodic:
        translations = combination_array((-1, 0, 1), dimension(diff))
        return float(np.min(sqnorm(diff + translations)))
    return float(sqnorm(diff))


def sqdist_many(points, q, periodic=False):
    """Broadcasting version of sqdist over the leading axes of points and q.

    The periodic minimum over the 3^D images is separable per axis, so it is computed as the sum of the per axis
    minima instead of materializing all images.
    """
    diff = np.asarray(q, dtype=np.float64) - np.asarray(points, dtype=np.float64)
    if periodic:
        diff = np.min(np.abs(diff[..., None] + _PERIODIC_SHIFTS), axis=-1)
    return sqnorm(diff)


def is_valid(samples, point, radius, periodic=False):
    """True if point keeps a distance of at least 2 * radius from every position in samples."""
    if len(samples) == 0:
        return True
    return bool(np.all(sqdist_many(np.asarray(samples), point, periodic) >= (2.0 * radius) ** 2))


def is_disk_free(grid, coord, level, point):
    """Check whether point, drawn inside the cell at coord of the given level, can be accepted.

    Only the neighbour ring of the top level parent cell can contain samples closer than 2 * radius, so the rest of
    the grid is not scanned. Samples which were seeded outside of the grid cells are checked one by one.
    """
    neighbours = grid.neighbours(grid.get_parent(coord, level))
    if len(neighbours) and np.any(sqdist_many(neighbours, point, grid.periodic) < grid.sqradius):
        return False
    return is_valid(grid.outside, point, grid.radius, grid.periodic)


def _cell_corners(grid, coords, level):
    spacing = grid.cell / 2 ** level
    corner_offsets = combination_array((0, 1), grid.dim)
    return index_to_sample(np.asarray(coords, dtype=np.int64)[..., None, :] + corner_offsets, spacing)


def is_cell_covered(sample, coord, grid, level):
    """True if all 2^D corners of the cell at coord of the given level lie strictly inside the exclusion disk of
    sample. Since the cell is convex, no point of it can then be accepted."""
    corners = _cell_corners(grid, coord, level)
    return bool(np.all(sqdist_many(corners, sample, grid.periodic) < grid.sqradius))


def covered(grid, coord, level):
    parent = grid.get_parent(coord, level)
    for sample in grid.neighbours(parent):
        if is_cell_covered(sample, coord, grid, level):
            return True
    return any(is_cell_covered(sample, coord, grid, level) for sample in grid.outside)


def covered_many(grid, coords, level):
    """Vectorized covered over an (M, D) array of cells of the same level. Returns a boolean mask of shape (M, ).

    The neighbour ring is walked one offset at a time so that memory stays linear in M.
    """
    coords = np.asarray(coords, dtype=np.int64).reshape(-1, grid.dim)
    result = np.zeros(len(coords), dtype=bool)
    if len(coords) == 0:
        return result

    corners = _cell_corners(grid, coords, level)
    parents = grid.get_parent(coords, level)
    for offset in grid.neighbour_offsets:
        slots = grid.slots(parents + offset)
        has_sample = (slots >= 0) & ~result
        has_sample[has_sample] = grid.occupied[slots[has_sample]]
        idx = np.flatnonzero(has_sample)
        if len(idx) == 0:
            continue
        samples = grid.positions[slots[idx]]
        inside = np.all(sqdist_many(corners[idx], samples[:, None, :], grid.periodic) < grid.sqradius, axis=-1)
        result[idx[inside]] = True

    for sample in grid.outside:
        idx = np.flatnonzero(~result)
        inside = np.all(sqdist_many(corners[idx], sample, grid.periodic) < grid.sqradius, axis=-1)
        result[idx[inside]] = True

    return result
