import numpy as np
from scipy.spatial import cKDTree

from poisson_disk.sample import Sample
from poisson_disk.vector import as_array


def _positions(points):
    if len(points) and isinstance(points[0], Sample):
        return as_array(points)
    return np.asarray(points, dtype=np.float64)


def _build_tree(positions, periodic):
    # cKDTree only accepts periodic data inside [0, boxsize).
    if periodic:
        return cKDTree(np.mod(positions, 1.0), boxsize=1.0)
    return cKDTree(positions)


def min_separation(points, periodic=False):
    """Smallest pairwise distance of a set of samples or positions, on the unit torus if periodic."""
    positions = _positions(points)
    if len(positions) < 2:
        return np.inf
    dists, _ = _build_tree(positions, periodic).query(positions, k=2)
    return float(dists[:, 1].min())


def find_violations(points, radius, periodic=False):
    """Index pairs (i, j), i < j, of samples closer than 2 * radius."""
    positions = _positions(points)
    if len(positions) < 2:
        return set()
    tree = _build_tree(positions, periodic)
    candidates = tree.query_pairs(2.0 * radius)
    separation = 2.0 * radius
    violations = set()
    for i, j in candidates:
        diff = np.abs(positions[i] - positions[j])
        if periodic:
            diff = np.minimum(np.mod(diff, 1.0), 1.0 - np.mod(diff, 1.0))
        if np.linalg.norm(diff) < separation:
            violations.add((i, j))
    return violations


def uncovered_points(points, probes, radius, periodic=False):
    """Probes lying farther than 2 * radius from every sample, i.e. locations where one more sample would still fit.
    An empty result on a dense set of probes indicates a maximal distribution."""
    positions = _positions(points)
    probes = np.asarray(probes, dtype=np.float64)
    if len(positions) == 0:
        return probes
    dists, _ = _build_tree(positions, periodic).query(np.mod(probes, 1.0) if periodic else probes, k=1)
    return probes[dists > 2.0 * radius]
