import numpy as np

from poisson_disk.distance import sqdist_many
from poisson_disk.grid import Grid
from poisson_disk.vector import as_array


def brute_force_min_sqdist(positions: np.ndarray, periodic: bool = False) -> float:
    """Minimum squared distance over all pairs, computed without any spatial index."""
    positions = np.asarray(positions, dtype=np.float64)
    if len(positions) < 2:
        return np.inf
    sqdists = sqdist_many(positions[:, None, :], positions[None, :, :], periodic)
    np.fill_diagonal(sqdists, np.inf)
    return float(sqdists.min())


def brute_force_min_cross_sqdist(a: np.ndarray, b: np.ndarray, periodic: bool = False) -> float:
    a, b = np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)
    if len(a) == 0 or len(b) == 0:
        return np.inf
    return float(sqdist_many(a[:, None, :], b[None, :, :], periodic).min())


def sampled_extent(radius: float, dim: int) -> float:
    """Upper bound of the coordinates covered by the top level grid, side * cell."""
    grid = Grid(radius, dim)
    return grid.side * grid.cell


def random_probes(radius: float, dim: int, n: int = 20_000, seed: int = 7) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.random((n, dim)) * sampled_extent(radius, dim)


def positions_of(samples) -> np.ndarray:
    return as_array(samples)
