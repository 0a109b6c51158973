from typing import List, Optional

import numpy as np

from poisson_disk.combinatorics import combination_array
from poisson_disk.sample import Sample
from poisson_disk.vector import as_point

MAX_RADIUS = np.sqrt(2.0) / 2.0


def check_radius(radius):
    if not 0.0 < radius <= MAX_RADIUS:
        raise ValueError(f"The radius should lie in (0, {MAX_RADIUS}], given {radius}.")


def check_dim(dim):
    if int(dim) != dim or dim < 1:
        raise ValueError(f"The dimension should be a positive integer, given {dim}.")


def encode(coord, side, periodic):
    """Map an integer cell coordinate to the flat index of a grid with side cells per axis.

    In periodic mode every axis is wrapped with a true modulo, so negative coordinates land on the opposite border. In
    normal mode a coordinate with some component outside [0, side) has no cell and None is returned.

    Axis 0 is the most significant digit of the mixed radix index, matching decode.
    """
    if side <= 0:
        return None
    index = 0
    for c in np.asarray(coord).reshape(-1):
        cur = int(c)
        if periodic:
            cur = cur % side
        elif c < 0 or c >= side:
            return None
        index = index * side + cur
    return index


def encode_many(coords, side, periodic):
    """Vectorized encode over the last axis of coords. Coordinates without a cell are mapped to -1."""
    coords = np.asarray(coords, dtype=np.int64)
    if side <= 0:
        return np.full(coords.shape[:-1], -1, dtype=np.int64)
    if periodic:
        coords = np.mod(coords, side)
        valid = np.ones(coords.shape[:-1], dtype=bool)
    else:
        valid = np.all((coords >= 0) & (coords < side), axis=-1)
    weights = side ** np.arange(coords.shape[-1] - 1, -1, -1, dtype=np.int64)
    index = np.einsum("...i,i->...", coords, weights)
    return np.where(valid, index, -1)


def decode(index, side, dim):
    """Inverse of encode for in-range coordinates. Returns None if index does not address a cell of a grid with
    side**dim cells."""
    if index < 0 or index >= side ** dim:
        return None
    result = np.zeros(dim, dtype=np.int64)
    last = index
    for n in range(dim - 1, -1, -1):
        last, result[n] = divmod(last, side)
    return result


def get_parent(coord, level):
    """Project a cell coordinate of refinement level `level` onto the top level cell containing it.

    Floor division by 2**level, so negative coordinates round towards minus infinity. Coordinates whose parent lies
    outside of the top level grid are projected all the same and left to encode to accept or reject.
    """
    return np.floor_divide(np.asarray(coord, dtype=np.int64), 2 ** level)


def sample_to_index(point, spacing):
    """Integer coordinate of the cell of width spacing that contains point."""
    return np.floor(np.asarray(point, dtype=np.float64) / spacing).astype(np.int64)


def index_to_sample(coord, spacing):
    """Physical position of the lower corner of the cell of width spacing at coord."""
    return np.asarray(coord, dtype=np.float64) * spacing


class Grid:
    """Top level occupancy grid over [0, side * cell)^dim.

    Each cell holds at most one sample. The cell width 2 * radius / sqrt(dim) makes the cell diagonal equal to the
    minimum separation, so two samples can never share a cell.

    Parameters
    ----------
    radius: float
        Disk radius of the run, in (0, sqrt(2) / 2].

    dim: int
        Dimension of the points.

    periodic: bool (default False)
        If true, the grid wraps around on every axis.

    Attributes
    ----------
    cell: float
        Width of a top level cell.

    side: int
        Number of top level cells per axis, floor(1 / cell).

    positions: np.ndarray
        Array of shape (side**dim, dim) with the sample position of every occupied cell.

    occupied: np.ndarray
        Boolean mask of shape (side**dim, ) of the cells holding a sample.

    seeded: np.ndarray
        Boolean mask of the cells whose sample was loaded with insert rather than generated.

    outside: list
        Pre-existing positions which could not be stored in a cell of their own.

    neighbour_offsets: np.ndarray
        Offsets of the ring of top level cells which can hold a sample closer than 2 * radius to a point of the
        center cell. The reach is max(2, ceil(sqrt(dim))) cells, i.e. the 5^dim ring for dim <= 4.
    """

    def __init__(self, radius: float, dim: int, periodic: bool = False):
        check_radius(radius)
        check_dim(dim)
        self.radius = float(radius)
        self.dim = int(dim)
        self.periodic = bool(periodic)
        self.cell = 2.0 * self.radius / np.sqrt(self.dim)
        self.side = int(1.0 / self.cell)

        n_cells = self.side ** self.dim
        self.positions = np.full((n_cells, self.dim), np.nan)
        self.occupied = np.zeros(n_cells, dtype=bool)
        self.seeded = np.zeros(n_cells, dtype=bool)
        self.outside: List[np.ndarray] = []

        reach = max(2, int(np.ceil(np.sqrt(self.dim))))
        self.neighbour_offsets = combination_array(range(-reach, reach + 1), self.dim)

    @property
    def cells(self) -> int:
        return len(self.occupied)

    @property
    def sqradius(self) -> float:
        return (2.0 * self.radius) ** 2

    def cell_indices(self) -> np.ndarray:
        """Coordinates of all top level cells as an (side**dim, dim) array."""
        return np.indices((self.side,) * self.dim, dtype=np.int64).reshape(self.dim, -1).T.copy()

    def slot(self, coord) -> Optional[int]:
        return encode(coord, self.side, self.periodic)

    def slots(self, coords) -> np.ndarray:
        return encode_many(coords, self.side, self.periodic)

    def get(self, coord) -> Optional[np.ndarray]:
        """Sample stored in the cell at coord. None if the cell is empty or coord has no cell."""
        slot = self.slot(coord)
        if slot is None or not self.occupied[slot]:
            return None
        return self.positions[slot].copy()

    def put(self, coord, position) -> bool:
        slot = self.slot(coord)
        if slot is None:
            return False
        self.positions[slot] = as_point(position, self.dim)
        self.occupied[slot] = True
        return True

    def get_parent(self, coord, level: int) -> np.ndarray:
        return get_parent(coord, level)

    def neighbours(self, coord) -> np.ndarray:
        """Positions of all samples in the neighbour ring of the top level cell at coord, as a (k, dim) array."""
        slots = self.slots(np.asarray(coord, dtype=np.int64) + self.neighbour_offsets)
        slots = slots[slots >= 0]
        return self.positions[slots[self.occupied[slots]]]

    def insert(self, position) -> bool:
        """Load a pre-existing sample. It is stored in the top level cell containing it if that cell exists and is
        free, otherwise it is kept on the outside list. Returns whether it got a cell."""
        position = as_point(position, self.dim)
        slot = encode(sample_to_index(position, self.cell), self.side, periodic=False)
        if slot is None or self.occupied[slot]:
            self.outside.append(position)
            return False
        self.positions[slot] = position
        self.occupied[slot] = True
        self.seeded[slot] = True
        return True

    def occupied_positions(self) -> np.ndarray:
        return self.positions[self.occupied]

    def into_samples(self, samples: List[Sample], radius: float) -> List[Sample]:
        """Append the generated samples, i.e. all occupied cells which were not seeded, to samples."""
        generated = self.positions[self.occupied & ~self.seeded]
        samples.extend(Sample(position, radius) for position in generated)
        return samples
