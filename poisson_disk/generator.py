from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np

from poisson_disk.combinatorics import combination_array
from poisson_disk.distance import covered_many, is_disk_free
from poisson_disk.grid import MAX_RADIUS, Grid, check_dim, check_radius, index_to_sample
from poisson_disk.sample import Sample
from poisson_disk.vector import as_point

# Bits of a float64 mantissa, including the implicit one.
MANTISSA_DIGITS = np.finfo(np.float64).nmant + 1

RandomState = Union[None, int, np.random.Generator]


@dataclass
class GenerationStats:
    levels: int = 0
    candidates_per_level: List[int] = field(default_factory=list)
    samples: int = 0
    reached_precision_bound: bool = False


def precision_bound(side: int) -> int:
    """First level which can no longer be refined. A cell coordinate of level k needs bit_length(side) + k bits, and
    beyond the float64 mantissa the sub cell positions become indistinguishable."""
    return max(MANTISSA_DIGITS - int(side).bit_length(), 0)


def choose_random_sample(rng: np.random.Generator, grid: Grid, coord, level: int) -> np.ndarray:
    """Uniform random point inside the cell at coord of the given level."""
    spacing = grid.cell / 2 ** level
    return index_to_sample(np.asarray(coord, dtype=np.int64) + rng.random(grid.dim), spacing)


def _swap_remove(indices: np.ndarray, index: int, count: int) -> int:
    count -= 1
    indices[index] = indices[count]
    return count


class PoissonGenerator:
    """Poisson-disk distribution generator for the unit hypercube of any dimension.

    Generates a maximal set of points in [0, 1)^dim where no two points are closer than 2 * radius, with
    O(N log N) time and space in the number of samples N. Based on the hierarchical grid refinement of
    Gamito, Manuel N., and Steve C. Maddock. "Accurate multidimensional Poisson-disk sampling."
    ACM Transactions on Graphics (TOG) 29.1 (2009): 8.

    Parameters
    ----------
    dim: int
        Dimension of the generated points.

    radius: float
        Radius of the disk around each sample, in (0, sqrt(2) / 2].

    periodic: bool (default False)
        If true, the domain is a torus and distances wrap around the borders, which makes the result tileable.

    random_state: Optional[int | np.random.Generator] (default None)
        Seed or generator used to throw the darts. Runs with equal seeds produce identical outputs.

    throw_fraction: float (default 0.3)
        Fraction of the live candidates on which a dart is thrown on every level before subdividing.

    max_level: Optional[int] (default None)
        Optional cap on the number of refinement levels. The float64 precision bound applies in any case.

    verbose: bool (default False)
        If true, print the progress of every level.

    Attributes
    ----------
    stats: Optional[GenerationStats]
        Statistics of the last call to generate.
    """

    def __init__(
        self,
        dim: int,
        radius: float,
        periodic: bool = False,
        random_state: RandomState = None,
        throw_fraction: float = 0.3,
        max_level: Optional[int] = None,
        verbose: bool = False,
    ):
        check_dim(dim)
        check_radius(radius)
        if not 0.0 < throw_fraction <= 1.0:
            raise ValueError(f"The throw fraction should lie in (0, 1], given {throw_fraction}.")
        if max_level is not None and max_level < 0:
            raise ValueError(f"The maximum level should be non-negative, given {max_level}.")

        self.dim = int(dim)
        self._radius = float(radius)
        self.periodic = periodic
        self.random_state = random_state
        self.rng = np.random.default_rng(random_state)
        self.throw_fraction = throw_fraction
        self.max_level = max_level
        self.verbose = verbose
        self.stats: Optional[GenerationStats] = None

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, radius: float):
        check_radius(radius)
        self._radius = float(radius)

    def set_radius(self, radius: float):
        self.radius = radius

    def generate(self, points: Optional[List[Sample]] = None) -> List[Sample]:
        """Populate points with a Poisson-disk distribution and return it.

        The existing points are respected: the result is a Poisson-disk distribution iff they already were one, and
        a maximal one iff they also share the radius of this generator. Only the new samples are appended.
        """
        if points is None:
            points = []

        grid = Grid(self._radius, self.dim, self.periodic)
        for sample in points:
            grid.insert(as_point(sample.pos, self.dim))

        bound = precision_bound(grid.side)
        if self.max_level is not None:
            bound = min(bound, self.max_level)

        stats = GenerationStats()
        indices = grid.cell_indices()
        level = 0
        while len(indices) and level < bound:
            stats.candidates_per_level.append(len(indices))
            if self.verbose:
                print(
                    f"Level {level}/{bound}: {len(indices)} candidates, "
                    f"{int(grid.occupied.sum())}/{grid.cells} cells occupied."
                )
            indices = self.throw_samples(grid, indices, level, self.throw_fraction)
            if len(indices) == 0:
                break
            indices = self.subdivide(grid, indices, level)
            level += 1

        n_before = len(points)
        grid.into_samples(points, self._radius)

        stats.levels = len(stats.candidates_per_level)
        stats.samples = len(points) - n_before
        stats.reached_precision_bound = len(indices) > 0
        self.stats = stats

        if self.verbose:
            print(f"Generated {stats.samples} samples in {stats.levels} levels.")
            if stats.reached_precision_bound:
                print(f"Stopped at level {level} with {len(indices)} candidates left.")

        return points

    def throw_samples(self, grid: Grid, indices: np.ndarray, level: int, a: float) -> np.ndarray:
        """Throw ceil(a * len(indices)) darts, each on a uniformly chosen live candidate cell.

        A candidate whose top level parent is occupied is dead and gets dropped. Otherwise a random point of the cell
        is accepted if its disk is free, which also retires the candidate. Darts are thrown one after the other as
        each acceptance changes what the following darts see. Returns the surviving candidates.
        """
        count = len(indices)
        throws = int(np.ceil(a * count))
        for _ in range(throws):
            if count == 0:
                break
            index = int(self.rng.integers(count))
            cur = indices[index].copy()
            parent = grid.get_parent(cur, level)
            if grid.get(parent) is not None:
                count = _swap_remove(indices, index, count)
                continue

            sample = choose_random_sample(self.rng, grid, cur, level)
            if is_disk_free(grid, cur, level, sample):
                grid.put(parent, sample)
                count = _swap_remove(indices, index, count)
        return indices[:count]

    def subdivide(self, grid: Grid, indices: np.ndarray, level: int) -> np.ndarray:
        """Replace every candidate with its 2^D children of the next level, dropping the covered ones. The order of
        the candidates carries no meaning and is not kept."""
        child_offsets = combination_array((0, 1), self.dim)
        children = (2 * indices[:, None, :] + child_offsets).reshape(-1, self.dim)
        return children[~covered_many(grid, children, level + 1)]


class PoissonDisk:
    """Builder of PoissonGenerator objects.

    Example
    -------
        >>> generator = PoissonDisk(random_state=42).build_radius(0.1)
        >>> samples = generator.generate()
    """

    def __init__(self, random_state: RandomState = None, verbose: bool = False):
        self.random_state = random_state
        self.verbose = verbose
        self.periodicity = False

    def periodic(self) -> "PoissonDisk":
        """Generate periodic, i.e. tileable, distributions."""
        self.periodicity = True
        return self

    def build_radius(self, radius: float, dim: int = 2) -> PoissonGenerator:
        """Build a generator with the given radius, which should lie in (0, sqrt(2) / 2]."""
        check_radius(radius)
        return PoissonGenerator(
            dim=dim,
            radius=radius,
            periodic=self.periodicity,
            random_state=self.random_state,
            verbose=self.verbose,
        )

    def build_relative_radius(self, radius: float, dim: int = 2) -> PoissonGenerator:
        """Build a generator with a radius relative to the maximum one, which should lie in (0, 1]."""
        if not 0.0 < radius <= 1.0:
            raise ValueError(f"The relative radius should lie in (0, 1], given {radius}.")
        return self.build_radius(radius * MAX_RADIUS, dim=dim)
