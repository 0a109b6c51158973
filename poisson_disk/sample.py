from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class Sample:
    """Position of an accepted point together with the radius of the disk around it. All samples of one run share the
    same radius."""

    pos: Tuple[float, ...]
    radius: float

    def __post_init__(self):
        object.__setattr__(self, "pos", tuple(float(c) for c in np.asarray(self.pos).reshape(-1)))
        object.__setattr__(self, "radius", float(self.radius))

    @property
    def position(self) -> np.ndarray:
        return np.array(self.pos, dtype=np.float64)

    @property
    def dim(self) -> int:
        return len(self.pos)
