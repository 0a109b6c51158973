from poisson_disk.generator import GenerationStats, PoissonDisk, PoissonGenerator
from poisson_disk.sample import Sample
from poisson_disk.validation import find_violations, min_separation, uncovered_points

__all__ = [
    "GenerationStats",
    "PoissonDisk",
    "PoissonGenerator",
    "Sample",
    "find_violations",
    "min_separation",
    "uncovered_points",
]
