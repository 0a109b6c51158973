from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd
import typer
from tqdm import tqdm

from poisson_disk import PoissonDisk, min_separation
from poisson_disk.vector import as_array


def main(
        output_path: Path,
        dim: int = 2,
        radius: Optional[float] = None,
        relative_radius: Optional[float] = None,
        periodic: bool = False,
        seed: int = 0,
        runs: int = 1,
        validate: bool = False,
        verbose: bool = False
):
    if (radius is None) == (relative_radius is None):
        raise typer.BadParameter('Please provide exactly one of --radius and --relative-radius.')
    if runs < 1:
        raise typer.BadParameter(f'The number of runs should be at least 1, given {runs}.')
    if output_path.suffix not in {'.npz', '.csv'}:
        raise typer.BadParameter(f'Unsupported output format {output_path.suffix}, use .npz or .csv.')

    all_samples = []
    for run in tqdm(range(runs), disable=runs == 1):
        builder = PoissonDisk(random_state=seed + run, verbose=verbose)
        if periodic:
            builder = builder.periodic()
        if radius is not None:
            generator = builder.build_radius(radius, dim=dim)
        else:
            generator = builder.build_relative_radius(relative_radius, dim=dim)

        samples = as_array(generator.generate(), dim=dim)
        all_samples.append(samples)

        if validate:
            separation = min_separation(samples, periodic=periodic)
            print(f'Run {run}: {len(samples)} samples, minimum separation {separation:.6f} '
                  f'(required {2 * generator.radius:.6f}).')

    print(f'Exporting {sum(len(s) for s in all_samples)} samples to {output_path}...')
    if output_path.suffix == '.npz':
        if runs == 1:
            np.savez(output_path, samples=all_samples[0])
        else:
            np.savez(output_path, **{f'samples_{i}': s for i, s in enumerate(all_samples)})
    else:
        frames = [
            pd.DataFrame(s, columns=[f'x{n}' for n in range(dim)]).assign(run=i)
            for i, s in enumerate(all_samples)
        ]
        table = pd.concat(frames, ignore_index=True)
        table[['run'] + [f'x{n}' for n in range(dim)]].to_csv(output_path, index=False)


if __name__ == '__main__':
    typer.run(main)
