"""
VTK export of point values.

The plate integrand records the surface pressure at every boundary
integration point. This module writes such (position, value) pairs as
VTK Legacy POLYDATA files (one vertex per point), one file per field
and load/time step, for visualization in ParaView or VisIt.

Running block counters mimic the geometry and result block numbering
of multi-block visualization formats, so that callers can keep track
of how many blocks have been written.
"""

import logging
import numpy as np
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass
class BlockCounters:
    """Running geometry and result block counters."""
    geo_blk: int = 0
    n_block: int = 0


class VTKPointWriter:
    """
    Writer of point-value fields to VTK Legacy files.

    Files are named <stem>_<field>_<step>.vtk in the directory of the
    given base path.

    Parameters:
        filename: Base path, e.g. "results/plate.vtk"
    """

    def __init__(self, filename: str):
        path = Path(filename)
        self.directory = path.parent
        self.stem = path.stem
        self.written = []

    def path_for(self, name: str, i_step: int) -> Path:
        return self.directory / f"{self.stem}_{name}_{i_step:04d}.vtk"

    def write_point_values(self, pairs: Sequence[Tuple[np.ndarray, float]],
                           i_step: int, counters: BlockCounters,
                           name: str = "values") -> bool:
        """
        Write a scalar point field for a load/time step.

        Parameters:
            pairs: Ordered (position, value) pairs
            i_step: Load/time step identifier
            counters: Running block counters, incremented on success
            name: Field name

        Returns:
            True on success, False if the file could not be written
        """
        points = np.zeros((len(pairs), 3))
        values = np.zeros(len(pairs))
        for k, (X, value) in enumerate(pairs):
            X = np.asarray(X, dtype=float)
            points[k, :len(X)] = X
            values[k] = value

        path = self.path_for(name, i_step)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w') as f:
                f.write("# vtk DataFile Version 3.0\n")
                f.write(f"{name} step {i_step}\n")
                f.write("ASCII\n")
                f.write("DATASET POLYDATA\n")

                n_points = len(points)
                f.write(f"POINTS {n_points} double\n")
                for x, y, z in points:
                    f.write(f"{x} {y} {z}\n")

                f.write(f"VERTICES {n_points} {2 * n_points}\n")
                for k in range(n_points):
                    f.write(f"1 {k}\n")

                f.write(f"\nPOINT_DATA {n_points}\n")
                f.write(f"SCALARS {name} double 1\n")
                f.write("LOOKUP_TABLE default\n")
                for value in values:
                    f.write(f"{value}\n")
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            return False

        counters.geo_blk += 1
        counters.n_block += 1
        self.written.append(path)
        logger.info("Exported VTK point data: %s", path)
        return True
