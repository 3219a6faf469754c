import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np

from .electric_field import ElectricField

logger = logging.getLogger(__name__)


@dataclass
class GridBounds:
    x_start: float = -200.0
    x_end: float = 200.0
    y_start: float = -200.0
    y_end: float = 200.0

    def linspaces(self, step: float) -> Tuple[np.ndarray, np.ndarray]:
        """Grid node coordinates from start to end (inclusive) at ``step`` spacing."""
        if step <= 0:
            raise ValueError("grid step must be positive")
        nx = int(np.floor((self.x_end - self.x_start) / step + 1e-9)) + 1
        ny = int(np.floor((self.y_end - self.y_start) / step + 1e-9)) + 1
        x = self.x_start + step * np.arange(max(nx, 0))
        y = self.y_start + step * np.arange(max(ny, 0))
        return x, y


@dataclass(frozen=True)
class SampledPoint:
    position: Tuple[float, float]
    level: float
    potential: float


def band_levels(min_potential: float, max_potential: float, band_count: int) -> List[float]:
    """Target potentials min, min+step, ... up to and including max."""
    if band_count < 1:
        raise ValueError("band_count must be at least 1")
    step = (max_potential - min_potential) / band_count
    if step == 0:
        return [min_potential]
    levels = []
    level = min_potential
    while level <= max_potential:
        levels.append(level)
        nxt = level + step
        if nxt == level:
            raise ValueError(f"band step {step!r} is below the resolution of level {level!r}")
        level = nxt
    return levels


def sample_equipotentials(
    field: ElectricField,
    min_potential: float = 10.0,
    max_potential: float = 50.0,
    band_count: int = 5,
    bounds: GridBounds = None,
    grid_step: float = 10.0,
    tolerance: float = 5.0,
    cancel=None,
) -> Iterator[SampledPoint]:
    """
    Grid nodes whose potential is within ``tolerance`` of a band level.

    This is a classification scan, not contour tracing: one physical
    contour comes out as a scattered set of nodes and neighbouring bands
    may overlap. Order is band, then x, then y.

    Arguments are checked right away; the points themselves are produced
    lazily by the returned iterator.
    """
    if bounds is None:
        bounds = GridBounds()
    levels = band_levels(min_potential, max_potential, band_count)
    x, y = bounds.linspaces(grid_step)
    return _scan_levels(field, levels, x, y, tolerance, cancel)


def _scan_levels(field, levels, x, y, tolerance, cancel) -> Iterator[SampledPoint]:
    # indexing="ij" keeps x as the outer scan axis
    X, Y = np.meshgrid(x, y, indexing="ij")
    V = field.potential_on_grid(X, Y)

    for level in levels:
        if cancel is not None and cancel.is_set():
            logger.info("Equipotential sampling cancelled before level %g", level)
            return
        hits = np.argwhere(np.abs(V - level) < tolerance)
        logger.debug("level %g: %d grid points", level, len(hits))
        for i, j in hits:
            yield SampledPoint((float(X[i, j]), float(Y[i, j])), level, float(V[i, j]))
