import math
from typing import Sequence, Tuple

import numpy as np

from .charges import Charge

COULOMB_K = 9e9
SINGULAR_RADIUS = 0.1


class ElectricField:
    """
    Electrostatic field and potential of a set of point charges.

    Contributions are superposed charge by charge. A charge closer than
    ``singular_radius`` to the query point is left out of the sum instead
    of producing an infinite value.

    Parameters
    ----------
    charges : sequence of Charge
        Ordered charge set. Not modified.
    k : float
        Coulomb constant of the unit system.
    singular_radius : float
        Separation below which a charge's contribution is omitted.
    """

    def __init__(
        self,
        charges: Sequence[Charge],
        k: float = COULOMB_K,
        singular_radius: float = SINGULAR_RADIUS,
    ):
        self.charges: Tuple[Charge, ...] = tuple(charges)
        self.k = float(k)
        self.singular_radius = float(singular_radius)

    @property
    def positive_charges(self) -> Tuple[Charge, ...]:
        return tuple(c for c in self.charges if c.is_positive)

    # ---- point evaluation ----
    def field(self, point) -> np.ndarray:
        """Return the field vector [Ex, Ey] at ``point``."""
        px, py = float(point[0]), float(point[1])
        ex = 0.0
        ey = 0.0
        for charge in self.charges:
            dx = px - charge.position[0]
            dy = py - charge.position[1]
            r2 = dx * dx + dy * dy
            r = math.sqrt(r2)
            if r < self.singular_radius:
                continue
            force = self.k * charge.magnitude / r2
            ex += force * dx / r
            ey += force * dy / r
        return np.array([ex, ey])

    def potential(self, point) -> float:
        """Return the scalar potential at ``point``."""
        px, py = float(point[0]), float(point[1])
        total = 0.0
        for charge in self.charges:
            dx = px - charge.position[0]
            dy = py - charge.position[1]
            r = math.sqrt(dx * dx + dy * dy)
            if r < self.singular_radius:
                continue
            total += self.k * charge.magnitude / r
        return total

    # ---- grid evaluation ----
    def _deltas(self, X: np.ndarray, Y: np.ndarray, charge: Charge):
        dx = X - charge.position[0]
        dy = Y - charge.position[1]
        r2 = dx * dx + dy * dy
        r = np.sqrt(r2)
        return dx, dy, r2, r, r < self.singular_radius

    def field_on_grid(self, X, Y) -> Tuple[np.ndarray, np.ndarray]:
        """Field components on a meshgrid, same superposition as ``field``."""
        X = np.asarray(X, dtype=float)
        Y = np.asarray(Y, dtype=float)
        ex = np.zeros_like(X)
        ey = np.zeros_like(Y)
        with np.errstate(divide="ignore", invalid="ignore"):
            for charge in self.charges:
                dx, dy, r2, r, singular = self._deltas(X, Y, charge)
                force = self.k * charge.magnitude / r2
                ex += np.where(singular, 0.0, force * dx / r)
                ey += np.where(singular, 0.0, force * dy / r)
        return ex, ey

    def potential_on_grid(self, X, Y) -> np.ndarray:
        """Potential on a meshgrid, same superposition as ``potential``."""
        X = np.asarray(X, dtype=float)
        Y = np.asarray(Y, dtype=float)
        total = np.zeros_like(X)
        with np.errstate(divide="ignore", invalid="ignore"):
            for charge in self.charges:
                _, _, _, r, singular = self._deltas(X, Y, charge)
                total += np.where(singular, 0.0, self.k * charge.magnitude / r)
        return total
