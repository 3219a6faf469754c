from dataclasses import dataclass
from typing import List, Tuple

import numpy as np


@dataclass(frozen=True)
class Charge:
    """A fixed point charge. Positive magnitude = source, negative = sink."""

    magnitude: float
    position: Tuple[float, float]

    def __post_init__(self):
        x, y = self.position
        object.__setattr__(self, "magnitude", float(self.magnitude))
        object.__setattr__(self, "position", (float(x), float(y)))

    @property
    def is_positive(self) -> bool:
        return self.magnitude > 0

    @property
    def label(self) -> str:
        return "+q" if self.is_positive else "-q"

    def as_array(self) -> np.ndarray:
        return np.array(self.position, dtype=float)


def quadrupole(q: float = 1.0, half_side: float = 100.0) -> List[Charge]:
    """Four alternating charges on the corners of a square centered at the origin."""
    a = half_side
    return [
        Charge(q, (-a, -a)),
        Charge(-q, (a, -a)),
        Charge(q, (a, a)),
        Charge(-q, (-a, a)),
    ]
