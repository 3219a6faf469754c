import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from .charges import Charge
from .electric_field import ElectricField

logger = logging.getLogger(__name__)


class Termination(Enum):
    ABSORBED = "absorbed"  # reached a charge
    LOST = "lost"  # field too weak to follow
    MAX_STEPS = "max_steps"
    INVALID_STEP = "invalid_step"


@dataclass
class TraceConfig:
    max_steps: int = 1000
    min_field: float = 0.1
    absorption_radius: float = 10.0
    seed_radius: float = 10.0  # distance of the seed ring from its charge
    angle_step: int = 15

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ValueError for settings a trace cannot run with."""
        if self.max_steps < 0:
            raise ValueError(f"max_steps must not be negative, got {self.max_steps}")
        if not 0 < self.angle_step <= 360:
            raise ValueError(f"angle_step must be in (0, 360], got {self.angle_step}")
        for name in ("min_field", "absorption_radius", "seed_radius"):
            value = getattr(self, name)
            if not (value >= 0 and math.isfinite(value)):
                raise ValueError(f"{name} must be a finite non-negative number, got {value}")

    def seed_angles(self) -> List[int]:
        return list(range(0, 360, self.angle_step))


@dataclass(frozen=True, eq=False)
class TracedLine:
    points: np.ndarray
    seed_angle: float
    termination: Termination

    def __post_init__(self):
        self.points.setflags(write=False)

    @property
    def start(self) -> np.ndarray:
        return self.points[0]

    @property
    def end(self) -> np.ndarray:
        return self.points[-1]

    def __len__(self):
        return len(self.points)


def point_distance(p1, p2):
    return math.sqrt((p2[0] - p1[0]) ** 2 + (p2[1] - p1[1]) ** 2)


def absorbing_charge(p, charges, radius) -> Optional[Charge]:
    """First charge closer than ``radius`` to ``p``, if any."""
    for charge in charges:
        if point_distance(p, charge.position) < radius:
            return charge
    return None


def trace_line(
    field: ElectricField,
    seed,
    angle_degrees: float,
    step_size: int,
    cfg: Optional[TraceConfig] = None,
) -> TracedLine:
    """
    Follow the field direction from ``seed`` in steps of ``step_size``.

    Every iteration first checks for a weak field, then for a charge within
    the absorption radius of the stepped point. An absorbed line ends on
    the exact charge position.
    """
    if cfg is None:
        cfg = TraceConfig()
    current = np.array(seed, dtype=float).reshape(2)
    pts = [current.copy()]

    if step_size <= 0:
        return TracedLine(np.array(pts), angle_degrees, Termination.INVALID_STEP)

    termination = Termination.MAX_STEPS
    for _ in range(cfg.max_steps):
        e = field.field(current)
        magnitude = math.sqrt(e[0] * e[0] + e[1] * e[1])
        if magnitude < cfg.min_field:
            termination = Termination.LOST
            break

        nxt = current + step_size * (e / magnitude)

        charge = absorbing_charge(nxt, field.charges, cfg.absorption_radius)
        if charge is not None:
            pts.append(charge.as_array())
            termination = Termination.ABSORBED
            break

        pts.append(nxt)
        current = nxt

    return TracedLine(np.array(pts), angle_degrees, termination)


class FieldLineTracer:
    """
    Trace field lines of an ElectricField, seeded on rings around the
    positive charges. Negative charges only act as absorbers.
    """

    def __init__(self, field: ElectricField, cfg: Optional[TraceConfig] = None):
        self.field = field
        self.cfg = cfg or TraceConfig()

    def trace(self, seed, angle_degrees: float, step_size: int) -> TracedLine:
        return trace_line(self.field, seed, angle_degrees, step_size, self.cfg)

    # ---- seeding ----
    def seeds_from_charges(self) -> List[Tuple[np.ndarray, int]]:
        """(seed point, angle) for every positive charge and seed angle."""
        seeds = []
        r = self.cfg.seed_radius
        for charge in self.field.positive_charges:
            cx, cy = charge.position
            for angle in self.cfg.seed_angles():
                a = math.radians(angle)
                seeds.append((np.array([cx + r * math.cos(a), cy + r * math.sin(a)]), angle))
        return seeds

    def trace_all(self, step_size: int, progress: bool = False, cancel=None) -> List[TracedLine]:
        """Trace one line per seed, in (charge, angle) order.

        ``cancel`` is an optional threading.Event; once set, no further
        lines are started and the lines traced so far are returned.
        """
        seeds = self.seeds_from_charges()
        iterator = seeds
        if progress:
            iterator = tqdm(seeds, desc="Tracing", unit="line")

        lines: List[TracedLine] = []
        for seed, angle in iterator:
            if cancel is not None and cancel.is_set():
                logger.info("Tracing cancelled after %d of %d lines", len(lines), len(seeds))
                break
            line = self.trace(seed, angle, step_size)
            logger.debug(
                "line at %s deg from (%.1f, %.1f): %s after %d points",
                angle, seed[0], seed[1], line.termination.value, len(line),
            )
            lines.append(line)
        return lines
