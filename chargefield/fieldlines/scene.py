import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .charges import Charge
from .config import FieldConfig
from .electric_field import ElectricField
from .equipotentials import SampledPoint, sample_equipotentials
from .fieldlines import FieldLineTracer, TracedLine
from .surfaces import DrawingSurface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scene:
    charges: Tuple[Charge, ...]
    lines: Tuple[TracedLine, ...]
    samples: Tuple[SampledPoint, ...]


def build_field(cfg: FieldConfig) -> ElectricField:
    return ElectricField(cfg.charges, k=cfg.k, singular_radius=cfg.singular_radius)


def compose_scene(
    field: ElectricField,
    step_size: int,
    cfg: Optional[FieldConfig] = None,
    cancel=None,
    progress: bool = False,
) -> Scene:
    """Trace every seeded field line and sample the equipotential bands."""
    if cfg is None:
        cfg = FieldConfig()
    tracer = FieldLineTracer(field, cfg.trace)
    lines = tracer.trace_all(step_size, progress=progress, cancel=cancel)

    s = cfg.sampler
    samples: List[SampledPoint] = []
    if cancel is None or not cancel.is_set():
        samples = list(
            sample_equipotentials(
                field,
                min_potential=s.min_potential,
                max_potential=s.max_potential,
                band_count=s.band_count,
                bounds=s.bounds,
                grid_step=s.grid_step,
                tolerance=s.tolerance,
                cancel=cancel,
            )
        )
    return Scene(field.charges, tuple(lines), tuple(samples))


def render_scene(scene: Scene, surface: DrawingSurface) -> None:
    for charge in scene.charges:
        surface.draw_charge_marker(charge.position, charge.is_positive)
        surface.draw_charge_label(charge.position, charge.label)
    for line in scene.lines:
        surface.draw_polyline(line.points)
    for sample in scene.samples:
        surface.draw_marker_point(sample.position)
    surface.finish()


class FieldScene:
    """
    Redraws the whole field picture on a surface.

    The step size is read from ``step_size_source`` (e.g. a slider) on every
    redraw; nothing else is kept between passes.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        cfg: Optional[FieldConfig] = None,
        step_size_source: Optional[Callable[[], int]] = None,
    ):
        self.surface = surface
        self.cfg = cfg or FieldConfig()
        self.field = build_field(self.cfg)
        self.step_size_source = step_size_source or (lambda: self.cfg.step_size)

    def on_redraw_requested(self, cancel=None) -> Scene:
        step_size = int(self.step_size_source())
        t1 = time.perf_counter()
        self.surface.clear()
        scene = compose_scene(self.field, step_size, self.cfg, cancel=cancel)
        render_scene(scene, self.surface)
        logger.info(
            "Redraw with step %d: %d lines, %d equipotential points in %.3fs",
            step_size, len(scene.lines), len(scene.samples), time.perf_counter() - t1,
        )
        return scene
