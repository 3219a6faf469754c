"""JSON configuration for a field scene."""

import json
import logging
import math
from dataclasses import asdict, dataclass, field, fields
from typing import List

from .charges import Charge, quadrupole
from .electric_field import COULOMB_K, SINGULAR_RADIUS
from .equipotentials import GridBounds, band_levels
from .fieldlines import TraceConfig

logger = logging.getLogger(__name__)


@dataclass
class SamplerConfig:
    min_potential: float = 10.0
    max_potential: float = 50.0
    band_count: int = 5
    bounds: GridBounds = field(default_factory=GridBounds)
    grid_step: float = 10.0
    tolerance: float = 5.0

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ValueError for settings the sampler cannot run with."""
        if self.band_count < 1:
            raise ValueError(f"band_count must be at least 1, got {self.band_count}")
        if not (self.grid_step > 0 and math.isfinite(self.grid_step)):
            raise ValueError(f"grid_step must be a finite positive number, got {self.grid_step}")
        if not self.tolerance >= 0:
            raise ValueError(f"tolerance must not be negative, got {self.tolerance}")
        if not (math.isfinite(self.min_potential) and math.isfinite(self.max_potential)):
            raise ValueError("min_potential and max_potential must be finite")
        band_levels(self.min_potential, self.max_potential, self.band_count)


@dataclass
class FieldConfig:
    charges: List[Charge] = field(default_factory=quadrupole)
    k: float = COULOMB_K
    singular_radius: float = SINGULAR_RADIUS
    step_size: int = 5
    trace: TraceConfig = field(default_factory=TraceConfig)
    sampler: SamplerConfig = field(default_factory=SamplerConfig)

    def validate(self):
        if not (self.singular_radius >= 0 and math.isfinite(self.singular_radius)):
            raise ValueError(f"singular_radius must be a finite non-negative number, got {self.singular_radius}")
        self.trace.validate()
        self.sampler.validate()

    def to_dict(self) -> dict:
        cfg = asdict(self)
        cfg["charges"] = [
            {"magnitude": c.magnitude, "x": c.position[0], "y": c.position[1]}
            for c in self.charges
        ]
        cfg["meta"] = {"app": "chargefield", "version": 1}
        return cfg

    @classmethod
    def from_dict(cls, cfg: dict) -> "FieldConfig":
        """Build a config from a dict; missing keys keep their defaults."""
        try:
            out = cls()
            if "charges" in cfg:
                out.charges = [
                    Charge(float(c["magnitude"]), (float(c["x"]), float(c["y"])))
                    for c in cfg["charges"]
                ]
            out.k = float(cfg.get("k", out.k))
            out.singular_radius = float(cfg.get("singular_radius", out.singular_radius))
            out.step_size = _as_int(cfg.get("step_size", out.step_size))
            out.trace = _update(out.trace, cfg.get("trace", {}))

            s = dict(cfg.get("sampler", {}))
            bounds = _update(out.sampler.bounds, s.pop("bounds", {}))
            out.sampler = _update(out.sampler, s)
            out.sampler.bounds = bounds
            out.validate()
        except (KeyError, TypeError, ValueError) as ex:
            raise ValueError(f"Invalid config format: {ex}") from ex
        return out


def _update(obj, values: dict):
    """Copy known keys of ``values`` onto ``obj``, cast to the default's type."""
    for f in fields(obj):
        if f.name in values:
            cast = _as_int if isinstance(getattr(obj, f.name), int) else float
            setattr(obj, f.name, cast(values[f.name]))
    return obj


def _as_int(value) -> int:
    """Integer settings accept whole numbers only; 2.7 is an error, not 2."""
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    return int(value)


def load_config(path) -> FieldConfig:
    with open(path, "r", encoding="utf-8") as f:
        cfg = json.load(f)
    logger.info("Loaded config from %s", path)
    return FieldConfig.from_dict(cfg)


def save_config(cfg: FieldConfig, path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(cfg.to_dict(), f, indent=2)
    logger.info("Saved config to %s", path)
