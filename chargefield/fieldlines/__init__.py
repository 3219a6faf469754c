from .charges import Charge, quadrupole
from .config import FieldConfig, SamplerConfig, load_config, save_config
from .electric_field import COULOMB_K, SINGULAR_RADIUS, ElectricField
from .equipotentials import GridBounds, SampledPoint, band_levels, sample_equipotentials
from .fieldlines import FieldLineTracer, Termination, TraceConfig, TracedLine, trace_line
from .scene import FieldScene, Scene, build_field, compose_scene, render_scene
from .surfaces import DrawCommand, DrawingSurface, MatplotlibSurface, RecordingSurface, SvgSurface
