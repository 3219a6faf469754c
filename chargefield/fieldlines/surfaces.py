"""
Drawing surfaces the scene is rendered onto.

All geometry arrives in the charge-centered frame; translating it to
screen or document coordinates is the surface's job.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class DrawingSurface:
    """Base class: the four draw calls of a scene plus clear/finish."""

    def clear(self):
        raise NotImplementedError

    def draw_charge_marker(self, position, is_positive: bool):
        raise NotImplementedError

    def draw_charge_label(self, position, text: str):
        raise NotImplementedError

    def draw_polyline(self, points):
        raise NotImplementedError

    def draw_marker_point(self, position):
        raise NotImplementedError

    def finish(self):
        """Called once every command of a pass has been issued."""


@dataclass(frozen=True)
class DrawCommand:
    kind: str
    args: Tuple[Any, ...]


@dataclass
class RecordingSurface(DrawingSurface):
    """Keeps the commands of the last pass, e.g. for tests."""

    commands: List[DrawCommand] = field(default_factory=list)
    clears: int = 0

    def clear(self):
        self.commands.clear()
        self.clears += 1

    def _record(self, kind, *args):
        self.commands.append(DrawCommand(kind, args))

    def draw_charge_marker(self, position, is_positive):
        self._record("charge_marker", tuple(position), bool(is_positive))

    def draw_charge_label(self, position, text):
        self._record("charge_label", tuple(position), text)

    def draw_polyline(self, points):
        self._record("polyline", tuple(map(tuple, np.asarray(points).tolist())))

    def draw_marker_point(self, position):
        self._record("marker_point", tuple(position))

    def of_kind(self, kind: str) -> List[DrawCommand]:
        return [c for c in self.commands if c.kind == kind]


class MatplotlibSurface(DrawingSurface):
    """Draw on a matplotlib Axes. Data coordinates equal the charge frame."""

    def __init__(self, ax, extent: float = 250.0, title: str = "Quadrupole field"):
        self.ax = ax
        self.extent = extent
        self.title = title

    def clear(self):
        self.ax.cla()
        self.ax.set_aspect("equal", adjustable="box")
        self.ax.set_xlim(-self.extent, self.extent)
        # screen convention: y grows downwards
        self.ax.set_ylim(self.extent, -self.extent)
        self.ax.set_xlabel("x")
        self.ax.set_ylabel("y")
        self.ax.set_title(self.title)

    def draw_charge_marker(self, position, is_positive):
        color = "red" if is_positive else "blue"
        self.ax.scatter([position[0]], [position[1]], s=40, c=color, edgecolors="black",
                        linewidths=1, zorder=3)

    def draw_charge_label(self, position, text):
        self.ax.annotate(text, xy=position, xytext=(6, -4), textcoords="offset points",
                         fontsize=9, color="black")

    def draw_polyline(self, points):
        points = np.asarray(points)
        if len(points) >= 2:
            self.ax.plot(points[:, 0], points[:, 1], color="red", lw=1.0)

    def draw_marker_point(self, position):
        self.ax.plot([position[0]], [position[1]], marker="o", markersize=1.5, color="blue",
                     linestyle="none")

    def finish(self):
        canvas = self.ax.figure.canvas
        if canvas is not None:
            canvas.draw_idle()


class SvgSurface(DrawingSurface):
    """
    Collect the scene as SVG elements and write them on ``finish``.

    The charge frame origin sits in the middle of a ``width`` x ``height``
    canvas.
    """

    def __init__(self, file, width: int = 600, height: int = 600):
        if width <= 0 or height <= 0:
            raise ValueError("Invalid canvas extents")
        self.file = file
        self.width = width
        self.height = height
        self.elements: List[str] = []

    def _x(self, x):
        return x + self.width / 2

    def _y(self, y):
        return y + self.height / 2

    def clear(self):
        self.elements = []

    def draw_charge_marker(self, position, is_positive):
        fill = "red" if is_positive else "blue"
        self.elements.append(
            f'<circle cx="{self._x(position[0]):.6g}" cy="{self._y(position[1]):.6g}" r="5" '
            f'fill="{fill}" stroke="black" stroke-width="1" />'
        )

    def draw_charge_label(self, position, text):
        self.elements.append(
            f'<text x="{self._x(position[0]) + 10:.6g}" y="{self._y(position[1]) + 5:.6g}" '
            f'font-size="10" fill="black">{text}</text>'
        )

    def draw_polyline(self, points):
        if len(points) < 2:
            return
        parts = [f"M {self._x(points[0][0]):.6g} {self._y(points[0][1]):.6g}"]
        for p in points[1:]:
            parts.append(f"L {self._x(p[0]):.6g} {self._y(p[1]):.6g}")
        self.elements.append(f'<path d="{" ".join(parts)}" stroke="red" fill="none" />')

    def draw_marker_point(self, position):
        self.elements.append(
            f'<circle cx="{self._x(position[0]):.6g}" cy="{self._y(position[1]):.6g}" r="1" fill="blue" />'
        )

    def finish(self):
        logger.info("writing %d elements to %s", len(self.elements), self.file)
        with open(self.file, "w", encoding="utf-8") as f:
            f.write(
                f'<svg xmlns="http://www.w3.org/2000/svg" '
                f'width="{self.width}" height="{self.height}">\n'
            )
            for element in self.elements:
                f.write(f"  {element}\n")
            f.write("</svg>\n")
