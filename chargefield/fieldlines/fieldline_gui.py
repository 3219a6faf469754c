#!/usr/bin/env python3
"""
Small window showing the quadrupole field lines and equipotential points.

- Drag the slider to change the field-line step size; the picture is redrawn
- Save SVG to export the current picture
- Save/Load Config to keep charge and sampling settings as JSON

Requires: tkinter (stdlib), numpy, matplotlib, tqdm
"""

import logging
import tkinter as tk
from tkinter import filedialog, messagebox, ttk

import matplotlib
matplotlib.use("TkAgg")
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from .config import FieldConfig, load_config, save_config
from .scene import FieldScene
from .surfaces import MatplotlibSurface, SvgSurface

logger = logging.getLogger(__name__)


class FieldLinesApp(tk.Tk):
    def __init__(self, cfg: FieldConfig = None):
        super().__init__()
        self.title("Quadrupole field simulator")
        self.geometry("900x760")

        self.cfg = cfg or FieldConfig()
        self.step_size = tk.IntVar(value=self.cfg.step_size)

        self._build_ui()
        self.scene = self._make_scene()
        self._redraw()

    # ----- UI layout -----
    def _build_ui(self):
        left = ttk.Frame(self)
        left.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        fig = Figure(figsize=(7, 7), dpi=100)
        self.ax = fig.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(fig, master=left)
        self.canvas.get_tk_widget().pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        right = ttk.Frame(self, padding=6)
        right.pack(side=tk.RIGHT, fill=tk.Y)

        step_grp = ttk.LabelFrame(right, text="Field lines")
        step_grp.pack(fill=tk.X, pady=4)
        ttk.Label(step_grp, text="Step size:").pack(anchor="w")
        # tk.Scale (not ttk) so the value snaps to integers
        tk.Scale(
            step_grp, from_=1, to=20, resolution=1, orient=tk.HORIZONTAL,
            variable=self.step_size, command=lambda _v: self._redraw(),
        ).pack(fill=tk.X)

        act_grp = ttk.LabelFrame(right, text="Actions")
        act_grp.pack(fill=tk.X, pady=6)
        ttk.Button(act_grp, text="Save SVG", command=self._save_svg).pack(fill=tk.X, pady=2)
        ttk.Button(act_grp, text="Save Config", command=self._save_config).pack(fill=tk.X, pady=2)
        ttk.Button(act_grp, text="Load Config", command=self._load_config).pack(fill=tk.X, pady=2)

        help_grp = ttk.LabelFrame(right, text="Legend")
        help_grp.pack(fill=tk.BOTH, pady=6, expand=True)
        ttk.Label(help_grp, text="+q: red ●\n-q: blue ●\nField line: red\nEquipotential: blue ·",
                  justify="left").pack(anchor="w")

    def _make_scene(self) -> FieldScene:
        return FieldScene(MatplotlibSurface(self.ax), self.cfg, step_size_source=self.step_size.get)

    # ----- actions -----
    def _redraw(self):
        try:
            self.scene.on_redraw_requested()
        except Exception as e:
            logger.exception("Redraw failed")
            messagebox.showerror("Error", f"Computation failed:\n{e}")

    def _save_svg(self):
        path = filedialog.asksaveasfilename(
            title="Save SVG",
            defaultextension=".svg",
            filetypes=[("SVG files", "*.svg"), ("All files", "*.*")]
        )
        if not path:
            return
        try:
            FieldScene(SvgSurface(path), self.cfg, step_size_source=self.step_size.get).on_redraw_requested()
            messagebox.showinfo("Save SVG", f"Saved to:\n{path}")
        except OSError as ex:
            messagebox.showerror("Save SVG", f"Failed to save:\n{ex}")

    def _save_config(self):
        path = filedialog.asksaveasfilename(
            title="Save Config",
            defaultextension=".json",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")]
        )
        if not path:
            return
        self.cfg.step_size = int(self.step_size.get())
        try:
            save_config(self.cfg, path)
            messagebox.showinfo("Save Config", f"Saved to:\n{path}")
        except OSError as ex:
            messagebox.showerror("Save Config", f"Failed to save:\n{ex}")

    def _load_config(self):
        path = filedialog.askopenfilename(
            title="Load Config",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")]
        )
        if not path:
            return
        try:
            self.cfg = load_config(path)
        except (OSError, ValueError) as ex:
            messagebox.showerror("Load Config", f"Failed to load:\n{ex}")
            return
        self.step_size.set(self.cfg.step_size)
        self.scene = self._make_scene()
        self._redraw()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    app = FieldLinesApp()
    app.mainloop()


if __name__ == "__main__":
    main()
