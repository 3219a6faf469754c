import argparse
import datetime
import logging

import matplotlib.pyplot as plt

from chargefield.fieldlines import (
    FieldConfig,
    FieldScene,
    MatplotlibSurface,
    SvgSurface,
    build_field,
    compose_scene,
    load_config,
    render_scene,
)

logger = logging.getLogger("quadrupole")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Render quadrupole field lines and equipotentials.")
    parser.add_argument("--config", help="JSON config file (defaults to the +q,-q,+q,-q square)")
    parser.add_argument("--step-size", type=int, help="field line step length")
    parser.add_argument("--svg", help="write the picture as SVG")
    parser.add_argument("--png", help="write the picture as PNG via matplotlib")
    parser.add_argument("--progress", action="store_true", help="show a progress bar while tracing")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    cfg = load_config(args.config) if args.config else FieldConfig()
    if args.step_size is not None:
        cfg.step_size = args.step_size

    t1 = datetime.datetime.now()
    scene = compose_scene(build_field(cfg), cfg.step_size, cfg, progress=args.progress)
    t2 = datetime.datetime.now()
    logger.info("it took %s to trace %d lines and sample %d points", t2 - t1, len(scene.lines), len(scene.samples))

    if args.svg:
        surface = SvgSurface(args.svg)
        surface.clear()
        render_scene(scene, surface)

    if args.png:
        fig, ax = plt.subplots(figsize=(8, 8))
        surface = MatplotlibSurface(ax)
        surface.clear()
        render_scene(scene, surface)
        plt.tight_layout()
        plt.savefig(args.png)
        plt.close(fig)
        logger.info("wrote %s", args.png)

    if not (args.svg or args.png):
        # nothing to write, show the figure instead
        fig, ax = plt.subplots(figsize=(8, 8))
        FieldScene(MatplotlibSurface(ax), cfg).on_redraw_requested()
        plt.show()


if __name__ == "__main__":
    main()
