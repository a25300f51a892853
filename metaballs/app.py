"""
Application entry point — CLI parsing, frame export, optional Qt preview.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

from . import __version__
from .palettes import COLORS, DEFAULT_COLOR, complementary, list_colors, parse_color

logger = logging.getLogger("metaballs")


def _check_gui_deps() -> list:
    missing = []
    try:
        import PyQt5  # noqa: F401
    except ImportError:
        missing.append("PyQt5")
    return missing


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="metaballs",
        description="Metaballs — bouncing circles fused with bezier outlines, as jgraph frames.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  %(prog)s                         # 50 frames into ./jgrs\n"
            "  %(prog)s 120 42                  # 120 frames, seed 42\n"
            "  %(prog)s --color blue --alt-color complementary\n"
            "  %(prog)s --preview               # live Qt window instead of files\n"
            "  %(prog)s --list-colors           # show named colours\n"
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("frames", type=int, nargs="?", default=50, help="Number of frames (default 50)")
    p.add_argument("seed", type=int, nargs="?", default=None, help="RNG seed (default: time based)")
    p.add_argument("-o", "--out-dir", default="jgrs", help="Output directory (default ./jgrs)")
    p.add_argument("--bodies", type=int, default=6, help="Number of circles (2–12, default 6)")
    p.add_argument("--color", default=DEFAULT_COLOR, help="Fill colour: name or r,g,b")
    p.add_argument(
        "--alt-color", default=None,
        help="Fill for odd-numbered circles: name, r,g,b or 'complementary'",
    )
    p.add_argument("--preview", action="store_true", help="Show a live preview window")
    p.add_argument("--list-colors", action="store_true", help="List colour names and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def _fail(message: str) -> None:
    print(f"ERROR: {message}", file=sys.stderr)
    sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.list_colors:
        print("Available colours:")
        for key in list_colors():
            c = COLORS[key]
            print(f"  {key:10s}  rgb({c.r:g}, {c.g:g}, {c.b:g})")
        sys.exit(0)

    # Validate
    if args.frames < 1:
        _fail("frame count must be a positive integer.")
    if not (2 <= args.bodies <= 12):
        _fail("--bodies must be 2–12.")
    try:
        color = parse_color(args.color)
        alt_color = None
        if args.alt_color == "complementary":
            alt_color = complementary(color)
        elif args.alt_color is not None:
            alt_color = parse_color(args.alt_color)
    except ValueError as e:
        _fail(str(e))

    seed = args.seed
    if seed is None:
        seed = int(time.time())

    from .engine import MetaballEngine, SimulationParams

    params = SimulationParams(body_count=args.bodies, color=color, alt_color=alt_color)
    engine = MetaballEngine(params=params, seed=seed)
    logger.info("Starting Metaballs v%s (seed %d)", __version__, seed)

    if args.preview:
        missing = _check_gui_deps()
        if missing:
            _fail(f"Missing packages: {', '.join(missing)}\n"
                  f"Install: pip install {' '.join(missing)}")

        from PyQt5.QtWidgets import QApplication
        from .main_window import MainWindow

        app = QApplication(sys.argv[:1])
        app.setApplicationName("Metaballs")
        app.setApplicationVersion(__version__)

        window = MainWindow(engine)
        window.resize(520, 680)
        window.show()
        sys.exit(app.exec_())

    from .renderer import write_frames

    try:
        write_frames(engine.frames(args.frames), args.out_dir)
    except OSError as e:
        logger.error("Could not write frames to %s: %s", args.out_dir, e)
        _fail(f"cannot write to '{args.out_dir}': {e}")
