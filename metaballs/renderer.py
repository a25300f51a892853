"""
jgraph renderer — serialises frames to jgraph scripts on disk.

Each frame becomes one self-contained script: a ``newgraph`` header with
both axes running 0..scale, then one filled bezier polygon per draw
command.  Numbers use ``%f`` formatting (six decimals) so output is
byte-for-byte reproducible for a given seed.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Union

from .engine import Frame
from .geometry import Point2D
from .palettes import Color
from .shapes import BlendCommand, CircleCommand, DrawCommand

logger = logging.getLogger(__name__)

FRAME_NAME = "frame{index:05d}.jgr"


def _num(value: float) -> str:
    return f"{value:f}"


def _pt(p: Point2D) -> str:
    return f"{_num(p.x)} {_num(p.y)}"


def graph_header(scale: float) -> str:
    """Start a new graph with both axes spanning 0..scale, undrawn."""
    return (
        "newgraph\n"
        f"xaxis min 0 max {_num(scale)} nodraw\n"
        f"yaxis min 0 max {_num(scale)} nodraw\n"
    )


def _poly_header(color: Color) -> str:
    return f"newline bezier poly pcfill {_num(color.r)} {_num(color.g)} {_num(color.b)} pts\n"


def render_command(command: DrawCommand) -> str:
    """One ``newline bezier poly`` block for a draw command."""
    if isinstance(command, CircleCommand):
        pts = command.points
        lines = [_pt(pts[0])]
        for k in range(1, len(pts), 3):
            lines.append("   ".join(_pt(p) for p in pts[k:k + 3]))
    elif isinstance(command, BlendCommand):
        lines = [_pt(p) for p in command.points]
    else:
        raise TypeError(f"Unknown draw command: {type(command).__name__}")
    return _poly_header(command.color) + "".join(line + "\n" for line in lines)


def render_frame(frame: Frame) -> str:
    """Full jgraph script for one frame."""
    parts = [graph_header(frame.scale)]
    parts.extend(render_command(c) for c in frame.commands)
    return "".join(parts)


def frame_path(out_dir: Union[str, Path], index: int) -> Path:
    return Path(out_dir) / FRAME_NAME.format(index=index)


def write_frame(frame: Frame, out_dir: Union[str, Path]) -> Path:
    """Write *frame* atomically into *out_dir*.

    The script goes to a temporary sibling first and is renamed into
    place, so a half-written frame is never visible under its final name.

    Raises:
        OSError: if the directory or file cannot be written.
    """
    path = frame_path(out_dir, frame.index)
    tmp = path.with_name(path.name + ".tmp")
    text = render_frame(frame)
    try:
        with open(tmp, "w", encoding="ascii", newline="\n") as f:
            f.write(text)
        os.replace(tmp, path)
    except OSError:
        if tmp.exists():
            tmp.unlink()
        raise
    logger.debug("Wrote %s (%d commands)", path, len(frame.commands))
    return path


def write_frames(frames: Iterable[Frame], out_dir: Union[str, Path]) -> List[Path]:
    """Write every frame, creating *out_dir* if needed.  Stops at the first error."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    paths = [write_frame(frame, out) for frame in frames]
    logger.info("Wrote %d frames to %s", len(paths), out)
    return paths
