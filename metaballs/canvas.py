"""
Metaball canvas widget — live preview with QTimer-driven stepping.

Each tick advances the engine one step and repaints its draw commands as
filled ``QPainterPath`` beziers.  World coordinates (y up) are mapped
onto the widget (y down) so the whole boundary rectangle is visible.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional

from PyQt5.QtCore import QPointF, QRectF, QTimer, Qt, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QImage, QPainter, QPainterPath
from PyQt5.QtWidgets import QWidget

from .engine import MetaballEngine
from .shapes import DrawCommand

logger = logging.getLogger(__name__)


def command_path(command: DrawCommand) -> QPainterPath:
    """Closed cubic path through a command's bezier points (world coords)."""
    pts = [QPointF(p.x, p.y) for p in command.points]
    path = QPainterPath(pts[0])
    for k in range(1, len(pts) - 2, 3):
        path.cubicTo(pts[k], pts[k + 1], pts[k + 2])
    path.closeSubpath()
    return path


class MetaballCanvas(QWidget):
    """Animated metaball display.

    Signals:
        frame_changed(int):   index of the frame just drawn
        fps_changed(float):   current rendering FPS
    """

    frame_changed = pyqtSignal(int)
    fps_changed = pyqtSignal(float)

    BACKGROUND = QColor(255, 255, 255)

    def __init__(
        self,
        engine: MetaballEngine,
        interval_ms: int = 33,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.engine = engine
        self._commands: List[DrawCommand] = []
        self._paused = False

        # Timing
        self._last_time = time.perf_counter()
        self._frame_count = 0
        self._fps_accum = 0.0

        self.setMinimumSize(300, 380)

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._tick)
        self._timer.start()

    # ── properties ────────────────────────────────────────────────────────

    @property
    def paused(self) -> bool:
        return self._paused

    @paused.setter
    def paused(self, val: bool) -> None:
        self._paused = val
        if not val:
            self._last_time = time.perf_counter()
        self.update()

    def reset(self) -> None:
        self.engine.reset()
        self._commands = []
        self.update()

    # ── animation loop ────────────────────────────────────────────────────

    def _tick(self) -> None:
        if self._paused:
            return
        now = time.perf_counter()
        dt = now - self._last_time
        self._last_time = now

        self.engine.step()
        self._commands = self.engine.frame_commands()
        self.update()
        self.frame_changed.emit(self.engine.step_count - 1)

        # FPS tracking
        self._frame_count += 1
        self._fps_accum += dt
        if self._fps_accum >= 1.0:
            self.fps_changed.emit(self._frame_count / self._fps_accum)
            self._frame_count = 0
            self._fps_accum = 0.0

    # ── painting ──────────────────────────────────────────────────────────

    def _world_rect(self) -> QRectF:
        """Widget area the boundary maps to, keeping its aspect ratio."""
        b = self.engine.params.boundary
        sx = self.width() / b.width
        sy = self.height() / b.height
        s = min(sx, sy)
        w = b.width * s
        h = b.height * s
        return QRectF((self.width() - w) / 2, (self.height() - h) / 2, w, h)

    def _paint_scene(self, painter: QPainter) -> None:
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QColor(40, 40, 40))

        target = self._world_rect()
        painter.fillRect(target, self.BACKGROUND)

        b = self.engine.params.boundary
        s = target.width() / b.width
        painter.save()
        # world (y up) -> widget (y down)
        painter.translate(target.left(), target.bottom())
        painter.scale(s, -s)
        painter.translate(-b.min_x, -b.min_y)
        painter.setPen(Qt.NoPen)
        for command in self._commands:
            r, g, bl = command.color.to_rgb255()
            painter.setBrush(QBrush(QColor(r, g, bl)))
            painter.drawPath(command_path(command))
        painter.restore()

    def paintEvent(self, event):
        painter = QPainter(self)
        self._paint_scene(painter)
        if self._paused:
            painter.setPen(QColor(200, 60, 60))
            painter.drawText(self.rect(), Qt.AlignTop | Qt.AlignHCenter, "PAUSED")
        painter.end()

    # ── save ──────────────────────────────────────────────────────────────

    def get_image(self) -> QImage:
        img = QImage(self.size(), QImage.Format_RGB32)
        painter = QPainter(img)
        self._paint_scene(painter)
        painter.end()
        return img
