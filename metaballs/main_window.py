"""
Main window — hosts the metaball canvas with a small menu bar.
"""

from __future__ import annotations

import logging

from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import QAction, QFileDialog, QMainWindow, QMessageBox

from . import __version__
from .canvas import MetaballCanvas
from .engine import MetaballEngine

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level preview window."""

    def __init__(self, engine: MetaballEngine, interval_ms: int = 33) -> None:
        super().__init__()
        self.setWindowTitle(f"Metaballs  v{__version__}")

        self.engine = engine
        self.canvas = MetaballCanvas(engine, interval_ms)
        self.setCentralWidget(self.canvas)

        self._build_menu()
        self.statusBar().showMessage("Running")

        self.canvas.frame_changed.connect(self._on_frame)
        self.canvas.fps_changed.connect(self._on_fps)
        self._fps = 0.0

    def _menu_spec(self):
        """(menu title, [(label, shortcut, slot) or None for a separator])."""
        return [
            ("&File", [
                ("&Save Frame…", QKeySequence.Save, self._save),
                None,
                ("&Quit", QKeySequence.Quit, self.close),
            ]),
            ("&Simulation", [
                ("&Pause / Resume", "Space", self._toggle_pause),
                ("&Restart From Seed", "Ctrl+R", self._restart),
            ]),
        ]

    def _build_menu(self) -> None:
        bar = self.menuBar()
        for title, entries in self._menu_spec():
            menu = bar.addMenu(title)
            for entry in entries:
                if entry is None:
                    menu.addSeparator()
                    continue
                label, shortcut, slot = entry
                action = QAction(label, self)
                action.setShortcut(QKeySequence(shortcut))
                action.triggered.connect(slot)
                menu.addAction(action)

    def _restart(self) -> None:
        self.canvas.reset()
        logger.info("Preview restarted (seed=%s)", self.engine.seed)
        self.statusBar().showMessage("Restarted")

    def _save(self) -> None:
        img = self.canvas.get_image()
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Frame", "metaballs.png",
            "PNG (*.png);;JPEG (*.jpg);;All (*)",
        )
        if path:
            if img.save(path):
                self.statusBar().showMessage(f"Saved to {path}")
            else:
                logger.error("Failed to save image to %s", path)
                QMessageBox.critical(self, "Save Error", f"Failed to save:\n{path}")

    def _toggle_pause(self) -> None:
        self.canvas.paused = not self.canvas.paused
        self.statusBar().showMessage("Paused" if self.canvas.paused else "Running")

    def _on_fps(self, fps: float) -> None:
        self._fps = fps

    def _on_frame(self, index: int) -> None:
        self.statusBar().showMessage(f"Frame {index}   {self._fps:.0f} fps")
