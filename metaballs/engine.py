"""
Bounce simulation and frame driver.

Bodies move in straight lines and reflect off the walls of a fixed
rectangle, one whole step per frame.  After each step the engine turns
the current state into draw commands: one circle per body, then one
metaball bridge per eligible pair.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .geometry import Point2D
from .palettes import COLORS, DEFAULT_COLOR, Color
from .shapes import DrawCommand, circle_outline, metaball_outline

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Body / boundary
# ---------------------------------------------------------------------------

@dataclass
class Body:
    """A single bouncing circle."""
    position: Point2D = field(default_factory=Point2D)
    radius: float = 0.0
    velocity: Point2D = field(default_factory=Point2D)


@dataclass(frozen=True)
class Boundary:
    """Walls of the simulation rectangle.

    The defaults are the visible extent of a jgraph page drawn at
    scale 1000 with no cropping.
    """
    min_x: float = -915.0
    max_x: float = 1912.0
    min_y: float = -1331.0
    max_y: float = 2333.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


# ---------------------------------------------------------------------------
# Simulation parameters
# ---------------------------------------------------------------------------

@dataclass
class SimulationParams:
    """Everything that shapes a run apart from the RNG seed.

    Ranges are half-open ``(low, high)`` integer intervals.  Radii
    alternate between the even and odd range by body index.
    """
    body_count: int = 6
    boundary: Boundary = field(default_factory=Boundary)
    scale: float = 1000.0                  # jgraph axis max, independent of the boundary

    # Spawn area, as whole percentages of the boundary span
    spawn_low_pct: int = 20
    spawn_high_pct: int = 80

    velocity_x: Tuple[int, int] = (-50, 50)
    velocity_y: Tuple[int, int] = (-60, 60)
    even_radius: Tuple[int, int] = (50, 450)
    odd_radius: Tuple[int, int] = (150, 200)

    color: Color = COLORS[DEFAULT_COLOR]
    alt_color: Optional[Color] = None      # fill for odd-indexed bodies


@dataclass(frozen=True)
class Frame:
    """Draw commands for one rendered frame."""
    index: int
    scale: float
    commands: Tuple[DrawCommand, ...]


# ---------------------------------------------------------------------------
# Bounce step
# ---------------------------------------------------------------------------

def bounce_step(body: Body, boundary: Boundary) -> None:
    """Reflect *body* off any wall it has crossed, then move it one step.

    Each wall is tested on its own, so a body poking past both walls of
    one axis flips twice and keeps its direction.
    """
    p, r = body.position, body.radius
    vx, vy = body.velocity.x, body.velocity.y
    if p.x + r > boundary.max_x:
        vx = -vx
    if p.x - r < boundary.min_x:
        vx = -vx
    if p.y + r > boundary.max_y:
        vy = -vy
    if p.y - r < boundary.min_y:
        vy = -vy
    body.velocity = Point2D(vx, vy)
    body.position = Point2D(p.x + vx, p.y + vy)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class MetaballEngine:
    """Owns the bodies and turns each simulation step into a frame.

    Parameters:
        params: Simulation parameters (or defaults).
        seed:   RNG seed for reproducibility (None = random).
    """

    def __init__(
        self,
        params: Optional[SimulationParams] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.params = params or SimulationParams()
        if self.params.body_count < 1:
            raise ValueError(f"body_count must be positive, got {self.params.body_count}")
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.bodies: List[Body] = []
        self.step_count = 0
        self.reset()

    # ── body management ───────────────────────────────────────────────────

    def reset(self) -> None:
        """Re-seed the RNG and scatter fresh bodies."""
        self.rng = np.random.default_rng(self.seed)
        self.step_count = 0
        self.bodies = self._create_bodies(self.params.body_count)
        logger.info("Engine reset: %d bodies (seed=%s)", len(self.bodies), self.seed)

    def _create_bodies(self, count: int) -> List[Body]:
        # Draw order matters for reproducibility: positions, velocities, radii
        positions = [self._random_position() for _ in range(count)]
        velocities = [self._random_velocity() for _ in range(count)]
        radii = [self._random_radius(i) for i in range(count)]
        return [
            Body(position=pos, radius=rad, velocity=vel)
            for pos, vel, rad in zip(positions, velocities, radii)
        ]

    def _random_position(self) -> Point2D:
        p = self.params
        b = p.boundary
        # the reference spans are whole numbers; keep the integer truncation
        x_span = int(b.width)
        y_span = int(b.height)
        x_pct = int(self.rng.integers(p.spawn_low_pct, p.spawn_high_pct))
        y_pct = int(self.rng.integers(p.spawn_low_pct, p.spawn_high_pct))
        return Point2D(
            x_pct * x_span / 100.0 + b.min_x,
            y_pct * y_span / 100.0 + b.min_y,
        )

    def _random_velocity(self) -> Point2D:
        p = self.params
        return Point2D(
            float(self.rng.integers(*p.velocity_x)),
            float(self.rng.integers(*p.velocity_y)),
        )

    def _random_radius(self, index: int) -> float:
        low, high = self.params.even_radius if index % 2 == 0 else self.params.odd_radius
        return float(self.rng.integers(low, high))

    def body_color(self, index: int) -> Color:
        p = self.params
        if p.alt_color is not None and index % 2 == 1:
            return p.alt_color
        return p.color

    # ── simulation ────────────────────────────────────────────────────────

    def step(self) -> None:
        """Advance every body by one step."""
        boundary = self.params.boundary
        for body in self.bodies:
            bounce_step(body, boundary)
        self.step_count += 1

    def pairs(self) -> Iterator[Tuple[int, int]]:
        """Unordered body index pairs ``(i, j)``, ``i < j``, in lexicographic order."""
        return combinations(range(len(self.bodies)), 2)

    def frame_commands(self) -> List[DrawCommand]:
        """Draw commands for the current state: all circles, then all bridges."""
        bodies: Sequence[Body] = self.bodies
        commands: List[DrawCommand] = [
            circle_outline(b.position, b.radius, self.body_color(i))
            for i, b in enumerate(bodies)
        ]
        for i, j in self.pairs():
            a, b = bodies[i], bodies[j]
            blend = metaball_outline(a.position, a.radius, b.position, b.radius, self.body_color(i))
            if blend is not None:
                commands.append(blend)
        return commands

    def frames(self, count: int) -> Iterator[Frame]:
        """Step then snapshot, *count* times.

        Frame 0 already shows the bodies one step past their spawn point.

        Raises:
            ValueError: if *count* is not positive (at call time).
        """
        if count < 1:
            raise ValueError(f"frame count must be positive, got {count}")
        return self._iter_frames(count)

    def _iter_frames(self, count: int) -> Iterator[Frame]:
        for index in range(count):
            self.step()
            commands = tuple(self.frame_commands())
            logger.debug(
                "Frame %d: %d commands (%d bridges)",
                index, len(commands), len(commands) - len(self.bodies),
            )
            yield Frame(index=index, scale=self.params.scale, commands=commands)
