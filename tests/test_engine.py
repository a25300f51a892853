"""Tests for the bounce step and the frame driver."""

from itertools import combinations

import pytest

from metaballs.engine import (
    Body,
    Boundary,
    Frame,
    MetaballEngine,
    SimulationParams,
    bounce_step,
)
from metaballs.geometry import Point2D
from metaballs.palettes import Color
from metaballs.shapes import BlendCommand, CircleCommand, blend_eligible


class TestBounceStep:

    def test_crossing_max_x_flips_only_x(self, boundary):
        body = Body(Point2D(boundary.max_x + 1, 0), 0.0, Point2D(10, 5))
        bounce_step(body, boundary)
        assert body.velocity == Point2D(-10, 5)
        assert body.position == Point2D(boundary.max_x + 1 - 10, 5)

    def test_touching_max_x_is_not_a_crossing(self, boundary):
        body = Body(Point2D(boundary.max_x, 0), 0.0, Point2D(10, 5))
        bounce_step(body, boundary)
        assert body.velocity == Point2D(10, 5)

    def test_crossing_min_y_flips_only_y(self, boundary):
        body = Body(Point2D(0, boundary.min_y + 50), 100.0, Point2D(-3, -7))
        bounce_step(body, boundary)
        assert body.velocity == Point2D(-3, 7)
        assert body.position == Point2D(-3, boundary.min_y + 57)

    def test_inside_leaves_velocity_alone(self, boundary):
        body = Body(Point2D(0, 0), 10.0, Point2D(3, -4))
        bounce_step(body, boundary)
        assert body.velocity == Point2D(3, -4)
        assert body.position == Point2D(3, -4)

    def test_both_walls_crossed_flips_twice(self):
        small = Boundary(0, 10, 0, 10)
        body = Body(Point2D(5, 5), 20.0, Point2D(1, -2))
        bounce_step(body, small)
        assert body.velocity == Point2D(1, -2)
        assert body.position == Point2D(6, 3)

    def test_radius_is_never_touched(self, boundary):
        body = Body(Point2D(boundary.max_x, boundary.max_y), 250.0, Point2D(40, 40))
        for _ in range(10):
            bounce_step(body, boundary)
        assert body.radius == 250.0


class TestInitialisation:

    def test_body_count(self, engine):
        assert len(engine.bodies) == 6

    def test_positions_inside_spawn_area(self, engine):
        b = engine.params.boundary
        for body in engine.bodies:
            x_pct = (body.position.x - b.min_x) * 100 / b.width
            y_pct = (body.position.y - b.min_y) * 100 / b.height
            assert 20 - 1e-9 <= x_pct < 80
            assert 20 - 1e-9 <= y_pct < 80

    def test_velocity_ranges(self, engine):
        for body in engine.bodies:
            assert -50 <= body.velocity.x < 50
            assert -60 <= body.velocity.y < 60
            assert body.velocity.x == int(body.velocity.x)
            assert body.velocity.y == int(body.velocity.y)

    def test_radii_alternate_ranges(self, engine):
        for i, body in enumerate(engine.bodies):
            if i % 2 == 0:
                assert 50 <= body.radius < 450
            else:
                assert 150 <= body.radius < 200

    def test_same_seed_same_bodies(self):
        a = MetaballEngine(seed=99)
        b = MetaballEngine(seed=99)
        assert a.bodies == b.bodies

    def test_reset_restores_initial_state(self, engine):
        initial = [Body(b.position, b.radius, b.velocity) for b in engine.bodies]
        for _ in range(5):
            engine.step()
        assert engine.bodies != initial
        engine.reset()
        assert engine.bodies == initial
        assert engine.step_count == 0

    def test_rejects_empty_scene(self):
        with pytest.raises(ValueError):
            MetaballEngine(SimulationParams(body_count=0), seed=1)


class TestFrameDriver:

    def test_pairs_are_lexicographic(self, engine):
        pairs = list(engine.pairs())
        assert len(pairs) == 15
        assert pairs == list(combinations(range(6), 2))

    def test_circles_then_bridges(self, engine):
        engine.step()
        commands = engine.frame_commands()
        circles = commands[:6]
        bridges = commands[6:]
        assert all(isinstance(c, CircleCommand) for c in circles)
        assert all(isinstance(c, BlendCommand) for c in bridges)
        assert [c.center for c in circles] == [b.position for b in engine.bodies]

    def test_bridge_count_matches_independent_eligibility(self):
        seed = 2024
        expected_engine = MetaballEngine(seed=seed)
        expected_engine.step()
        bodies = expected_engine.bodies
        expected = [
            (bodies[i].position, bodies[j].position)
            for i, j in combinations(range(6), 2)
            if blend_eligible(bodies[i].position, bodies[i].radius,
                              bodies[j].position, bodies[j].radius)
        ]

        frames = list(MetaballEngine(seed=seed).frames(1))
        assert len(frames) == 1
        commands = frames[0].commands
        circles = [c for c in commands if isinstance(c, CircleCommand)]
        bridges = [c for c in commands if isinstance(c, BlendCommand)]
        assert len(circles) == 6
        assert [(c.point0, c.point1) for c in bridges] == expected

    def test_frames_step_before_each_snapshot(self, engine):
        start = [b.position for b in engine.bodies]
        frames = list(engine.frames(3))
        assert [f.index for f in frames] == [0, 1, 2]
        assert engine.step_count == 3
        first_centres = [c.center for c in frames[0].commands[:6]]
        assert first_centres != start

    def test_frame_carries_scale(self, engine):
        frame = next(engine.frames(1))
        assert isinstance(frame, Frame)
        assert frame.scale == 1000.0

    def test_non_positive_frame_count(self, engine):
        with pytest.raises(ValueError):
            engine.frames(0)
        with pytest.raises(ValueError):
            engine.frames(-3)
        assert engine.step_count == 0

    def test_alternate_colour(self):
        main, alt = Color(0, 0, 0), Color(1, 0, 0)
        engine = MetaballEngine(SimulationParams(color=main, alt_color=alt), seed=5)
        engine.step()
        commands = engine.frame_commands()
        assert [c.color for c in commands[:6]] == [main, alt] * 3
        index_of = {b.position: i for i, b in enumerate(engine.bodies)}
        for blend in commands[6:]:
            assert blend.color == engine.body_color(index_of[blend.point0])

    def test_alternate_boundary(self):
        params = SimulationParams(boundary=Boundary(0, 100, 0, 100), body_count=3,
                                  even_radius=(1, 2), odd_radius=(1, 2))
        engine = MetaballEngine(params, seed=3)
        for body in engine.bodies:
            assert 20 <= body.position.x < 80
            assert 20 <= body.position.y < 80
