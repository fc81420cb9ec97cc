"""Tests for the caller-owned stroke buffer."""

import numpy as np

from stroke_engine.buffer import StrokeBuffer
from stroke_engine.geometry import Point


class TestStrokeBuffer:
    def test_add_and_snapshot(self):
        buf = StrokeBuffer()
        buf.add_point((1, 2))
        buf.add_point(Point(3, 4))
        buf.add_point({"x": 5, "y": 6})
        assert len(buf) == 3
        np.testing.assert_allclose(buf.points, [[1, 2], [3, 4], [5, 6]])

    def test_pop(self):
        buf = StrokeBuffer([(0, 0), (1, 1)])
        assert buf.pop_point() == Point(1.0, 1.0)
        assert len(buf) == 1

    def test_pop_empty(self):
        assert StrokeBuffer().pop_point() is None

    def test_clear(self):
        buf = StrokeBuffer([(0, 0), (1, 1)])
        buf.clear()
        assert buf.is_empty
        assert buf.points.shape == (0, 2)

    def test_snapshot_is_independent(self):
        buf = StrokeBuffer([(0, 0), (1, 1)])
        snap = buf.points
        buf.add_point((2, 2))
        snap[0, 0] = 99.0
        assert len(snap) == 2
        np.testing.assert_allclose(buf.points[0], [0, 0])

    def test_buffers_do_not_share_state(self):
        a = StrokeBuffer()
        b = StrokeBuffer()
        a.add_point((1, 1))
        assert len(b) == 0

    def test_simplified(self):
        buf = StrokeBuffer([(0, 0), (5, 0.1), (10, 0), (10, 5), (10, 10)])
        np.testing.assert_allclose(buf.simplified(tolerance=1.0), [[0, 0], [10, 0], [10, 10]])
        assert len(buf) == 5

    def test_iter(self):
        buf = StrokeBuffer([(0, 0), (1, 1)])
        assert list(buf) == [Point(0.0, 0.0), Point(1.0, 1.0)]
