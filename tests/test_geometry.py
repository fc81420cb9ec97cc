"""Tests for geometry primitives and angle wrapping."""

import math

import numpy as np
import pytest

from stroke_engine.geometry import (
    Point,
    angle_difference,
    as_points,
    centroid,
    get_distance,
    get_vector,
    path_length,
    point_to_segment_distance,
)


class TestAsPoints:
    def test_point_objects(self):
        pts = as_points([Point(1, 2), Point(3, 4)])
        assert pts.shape == (2, 2)
        np.testing.assert_allclose(pts, [[1, 2], [3, 4]])

    def test_pairs_and_mappings(self):
        pts = as_points([(0, 0), {"x": 5, "y": 6}, [7, 8]])
        np.testing.assert_allclose(pts, [[0, 0], [5, 6], [7, 8]])
        assert pts.dtype == np.float64

    def test_none_and_empty(self):
        assert as_points(None).shape == (0, 2)
        assert as_points([]).shape == (0, 2)
        assert as_points(np.empty((0, 2))).shape == (0, 2)

    def test_array_is_copied(self):
        src = np.array([[0.0, 0.0], [1.0, 1.0]])
        pts = as_points(src)
        pts[0, 0] = 99.0
        assert src[0, 0] == 0.0

    def test_bad_shape_raises(self):
        with pytest.raises(ValueError):
            as_points(np.zeros((3, 3)))


class TestVector:
    def test_distance(self):
        assert get_distance((0, 0), (3, 4)) == pytest.approx(5.0)

    def test_distance_missing_point(self):
        assert get_distance(None, (3, 4)) == 0.0

    def test_vector_angle(self):
        v = get_vector((0, 0), (1, 1))
        assert v.dx == 1.0 and v.dy == 1.0
        assert v.angle == pytest.approx(math.pi / 4)
        assert v.distance == pytest.approx(math.sqrt(2))

    def test_zero_length_vector_has_zero_angle(self):
        v = get_vector((2, 2), (2, 2))
        assert v.angle == 0.0
        assert v.distance == 0.0

    def test_missing_endpoint_gives_zero_vector(self):
        v = get_vector((1, 1), None)
        assert (v.dx, v.dy, v.angle, v.distance) == (0.0, 0.0, 0.0, 0.0)

    def test_angle_range_excludes_minus_pi(self):
        # atan2(-0.0, -1) is -pi; headings live in (-pi, pi]
        v = get_vector((0.0, 0.0), (-1.0, -0.0))
        assert v.angle == pytest.approx(math.pi)


class TestAngleDifference:
    def test_simple(self):
        assert angle_difference(0.0, math.pi / 2) == pytest.approx(math.pi / 2)
        assert angle_difference(math.pi / 2, 0.0) == pytest.approx(-math.pi / 2)

    def test_small_across_zero(self):
        assert angle_difference(-0.1, 0.1) == pytest.approx(0.2)
        assert angle_difference(0.1, -0.1) == pytest.approx(-0.2)

    def test_wraps_across_pi(self):
        assert angle_difference(3 * math.pi / 4, -3 * math.pi / 4) == pytest.approx(math.pi / 2)
        assert angle_difference(-3 * math.pi / 4, 3 * math.pi / 4) == pytest.approx(-math.pi / 2)

    def test_exactly_plus_minus_pi(self):
        assert angle_difference(0.0, math.pi) == pytest.approx(math.pi)
        assert angle_difference(0.0, -math.pi) == pytest.approx(math.pi)
        assert angle_difference(math.pi / 2, -math.pi / 2) == pytest.approx(math.pi)

    def test_negative_operands_beyond_two_pi(self):
        assert angle_difference(0.0, -5 * math.pi / 2) == pytest.approx(-math.pi / 2)
        assert angle_difference(0.0, 5 * math.pi / 2) == pytest.approx(math.pi / 2)
        assert angle_difference(-7.0, -7.0) == pytest.approx(0.0)

    def test_result_in_range(self):
        rng = np.random.default_rng(3)
        for a, b in rng.uniform(-20, 20, size=(500, 2)):
            d = angle_difference(float(a), float(b))
            assert -math.pi < d <= math.pi


class TestPathHelpers:
    def test_path_length(self):
        pts = as_points([(0, 0), (3, 4), (3, 10)])
        assert path_length(pts) == pytest.approx(11.0)

    def test_path_length_short(self):
        assert path_length(as_points([(1, 1)])) == 0.0

    def test_centroid(self):
        c = centroid(as_points([(0, 0), (4, 0), (4, 2), (0, 2)]))
        np.testing.assert_allclose(c, [2, 1])

    def test_segment_distance_perpendicular(self):
        assert point_to_segment_distance((5, 5), (0, 0), (10, 0)) == pytest.approx(5.0)

    def test_segment_distance_clamps_to_endpoints(self):
        # Infinite-line distance would be 0 here
        assert point_to_segment_distance((15, 0), (0, 0), (10, 0)) == pytest.approx(5.0)
        assert point_to_segment_distance((-3, 4), (0, 0), (10, 0)) == pytest.approx(5.0)

    def test_segment_distance_degenerate_segment(self):
        assert point_to_segment_distance((4, 5), (1, 1), (1, 1)) == pytest.approx(5.0)
