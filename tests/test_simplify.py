import pytest

from plotplan.geometry import Point
from plotplan.simplify import perpendicular_distance, simplify


def pts(*xy):
    return [Point(float(x), float(y)) for x, y in xy]


def test_worked_example():
    points = pts((0, 0), (1, 0.1), (2, -0.1), (3, 5), (4, 6), (5, 7), (6, 8.1), (7, 9), (8, 9), (9, 9))
    assert simplify(points, 1.0) == pts((0, 0), (2, -0.1), (3, 5), (7, 9), (9, 9))


def test_two_points_unchanged():
    points = pts((0, 0), (2, 0))
    assert simplify(points, 1.0) == points
    assert simplify(points, 0.0) == points


def test_short_inputs():
    assert simplify([], 1.0) == []
    assert simplify(pts((3, 4)), 1.0) == pts((3, 4))


@pytest.mark.parametrize("epsilon", [0.0, 0.5, 2.0, 100.0])
def test_endpoints_kept_and_never_grows(epsilon):
    points = pts((0, 0), (1, 3), (2, -1), (3, 4), (4, 0), (5, 2), (6, 6))
    out = simplify(points, epsilon)
    assert out[0] == points[0]
    assert out[-1] == points[-1]
    assert len(out) <= len(points)


def test_tolerance_is_exclusive():
    points = pts((0, 0), (1, 1), (2, 0))
    assert simplify(points, 1.0) == pts((0, 0), (2, 0))
    assert simplify(points, 0.999) == points


def test_closed_ring_is_not_collapsed():
    ring = pts((0, 0), (4, 0), (4, 4), (0, 4), (0, 0))
    assert simplify(ring, 0.1) == ring


def test_negative_tolerance_rejected():
    with pytest.raises(ValueError):
        simplify(pts((0, 0), (1, 1), (2, 0)), -1.0)


def test_perpendicular_distance():
    assert perpendicular_distance(Point(1, 1), Point(0, 0), Point(2, 0)) == pytest.approx(1.0)
    assert perpendicular_distance(Point(3, 4), Point(0, 0), Point(0, 0)) == pytest.approx(5.0)
