from plotplan.geometry import Point
from plotplan.hull import convex_hull


def pts(*xy):
    return [Point(float(x), float(y)) for x, y in xy]


class TestConvexHull:
    def test_general_case(self):
        hull = convex_hull(pts((12, 32), (45, 98), (65, 12), (10, 30)))
        assert set(hull) == set(pts((10, 30), (45, 98), (65, 12)))
        assert len(hull) == 3

    def test_empty(self):
        assert convex_hull([]) == []

    def test_single_point(self):
        assert convex_hull(pts((1, 1))) == pts((1, 1))

    def test_two_points_keep_input_order(self):
        assert convex_hull(pts((2, 2), (1, 1))) == pts((2, 2), (1, 1))

    def test_three_collinear_points(self):
        assert convex_hull(pts((1, 1), (2, 2), (3, 3))) == pts((1, 1), (3, 3))

    def test_duplicates_collapse(self):
        hull = convex_hull(pts((1, 1), (2, 2), (1, 1), (3, 3), (2, 2)))
        assert sorted(hull, key=lambda p: (p.x, p.y)) == pts((1, 1), (3, 3))

    def test_rectangle(self):
        rect = pts((0, 0), (0, 5), (5, 5), (5, 0))
        assert set(convex_hull(rect)) == set(rect)

    def test_convex_polygon_keeps_all_vertices(self):
        poly = pts((0, 0), (0, 5), (3, 7), (5, 5), (5, 0))
        assert set(convex_hull(poly)) == set(poly)

    def test_concave_input(self):
        poly = pts((0, 0), (0, 5), (3, 7), (5, 3), (5, 0))
        assert set(convex_hull(poly)) == set(poly)

    def test_interior_point_dropped_and_ccw_order(self):
        hull = convex_hull(pts((0, 0), (4, 0), (4, 4), (0, 4), (2, 2)))
        assert hull == pts((0, 0), (4, 0), (4, 4), (0, 4))

    def test_point_on_edge_dropped(self):
        hull = convex_hull(pts((0, 0), (2, 0), (4, 0), (4, 4)))
        assert hull == pts((0, 0), (4, 0), (4, 4))

    def test_identical_points_collapse_to_one(self):
        assert convex_hull(pts((1, 1), (1, 1), (1, 1))) == pts((1, 1))

    def test_repeated_vertices_dropped(self):
        square = pts((0, 0), (4, 0), (4, 4), (0, 4), (0, 0))
        assert convex_hull(square) == pts((0, 0), (4, 0), (4, 4), (0, 4))
