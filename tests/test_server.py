import pytest
from fastapi.testclient import TestClient

from plotplan.server.app import app

SQUARE = [[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def drawing(*geometries):
    return {"width": 10, "height": 10, "geometries": list(geometries)}


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_plan_keeps_input_order(client):
    res = client.post(
        "/api/plan",
        json=drawing(
            {"type": "polyline", "points": [[0, 0], [1, 0]]},
            {"type": "polyline", "points": [[5, 5], [6, 5]]},
        ),
    )
    assert res.status_code == 200
    edges = res.json()["plan"]["edges"]
    assert [e["pen_up"] for e in edges] == [False, True, False]
    assert edges[1]["from"] == [1.0, 0.0] and edges[1]["to"] == [5.0, 5.0]
    assert res.json()["summary"]["pen_lifts"] == 1


def test_plan_optimize(client):
    res = client.post(
        "/api/plan",
        params={"optimize": True},
        json=drawing(
            {"type": "polyline", "points": [[10, 10], [11, 10]]},
            {"type": "polyline", "points": [[1, 0], [2, 0]]},
        ),
    )
    assert res.json()["plan"]["edges"][0]["from"] == [1.0, 0.0]


def test_plan_simplify(client):
    res = client.post(
        "/api/plan",
        params={"simplify": 0.1},
        json=drawing({"type": "polyline", "points": [[0, 0], [1, 0.01], [2, 0]]}),
    )
    assert len(res.json()["plan"]["edges"]) == 1


def test_negative_tolerance_is_rejected(client):
    res = client.post(
        "/api/plan",
        params={"simplify": -1},
        json=drawing({"type": "polyline", "points": [[0, 0], [1, 1], [2, 0]]}),
    )
    assert res.status_code == 400


def test_bounds(client):
    res = client.post("/api/bounds", json=drawing({"type": "polygon", "exterior": SQUARE}, {"type": "point", "coordinates": [7, -1]}))
    assert res.json() == {"bounds": [[0.0, -1.0], [7.0, 4.0]]}


def test_bounds_of_empty_drawing(client):
    res = client.post("/api/bounds", json=drawing())
    assert res.status_code == 400
    assert res.json()["detail"].startswith("EmptyGeometry")


def test_unknown_geometry_type(client):
    res = client.post("/api/plan", json=drawing({"type": "circle"}))
    assert res.status_code == 400


@pytest.mark.parametrize(
    "route, payload",
    [
        ("/api/plan", {"geometries": [5]}),
        ("/api/bounds", {"geometries": "ab"}),
        ("/api/plan", {"geometries": [{"type": "multipolygon", "polygons": [3]}]}),
    ],
)
def test_malformed_items_are_rejected(client, route, payload):
    assert client.post(route, json=payload).status_code == 400
