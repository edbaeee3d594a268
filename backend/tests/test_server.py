import importlib
import logging

import pytest
from fastapi.testclient import TestClient

import config
from backend import server
from backend.server import PlacementRequest, app
from schemas.placement import OptimizationConfig


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def network():
    return {
        "nodes": [
            {"id": 1, "name": "BOG", "lat": 4.7016, "lng": -74.1469},
            {"id": 2, "name": "MDE", "lat": 6.1645, "lng": -75.4231},
            {"id": 3, "name": "CLO", "lat": 3.5432, "lng": -76.3816},
        ],
        "routes": [
            {"source": 3, "target": 1},
            {"source": 1, "target": 2},
        ],
    }


def test_root(client):
    assert client.get("/").json() == {"message": "Colony search is running"}


def test_path_endpoint(client, network):
    body = dict(network, source=3, target=2, seed=1,
                params={"iterations": 5, "agents_per_round": 5, "max_steps": 5})
    response = client.post("/aco/path", json=body)
    assert response.status_code == 200
    data = response.json()
    assert data["path"] == [3, 1, 2]
    assert data["reached_target"] is True
    assert data["coordinates"][0] == [3.5432, -76.3816]
    assert data["cost"] > 0


def test_path_endpoint_unreachable(client, network):
    body = dict(network, source=2, target=3, seed=1,
                params={"iterations": 2, "agents_per_round": 2, "max_steps": 5})
    data = client.post("/aco/path", json=body).json()
    assert data["path"] == [2]
    assert data["reached_target"] is False


def test_path_endpoint_unknown_node(client, network):
    response = client.post("/aco/path", json=dict(network, source=3, target=99))
    assert response.status_code == 404
    assert "Invalid node 99" in response.json()["detail"]


def test_path_endpoint_validates_params(client, network):
    body = dict(network, source=3, target=2, params={"evaporation_rate": 1.5})
    assert client.post("/aco/path", json=body).status_code == 422


def test_placement_endpoint(client):
    body = {
        "polygon": [[4.700, -74.900], [4.700, -74.895], [4.705, -74.895], [4.705, -74.900]],
        "max_devices": 3,
        "max_iterations": 3,
        "initial_population_size": 10,
        "seed": 4,
    }
    first = client.post("/placement/optimize", json=body)
    second = client.post("/placement/optimize", json=body)
    assert first.status_code == 200
    data = first.json()
    assert data == second.json()
    assert len(data["devices"]) <= 3
    assert 0.0 <= data["coverage"] <= 100.0
    assert data["cost"] == pytest.approx(sum(d["cost"] for d in data["devices"]))


def test_placement_defaults_come_from_config():
    request = PlacementRequest(polygon=[(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)])
    opt_config = OptimizationConfig()
    assert request.max_devices == opt_config.max_devices == config.BCO_MAX_DEVICES
    assert request.max_iterations == opt_config.max_iterations == config.BCO_MAX_ITERATIONS
    assert request.initial_population_size == opt_config.initial_population_size \
        == config.BCO_INITIAL_POPULATION


def test_importing_app_leaves_root_logging_alone(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda *a, **kw: calls.append((a, kw)))
    importlib.reload(server)
    assert calls == []
