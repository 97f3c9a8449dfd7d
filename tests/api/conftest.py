import pytest
from fastapi.testclient import TestClient

from geco.api.dependencies import set_service_container
from geco.api.main import create_app
from geco.models.config import GecoConfig
from geco.services.service_container import ServiceContainer

ALICE = {"X-Owner-Id": "alice"}


@pytest.fixture
def services():
    return ServiceContainer.build(GecoConfig())


@pytest.fixture
def client(services):
    app = create_app(services=services)
    with TestClient(app) as test_client:
        yield test_client
    set_service_container(None)


@pytest.fixture
def square(client):
    """Polygon "square" for alice: four equator points, p1 keyframed to +Z at frame 10."""
    client.post("/api/v1/features", headers=ALICE, json={
        "name": "square", "type": 2, "appearance_frame": 0,
        "disappearance_frame": 100, "feature_id": "square",
    })
    for pid, xyz in (("p1", (1, 0, 0)), ("p2", (0, 1, 0)), ("p3", (-1, 0, 0)), ("p4", (0, -1, 0))):
        client.post("/api/v1/features/square/points", headers=ALICE, json={
            "point_id": pid, "frame": 0, "x": xyz[0], "y": xyz[1], "z": xyz[2],
        })
    client.post("/api/v1/features/square/points/p1/keyframes", headers=ALICE, json={
        "frame": 10, "x": 0, "y": 0, "z": 1,
    })
    return "square"
