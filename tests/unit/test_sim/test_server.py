"""Tests for the simulator HTTP server."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from keyteleop.domain.models import Pose
from keyteleop.sim.server import create_app
from keyteleop.sim.world import TurtleWorld


@pytest.fixture
def world() -> TurtleWorld:
    return TurtleWorld()


@pytest.fixture
def client(world: TurtleWorld) -> TestClient:
    return TestClient(create_app(world))


class TestSimulatorServer:
    def test_health(self, client: TestClient, world: TurtleWorld) -> None:
        world.spawn("alice", Pose(x=1.0, y=1.0))
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "turtles": 1}

    def test_spawn(self, client: TestClient, world: TurtleWorld) -> None:
        resp = client.post("/spawn", json={"name": "alice", "x": 3.0, "y": 4.0, "theta": 1.0})
        assert resp.status_code == 200
        assert resp.json()["name"] == "alice"
        assert world.get_pose("alice") == Pose(x=3.0, y=4.0, theta=1.0)

    def test_spawn_duplicate_is_conflict(self, client: TestClient) -> None:
        body = {"name": "alice", "x": 3.0, "y": 4.0}
        client.post("/spawn", json=body)
        assert client.post("/spawn", json=body).status_code == 409

    def test_spawn_requires_position(self, client: TestClient) -> None:
        assert client.post("/spawn", json={"name": "alice"}).status_code == 422

    def test_kill(self, client: TestClient, world: TurtleWorld) -> None:
        world.spawn("alice", Pose(x=1.0, y=1.0))
        assert client.post("/kill", json={"name": "alice"}).status_code == 200
        assert world.names == []

    def test_kill_unknown_is_not_found(self, client: TestClient) -> None:
        assert client.post("/kill", json={"name": "nobody"}).status_code == 404

    def test_cmd_vel_moves_turtle(self, client: TestClient, world: TurtleWorld) -> None:
        world.spawn("alice", Pose(x=5.0, y=5.0))
        resp = client.post("/alice/cmd_vel", json={"linear": {"x": 2.0}, "angular": {"z": 0.0}})
        assert resp.status_code == 200
        assert resp.json()["x"] == pytest.approx(7.0)

    def test_cmd_vel_unknown_is_not_found(self, client: TestClient) -> None:
        resp = client.post("/nobody/cmd_vel", json={"linear": {"x": 2.0}})
        assert resp.status_code == 404

    def test_list_and_get_turtles(self, client: TestClient, world: TurtleWorld) -> None:
        world.spawn("alice", Pose(x=1.0, y=2.0))
        assert client.get("/turtles").json() == {"alice": {"x": 1.0, "y": 2.0, "theta": 0.0}}
        assert client.get("/turtles/alice").json()["y"] == 2.0
        assert client.get("/turtles/bob").status_code == 404

    def test_escaped_name_in_path(self, client: TestClient, world: TurtleWorld) -> None:
        world.spawn("fleet/bot", Pose(x=5.0, y=5.0))
        resp = client.post("/fleet%2Fbot/cmd_vel", json={"linear": {"x": 1.0}})
        assert resp.status_code == 200
        assert world.get_pose("fleet/bot").x == pytest.approx(6.0)
        assert client.get("/turtles/fleet%2Fbot").json()["x"] == pytest.approx(6.0)
