"""FastAPI HTTP server for the stand-in simulator.

Hosts a TurtleWorld and exposes the requests the controller makes:

    GET  /health               -> {"status": "ok", "turtles": 1}
    GET  /turtles              -> {"turtle1": {"x": ..., "y": ..., "theta": ...}}
    GET  /turtles/{name}       -> {"x": ..., "y": ..., "theta": ...}
    POST /spawn                <- {"name": "alice", "x": 5.0, "y": 5.0, "theta": 0.0}
    POST /kill                 <- {"name": "alice"}
    POST /{name}/cmd_vel       <- {"linear": {"x": 2.0}, "angular": {"z": 0.0}}

{name} is percent-encoded by clients and may contain any character.
"""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from keyteleop.domain.models import Pose, Twist
from keyteleop.sim.world import TurtleWorld, WorldError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------

class SpawnRequest(BaseModel):
    name: str = Field(default="", description="Agent name; empty picks a free name")
    x: float = Field(description="Spawn x position")
    y: float = Field(description="Spawn y position")
    theta: float = Field(default=0.0, description="Spawn heading in radians")


class KillRequest(BaseModel):
    name: str = Field(description="Agent to remove")


class HealthResponse(BaseModel):
    status: str = "ok"
    turtles: int = 0


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(world: TurtleWorld | None = None) -> FastAPI:
    """Create the simulator application.

    Args:
        world: Optional pre-populated world (for testing).
    """
    app = FastAPI(
        title="keyteleop Simulator",
        description="In-memory turtle world for the keyteleop controller",
        version="0.1.0",
    )
    app.state.world = world if world is not None else TurtleWorld()

    def _raise_for(e: WorldError) -> None:
        status = 409 if e.conflict else 404
        raise HTTPException(status_code=status, detail=str(e)) from e

    @app.get("/health")
    async def health_check() -> HealthResponse:
        w: TurtleWorld = app.state.world
        return HealthResponse(turtles=len(w.names))

    @app.get("/turtles")
    async def list_turtles() -> dict[str, Pose]:
        w: TurtleWorld = app.state.world
        return {name: w.get_pose(name) for name in w.names}

    @app.get("/turtles/{name:path}")
    async def get_turtle(name: str) -> Pose:
        w: TurtleWorld = app.state.world
        try:
            return w.get_pose(name)
        except WorldError as e:
            _raise_for(e)

    @app.post("/spawn")
    async def spawn(request: SpawnRequest) -> dict[str, str]:
        w: TurtleWorld = app.state.world
        try:
            name = w.spawn(request.name, Pose(x=request.x, y=request.y, theta=request.theta))
        except WorldError as e:
            _raise_for(e)
        return {"status": "ok", "name": name}

    @app.post("/kill")
    async def kill(request: KillRequest) -> dict[str, str]:
        w: TurtleWorld = app.state.world
        try:
            w.kill(request.name)
        except WorldError as e:
            _raise_for(e)
        return {"status": "ok", "name": request.name}

    @app.post("/{name:path}/cmd_vel")
    async def cmd_vel(name: str, twist: Twist) -> Pose:
        w: TurtleWorld = app.state.world
        try:
            return w.apply_twist(name, twist)
        except WorldError as e:
            _raise_for(e)

    return app


def main() -> None:
    """Entry point for running the simulator standalone."""
    from keyteleop.config.settings import load_settings
    from keyteleop.utils.logging import setup_logging

    settings = load_settings()
    setup_logging(settings.logging)

    app = create_app()
    uvicorn.run(app, host=settings.simulator.host, port=settings.simulator.port)


if __name__ == "__main__":
    main()
