"""HTTP simulator backend.

Sends lifecycle requests and velocity commands as JSON over HTTP to the
simulator service.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from keyteleop.domain.models import AgentIdentity, Twist
from keyteleop.sim.base import SimulatorClient, SimulatorError

logger = logging.getLogger(__name__)


class HttpSimulatorClient(SimulatorClient):
    """Talks to the simulator's HTTP API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8090",
        timeout: float = 2.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def connect(self) -> None:
        """Create the HTTP client and check that the simulator answers.

        An unreachable simulator is only logged: the controller keeps
        running and later requests fail individually.
        """
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        try:
            resp = self._client.get("/health")
            resp.raise_for_status()
            logger.info("Connected to simulator at %s", self._base_url)
        except httpx.HTTPError as e:
            logger.warning("Simulator at %s is not reachable: %s", self._base_url, e)

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("Disconnected from simulator")

    def spawn(self, identity: AgentIdentity) -> None:
        pose = identity.pose
        self._post(
            "/spawn",
            {"name": identity.name, "x": pose.x, "y": pose.y, "theta": pose.theta},
        )
        logger.debug("Spawn request sent for %s", identity.name)

    def kill(self, name: str) -> None:
        self._post("/kill", {"name": name})
        logger.debug("Kill request sent for %s", name)

    def publish_velocity(self, name: str, twist: Twist) -> None:
        # One path segment, whatever characters the name holds
        self._post(f"/{quote(name, safe='')}/cmd_vel", twist.model_dump())

    def _post(self, path: str, payload: dict) -> httpx.Response:
        """Send a POST request to the simulator."""
        if self._client is None:
            raise SimulatorError("Not connected to simulator", backend="http")
        try:
            resp = self._client.post(path, json=payload)
            resp.raise_for_status()
            return resp
        except httpx.HTTPError as e:
            raise SimulatorError(
                f"HTTP request to {path} failed: {e}", backend="http"
            ) from e
