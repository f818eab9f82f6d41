"""Abstract base class for the simulator client.

The controller talks to the simulated world through three calls: create
a named agent at a pose, destroy a named agent, and publish a velocity
command to a named agent. All simulator backends conform to this
interface so the lifecycle manager and control loop never depend on a
particular transport.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from keyteleop.domain.models import AgentIdentity, Twist

logger = logging.getLogger(__name__)


class SimulatorClient(ABC):
    """Abstract interface for requests against the simulated world.

    Example usage::

        with HttpSimulatorClient(base_url="http://localhost:8090") as sim:
            sim.spawn(identity)
            sim.publish_velocity(identity.name, Twist(linear=Vector3(x=2.0)))
            sim.kill(identity.name)
    """

    @abstractmethod
    def connect(self) -> None:
        """Prepare the client for sending requests.

        Must be called before any other request.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Safe to call multiple times."""
        ...

    @abstractmethod
    def spawn(self, identity: AgentIdentity) -> None:
        """Create the named agent at the identity's pose.

        Raises:
            SimulatorError: If the request is rejected or unreachable.
        """
        ...

    @abstractmethod
    def kill(self, name: str) -> None:
        """Destroy the named agent.

        Raises:
            SimulatorError: If the request is rejected or unreachable.
        """
        ...

    @abstractmethod
    def publish_velocity(self, name: str, twist: Twist) -> None:
        """Publish a velocity command on the agent's ``cmd_vel`` channel.

        Raises:
            SimulatorError: If the command could not be delivered.
        """
        ...

    def __enter__(self) -> SimulatorClient:
        self.connect()
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object) -> None:
        self.close()


class SimulatorError(Exception):
    """Raised when a simulator request fails."""

    def __init__(self, message: str, backend: str = "") -> None:
        super().__init__(message)
        self.backend = backend
