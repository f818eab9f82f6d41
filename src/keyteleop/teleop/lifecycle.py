"""Creation and destruction of the controlled agent.

The lifecycle manager owns the agent's identity for the life of the
process. Remote failures are never fatal: the controller keeps running
without a confirmed agent and later requests become harmless no-ops on
the simulator side.
"""

from __future__ import annotations

import logging
import random

from keyteleop.config.settings import SpawnConfig
from keyteleop.domain.models import AgentIdentity, Pose, Twist
from keyteleop.sim.base import SimulatorClient, SimulatorError

logger = logging.getLogger(__name__)


class CommandChannel:
    """Fire-and-forget velocity publisher bound to one agent."""

    def __init__(self, simulator: SimulatorClient, name: str) -> None:
        self._simulator = simulator
        self._name = name

    @property
    def topic(self) -> str:
        return f"{self._name}/cmd_vel"

    def publish(self, twist: Twist) -> None:
        """Send a command. Delivery failures are logged and dropped."""
        try:
            self._simulator.publish_velocity(self._name, twist)
        except SimulatorError as e:
            logger.warning("Dropped command on %s: %s", self.topic, e)
            return
        logger.debug(
            "Published on %s: linear.x=%.2f angular.z=%.2f",
            self.topic, twist.linear.x, twist.angular.z,
        )


class AgentLifecycle:
    """Spawns one named agent at a random pose and kills it exactly once."""

    def __init__(
        self,
        simulator: SimulatorClient,
        spawn: SpawnConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._simulator = simulator
        self._spawn = spawn or SpawnConfig()
        self._rng = rng or random.Random()
        self._identity: AgentIdentity | None = None
        self._spawned = False
        self._destroyed = False

    @property
    def identity(self) -> AgentIdentity | None:
        return self._identity

    @property
    def spawned(self) -> bool:
        """Whether the simulator acknowledged the create request."""
        return self._spawned

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def random_pose(self) -> Pose:
        return Pose(
            x=self._rng.uniform(0.0, self._spawn.x_max),
            y=self._rng.uniform(0.0, self._spawn.y_max),
            theta=self._rng.uniform(0.0, self._spawn.theta_max),
        )

    def create(self, name: str) -> CommandChannel:
        """Spawn the agent and return the channel for its commands.

        Raises:
            ValueError: If ``name`` is empty.
            RuntimeError: If an agent was already created.
        """
        if not name:
            raise ValueError("Agent name must not be empty")
        if self._identity is not None:
            raise RuntimeError(f"Agent {self._identity.name!r} already created")

        self._identity = AgentIdentity(name=name, pose=self.random_pose())
        pose = self._identity.pose
        try:
            self._simulator.spawn(self._identity)
            self._spawned = True
            logger.info(
                "Spawned agent %s at x=%.2f y=%.2f theta=%.2f, commands on %s",
                name, pose.x, pose.y, pose.theta, self._identity.command_topic,
            )
        except SimulatorError as e:
            logger.warning("Failed to spawn agent %s: %s", name, e)

        return CommandChannel(self._simulator, name)

    def destroy(self) -> None:
        """Kill the agent. Only the first call issues a request."""
        if self._identity is None or self._destroyed:
            return
        self._destroyed = True
        name = self._identity.name
        try:
            self._simulator.kill(name)
            logger.info("Killed agent %s", name)
        except SimulatorError as e:
            logger.warning("Failed to kill agent %s: %s", name, e)

    def __del__(self) -> None:
        # Last resort if the session teardown never ran
        if getattr(self, "_identity", None) is not None and not self._destroyed:
            self.destroy()
