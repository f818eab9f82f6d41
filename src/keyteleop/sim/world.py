"""In-memory world of named turtles for the stand-in simulator.

Keeps one pose per agent and moves agents when velocity commands arrive.
Each command is applied as if held for ``dt`` seconds, after which the
agent stops, so repeated keypresses move an agent in discrete steps.
"""

from __future__ import annotations

import itertools
import logging
import math

from keyteleop.domain.models import Pose, Twist

logger = logging.getLogger(__name__)

# Side length of the square world; positions are clamped into [0, WORLD_SIZE]
WORLD_SIZE = 11.0889
# How long a single velocity command is applied for (seconds)
COMMAND_DURATION = 1.0


class WorldError(Exception):
    """Raised when a world operation refers to a bad agent name."""

    def __init__(self, message: str, name: str = "", conflict: bool = False) -> None:
        super().__init__(message)
        self.name = name
        self.conflict = conflict


class TurtleWorld:
    """Registry of agent poses."""

    def __init__(self, size: float = WORLD_SIZE) -> None:
        self._size = size
        self._poses: dict[str, Pose] = {}
        self._counter = itertools.count(1)

    @property
    def size(self) -> float:
        return self._size

    @property
    def names(self) -> list[str]:
        return sorted(self._poses)

    def spawn(self, name: str, pose: Pose) -> str:
        """Add an agent and return its name.

        An empty name is replaced with the first free ``turtleN`` name.
        """
        if not name:
            name = self._next_free_name()
        if name in self._poses:
            raise WorldError(f"A turtle named [{name}] already exists", name=name, conflict=True)
        self._poses[name] = Pose(x=self._clamp(pose.x), y=self._clamp(pose.y), theta=pose.theta)
        logger.info("Spawned turtle [%s] at x=[%f], y=[%f], theta=[%f]", name, pose.x, pose.y, pose.theta)
        return name

    def kill(self, name: str) -> None:
        if name not in self._poses:
            raise WorldError(f"Tried to kill turtle [{name}], which does not exist", name=name)
        del self._poses[name]
        logger.info("Killed turtle [%s]", name)

    def get_pose(self, name: str) -> Pose:
        try:
            return self._poses[name]
        except KeyError:
            raise WorldError(f"No turtle named [{name}]", name=name) from None

    def apply_twist(self, name: str, twist: Twist, dt: float = COMMAND_DURATION) -> Pose:
        """Move an agent by a velocity command held for ``dt`` seconds.

        Heading is updated first, then the agent advances along it.
        """
        pose = self.get_pose(name)
        theta = _wrap_angle(pose.theta + twist.angular.z * dt)
        x = pose.x + math.cos(theta) * twist.linear.x * dt
        y = pose.y + math.sin(theta) * twist.linear.x * dt

        new_pose = Pose(x=self._clamp(x), y=self._clamp(y), theta=theta)
        if new_pose.x != x or new_pose.y != y:
            logger.warning("Oh no! [%s] hit the wall!", name)
        self._poses[name] = new_pose
        return new_pose

    def _clamp(self, value: float) -> float:
        return min(max(value, 0.0), self._size)

    def _next_free_name(self) -> str:
        while True:
            candidate = f"turtle{next(self._counter)}"
            if candidate not in self._poses:
                return candidate


def _wrap_angle(angle: float) -> float:
    """Normalize an angle into [-pi, pi)."""
    return (angle + math.pi) % (2 * math.pi) - math.pi
