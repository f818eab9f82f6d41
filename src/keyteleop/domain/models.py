"""Core domain models for the keyteleop system.

These models represent the data flowing between the keyboard, the
controller and the simulator: the identity and pose of the controlled
agent, the per-cycle velocity intent derived from a keypress, and the
velocity command published to the agent.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class KeyAction(str, enum.Enum):
    """What a single byte read from the keyboard means to the controller."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    QUIT = "quit"
    NONE = "none"  # Unrecognized byte


# ---------------------------------------------------------------------------
# Agent Models
# ---------------------------------------------------------------------------


class Pose(BaseModel):
    """Position and heading of an agent in the simulated world.

    Coordinates are in world units, heading in radians.
    """

    model_config = ConfigDict(frozen=True)

    x: float = Field(description="Horizontal position")
    y: float = Field(description="Vertical position")
    theta: float = Field(default=0.0, description="Heading in radians")


class AgentIdentity(BaseModel):
    """The name and origin pose of the controlled agent.

    Assigned once when the agent is created and never changed afterward.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Unique agent name")
    pose: Pose = Field(description="Pose the agent is spawned at")

    @property
    def command_topic(self) -> str:
        """Channel the agent listens on for velocity commands."""
        return f"{self.name}/cmd_vel"


# ---------------------------------------------------------------------------
# Velocity Models
# ---------------------------------------------------------------------------


class VelocityIntent(BaseModel):
    """Desired direction of motion derived from the latest keypress."""

    model_config = ConfigDict(frozen=True)

    linear: int = Field(default=0, ge=-1, le=1)
    angular: int = Field(default=0, ge=-1, le=1)

    @property
    def is_zero(self) -> bool:
        return self.linear == 0 and self.angular == 0


class Vector3(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Twist(BaseModel):
    """A velocity command: linear and angular velocity vectors."""

    model_config = ConfigDict(frozen=True)

    linear: Vector3 = Field(default_factory=Vector3)
    angular: Vector3 = Field(default_factory=Vector3)

    @classmethod
    def from_intent(
        cls,
        intent: VelocityIntent,
        scale_linear: float,
        scale_angular: float,
    ) -> Twist:
        """Scale an intent into a planar command (linear.x, angular.z)."""
        return cls(
            linear=Vector3(x=scale_linear * intent.linear),
            angular=Vector3(z=scale_angular * intent.angular),
        )
