"""Domain models for keyteleop.

This package contains the core data structures and enumerations used
throughout the system. All models use Pydantic v2 for validation and
serialization.
"""

from keyteleop.domain.models import (
    AgentIdentity,
    KeyAction,
    Pose,
    Twist,
    Vector3,
    VelocityIntent,
)

__all__ = [
    "AgentIdentity",
    "KeyAction",
    "Pose",
    "Twist",
    "Vector3",
    "VelocityIntent",
]
