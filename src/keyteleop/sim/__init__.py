"""Simulator module for keyteleop.

Client side: the abstract SimulatorClient and its HTTP backend, used by
the controller to spawn and kill its agent and publish velocity
commands. Server side: a small in-memory turtle world served over HTTP,
standing in for a full simulator.

Public API:
    SimulatorClient -- Abstract base class
    SimulatorError -- Raised when a simulator request fails
    HttpSimulatorClient -- HTTP backend
"""

from keyteleop.sim.base import SimulatorClient, SimulatorError

__all__ = ["SimulatorClient", "SimulatorError", "HttpSimulatorClient"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "HttpSimulatorClient":
        from keyteleop.sim.http_backend import HttpSimulatorClient
        return HttpSimulatorClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
