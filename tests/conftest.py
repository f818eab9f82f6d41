"""Shared test fixtures for the keyteleop test suite.

Provides common fixtures used across the unit tests: a mock simulator,
a pseudo-terminal pair, and scripted key sources.
"""

from __future__ import annotations

import os
import pty
import random
from typing import Callable, Iterator
from unittest.mock import MagicMock

import pytest

from keyteleop.domain.models import AgentIdentity, Pose
from keyteleop.sim.base import SimulatorClient
from keyteleop.teleop.terminal import TerminalReadError


# ---------------------------------------------------------------------------
# Agent Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_identity() -> AgentIdentity:
    """An agent named alice in the middle of the world."""
    return AgentIdentity(name="alice", pose=Pose(x=5.5, y=5.5, theta=0.0))


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


# ---------------------------------------------------------------------------
# Mock Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_simulator() -> MagicMock:
    """A mock SimulatorClient that accepts every request."""
    return MagicMock(spec=SimulatorClient)


# ---------------------------------------------------------------------------
# Terminal Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def pty_pair() -> Iterator[tuple[int, int]]:
    """A (master, slave) pseudo-terminal pair; the slave acts as stdin."""
    master, slave = pty.openpty()
    yield master, slave
    for fd in (master, slave):
        try:
            os.close(fd)
        except OSError:
            pass


def scripted_keys(codes: list[int]) -> Callable[[], int]:
    """A read_key callable that replays ``codes`` then fails like a closed tty."""
    it = iter(codes)

    def read_key() -> int:
        try:
            return next(it)
        except StopIteration:
            raise TerminalReadError("read(): end of input") from None

    return read_key


@pytest.fixture
def key_script() -> Callable[[list[int]], Callable[[], int]]:
    """Factory for read_key callables that replay a fixed key sequence."""
    return scripted_keys
