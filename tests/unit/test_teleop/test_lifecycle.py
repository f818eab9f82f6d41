"""Tests for AgentLifecycle and CommandChannel."""

from __future__ import annotations

import random
from unittest.mock import MagicMock

import pytest

from keyteleop.config.settings import SpawnConfig
from keyteleop.domain.models import Twist, Vector3
from keyteleop.sim.base import SimulatorError
from keyteleop.teleop.lifecycle import AgentLifecycle, CommandChannel


class TestCreate:
    def test_spawns_named_agent_within_bounds(
        self, mock_simulator: MagicMock, seeded_rng: random.Random
    ) -> None:
        lifecycle = AgentLifecycle(mock_simulator, rng=seeded_rng)
        channel = lifecycle.create("alice")

        mock_simulator.spawn.assert_called_once()
        identity = mock_simulator.spawn.call_args.args[0]
        assert identity.name == "alice"
        assert 0.0 <= identity.pose.x <= 11.0
        assert 0.0 <= identity.pose.y <= 11.0
        assert 0.0 <= identity.pose.theta <= 3.14
        assert lifecycle.identity == identity
        assert lifecycle.spawned
        assert channel.topic == "alice/cmd_vel"
        lifecycle.destroy()

    def test_custom_bounds(self, mock_simulator: MagicMock, seeded_rng: random.Random) -> None:
        lifecycle = AgentLifecycle(
            mock_simulator, spawn=SpawnConfig(x_max=1.0, y_max=2.0, theta_max=0.5), rng=seeded_rng
        )
        for _ in range(50):
            pose = lifecycle.random_pose()
            assert 0.0 <= pose.x <= 1.0
            assert 0.0 <= pose.y <= 2.0
            assert 0.0 <= pose.theta <= 0.5

    def test_empty_name_rejected(self, mock_simulator: MagicMock) -> None:
        lifecycle = AgentLifecycle(mock_simulator)
        with pytest.raises(ValueError):
            lifecycle.create("")
        mock_simulator.spawn.assert_not_called()

    def test_second_create_rejected(self, mock_simulator: MagicMock) -> None:
        lifecycle = AgentLifecycle(mock_simulator)
        lifecycle.create("alice")
        with pytest.raises(RuntimeError):
            lifecycle.create("bob")
        lifecycle.destroy()

    def test_spawn_failure_is_not_fatal(self, mock_simulator: MagicMock) -> None:
        mock_simulator.spawn.side_effect = SimulatorError("unreachable", backend="http")
        lifecycle = AgentLifecycle(mock_simulator)
        channel = lifecycle.create("alice")
        assert isinstance(channel, CommandChannel)
        assert not lifecycle.spawned
        lifecycle.destroy()
        mock_simulator.kill.assert_called_once_with("alice")


class TestDestroy:
    def test_destroy_once(self, mock_simulator: MagicMock) -> None:
        lifecycle = AgentLifecycle(mock_simulator)
        lifecycle.create("alice")
        lifecycle.destroy()
        lifecycle.destroy()
        lifecycle.destroy()
        mock_simulator.kill.assert_called_once_with("alice")
        assert lifecycle.destroyed

    def test_destroy_before_create_is_noop(self, mock_simulator: MagicMock) -> None:
        lifecycle = AgentLifecycle(mock_simulator)
        lifecycle.destroy()
        mock_simulator.kill.assert_not_called()

    def test_kill_failure_is_swallowed_and_not_retried(self, mock_simulator: MagicMock) -> None:
        mock_simulator.kill.side_effect = SimulatorError("gone", backend="http")
        lifecycle = AgentLifecycle(mock_simulator)
        lifecycle.create("alice")
        lifecycle.destroy()
        lifecycle.destroy()
        assert mock_simulator.kill.call_count == 1

    def test_finalizer_destroys_leftover_agent(self, mock_simulator: MagicMock) -> None:
        lifecycle = AgentLifecycle(mock_simulator)
        lifecycle.create("alice")
        del lifecycle
        mock_simulator.kill.assert_called_once_with("alice")


class TestCommandChannel:
    def test_publish_forwards_to_simulator(self, mock_simulator: MagicMock) -> None:
        channel = CommandChannel(mock_simulator, "alice")
        twist = Twist(linear=Vector3(x=2.0))
        channel.publish(twist)
        mock_simulator.publish_velocity.assert_called_once_with("alice", twist)

    def test_publish_failure_is_dropped(self, mock_simulator: MagicMock) -> None:
        mock_simulator.publish_velocity.side_effect = SimulatorError("timeout", backend="http")
        channel = CommandChannel(mock_simulator, "alice")
        channel.publish(Twist())
        channel.publish(Twist())
        assert mock_simulator.publish_velocity.call_count == 2
