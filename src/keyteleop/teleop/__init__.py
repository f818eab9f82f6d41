"""Keyboard teleoperation module for keyteleop.

Reads raw keys from the terminal and turns them into velocity commands
for one agent, which it spawns on start and kills on every way out.

Public API:
    AgentLifecycle -- Spawns and kills the controlled agent
    KeyLoop -- Key-to-command control loop
    RawTerminal -- Scoped raw mode for the terminal
    TeleopSession -- Top-level run sequence with signal handling
"""

from keyteleop.teleop.lifecycle import AgentLifecycle, CommandChannel
from keyteleop.teleop.loop import KeyLoop
from keyteleop.teleop.session import TeleopSession
from keyteleop.teleop.terminal import RawTerminal, TerminalReadError

__all__ = [
    "AgentLifecycle",
    "CommandChannel",
    "KeyLoop",
    "RawTerminal",
    "TeleopSession",
    "TerminalReadError",
]
