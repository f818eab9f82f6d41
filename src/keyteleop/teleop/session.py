"""Top-level run sequence for one teleop session.

Ties together the agent lifecycle, raw terminal mode and the key loop,
and makes sure every way out of the session (quit key, read failure,
SIGINT/SIGTERM) goes through the same teardown: restore the terminal,
kill the agent. The signal handler itself only restores the terminal and
unwinds; the kill request runs from run()'s finally block.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import TextIO

from keyteleop.config.settings import Settings
from keyteleop.sim.base import SimulatorClient
from keyteleop.teleop.keys import BANNER
from keyteleop.teleop.lifecycle import AgentLifecycle
from keyteleop.teleop.loop import KeyLoop
from keyteleop.teleop.terminal import RawTerminal, TerminalReadError

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class TeleopSession:
    """Runs one agent from spawn to kill."""

    def __init__(
        self,
        name: str,
        simulator: SimulatorClient,
        settings: Settings | None = None,
        terminal: RawTerminal | None = None,
        lifecycle: AgentLifecycle | None = None,
        out: TextIO | None = None,
    ) -> None:
        self._name = name
        self._settings = settings or Settings()
        self._terminal = terminal or RawTerminal()
        self._lifecycle = lifecycle or AgentLifecycle(simulator, spawn=self._settings.spawn)
        self._out = out or sys.stdout
        self._previous_handlers: dict[int, object] = {}
        self._received_signal: int | None = None

    @property
    def lifecycle(self) -> AgentLifecycle:
        return self._lifecycle

    @property
    def terminal(self) -> RawTerminal:
        return self._terminal

    def run(self) -> int:
        """Spawn the agent, drive it until quit, and clean up.

        Returns:
            0 after the quit key, 1 after a terminal read failure.
        """
        self._install_signal_handlers()
        try:
            channel = self._lifecycle.create(self._name)
            print(BANNER, file=self._out, flush=True)

            teleop = self._settings.teleop
            loop = KeyLoop(
                read_key=self._terminal.read_key,
                publish=channel.publish,
                scale_linear=teleop.scale_linear,
                scale_angular=teleop.scale_angular,
            )
            with self._terminal:
                loop.run()
            logger.info("Quit requested after %d commands", loop.commands_sent)
            return 0
        except TerminalReadError as e:
            self.teardown()
            print(e, file=sys.stderr)
            return 1
        finally:
            if self._received_signal is not None:
                logger.info("Received signal %d, shutting down", self._received_signal)
            self.teardown()
            self._restore_signal_handlers()

    def teardown(self) -> None:
        """Restore the terminal and kill the agent. Safe to repeat."""
        self._terminal.restore()
        self._lifecycle.destroy()

    def _handle_signal(self, signum: int, frame: object) -> None:
        # May interrupt a request in flight: no logging and no I/O besides
        # the terminal here
        self._received_signal = signum
        self._terminal.restore()
        raise SystemExit(128 + signum)

    def _install_signal_handlers(self) -> None:
        for sig in HANDLED_SIGNALS:
            self._previous_handlers[sig] = signal.signal(sig, self._handle_signal)

    def _restore_signal_handlers(self) -> None:
        for sig, handler in self._previous_handlers.items():
            # None means the old handler was not installed from Python
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
        self._previous_handlers.clear()
