"""The keyboard-to-command control loop.

Reads one key per cycle, turns it into a velocity intent and publishes a
scaled velocity command whenever a movement key was recognized.
"""

from __future__ import annotations

import logging
from typing import Callable

from keyteleop.domain.models import KeyAction, Twist
from keyteleop.teleop.keys import decode_key, intent_for

logger = logging.getLogger(__name__)


class KeyLoop:
    """Drives an agent from single keypresses.

    Each cycle starts from a zero intent, so a command only ever reflects
    the key just pressed. Quit and unrecognized keys publish nothing.
    """

    def __init__(
        self,
        read_key: Callable[[], int],
        publish: Callable[[Twist], None],
        scale_linear: float = 2.0,
        scale_angular: float = 2.0,
    ) -> None:
        self._read_key = read_key
        self._publish = publish
        self._scale_linear = scale_linear
        self._scale_angular = scale_angular
        self._commands_sent = 0

    @property
    def commands_sent(self) -> int:
        return self._commands_sent

    def run(self) -> None:
        """Loop until the quit key is read.

        Raises:
            TerminalReadError: Propagated from ``read_key``.
        """
        dirty = False
        while True:
            code = self._read_key()
            logger.debug("value: 0x%02X", code)

            action = decode_key(code)
            if action is KeyAction.QUIT:
                logger.debug("QUIT")
                return

            intent = intent_for(action)
            if not intent.is_zero:
                logger.debug("%s", action.name)
                dirty = True

            if dirty:
                twist = Twist.from_intent(intent, self._scale_linear, self._scale_angular)
                self._publish(twist)
                self._commands_sent += 1
                dirty = False
