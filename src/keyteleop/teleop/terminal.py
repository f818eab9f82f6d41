"""Raw-mode handling for the controlling terminal.

RawTerminal snapshots the terminal's "cooked" settings once, switches
the descriptor to non-canonical, no-echo input, and puts the snapshot
back on restore. The snapshot is never modified after it is taken, so a
signal handler can restore from it at any point.
"""

from __future__ import annotations

import logging
import os
import sys
import termios

logger = logging.getLogger(__name__)

# Index of the local-mode flags and control characters in tcgetattr()'s list
LFLAG = 3
CC = 6


class TerminalReadError(Exception):
    """Raised when a key cannot be read from the terminal."""


class RawTerminal:
    """Scoped raw mode for a terminal file descriptor.

    Usage::

        with RawTerminal() as term:
            key = term.read_key()

    restore() is idempotent, so it may also be called from a teardown
    routine or a signal handler while the context is still active.
    """

    def __init__(self, fd: int | None = None) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._cooked: list | None = None
        self._raw_active = False

    @property
    def is_raw(self) -> bool:
        return self._raw_active

    @property
    def cooked_settings(self) -> list | None:
        """The settings captured before raw mode was entered."""
        return self._cooked

    def enter_raw(self) -> None:
        """Capture the current settings and switch to raw input."""
        if self._raw_active:
            return
        if not os.isatty(self._fd):
            # Piped input: keys are read as-is, there is nothing to restore
            logger.warning("fd %d is not a terminal, reading keys without raw mode", self._fd)
            return
        cooked = termios.tcgetattr(self._fd)
        raw = termios.tcgetattr(self._fd)
        raw[LFLAG] &= ~(termios.ICANON | termios.ECHO)
        # New line, then end of file
        raw[CC][termios.VEOL] = b"\x01"
        raw[CC][termios.VEOF] = b"\x02"
        raw[CC][termios.VMIN] = 1
        raw[CC][termios.VTIME] = 0

        self._cooked = cooked
        termios.tcsetattr(self._fd, termios.TCSANOW, raw)
        self._raw_active = True
        logger.debug("Terminal fd %d switched to raw mode", self._fd)

    def restore(self) -> None:
        """Put the cooked settings back. No-op unless raw mode is active.

        Touches only the descriptor and the snapshot, and does not log,
        so it is safe to call from a signal handler.
        """
        if not self._raw_active or self._cooked is None:
            return
        self._raw_active = False
        termios.tcsetattr(self._fd, termios.TCSANOW, self._cooked)

    def read_key(self) -> int:
        """Block until one byte arrives and return its value.

        Raises:
            TerminalReadError: If the read fails or input has ended.
        """
        try:
            data = os.read(self._fd, 1)
        except OSError as e:
            raise TerminalReadError(f"read(): {e}") from e
        if not data:
            raise TerminalReadError("read(): end of input")
        return data[0]

    def __enter__(self) -> RawTerminal:
        self.enter_raw()
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object) -> None:
        self.restore()
