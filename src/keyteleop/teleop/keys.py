"""Key table for the teleop controller.

Arrow keys arrive from the terminal as ``ESC [ A`` style sequences. The
controller reads one byte at a time, so ``ESC`` and ``[`` decode as
unrecognized bytes and only the final letter selects a direction.
"""

from __future__ import annotations

from keyteleop.domain.models import KeyAction, VelocityIntent

KEYCODE_U = 0x41
KEYCODE_D = 0x42
KEYCODE_R = 0x43
KEYCODE_L = 0x44
KEYCODE_Q = 0x71

KEY_TABLE: dict[int, KeyAction] = {
    KEYCODE_U: KeyAction.UP,
    KEYCODE_D: KeyAction.DOWN,
    KEYCODE_R: KeyAction.RIGHT,
    KEYCODE_L: KeyAction.LEFT,
    KEYCODE_Q: KeyAction.QUIT,
}

INTENTS: dict[KeyAction, VelocityIntent] = {
    KeyAction.UP: VelocityIntent(linear=1),
    KeyAction.DOWN: VelocityIntent(linear=-1),
    KeyAction.LEFT: VelocityIntent(angular=1),
    KeyAction.RIGHT: VelocityIntent(angular=-1),
}

BANNER = """Reading from keyboard
---------------------------
Use arrow keys to move the turtle.
Press Q to quit."""


def decode_key(code: int) -> KeyAction:
    return KEY_TABLE.get(code, KeyAction.NONE)


def intent_for(action: KeyAction) -> VelocityIntent:
    """Velocity intent for a decoded key; zero for quit and unknown keys."""
    return INTENTS.get(action, VelocityIntent())
