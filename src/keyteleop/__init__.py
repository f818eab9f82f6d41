"""keyteleop -- Keyboard teleoperation for a simulated agent.

This package spawns a named agent in a simulated world, drives it with
velocity commands read from the arrow keys of a raw-mode terminal, and
kills the agent again on every way out of the program.
"""

__version__ = "0.1.0"
