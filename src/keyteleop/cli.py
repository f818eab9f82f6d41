"""Command-line interface for the keyteleop controller.

Prompts for the agent's name, then spawns it in the simulator and drives
it from the keyboard until the quit key or an interrupt.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

NAME_PROMPT = "Please enter a name: "


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="keyteleop",
        description="Drive a simulated agent with the arrow keys",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/keyteleop.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def prompt_name(read_line: Callable[[str], str] | None = None) -> str:
    """Ask for an agent name until a non-empty one is given.

    Only the first whitespace-separated word is kept.

    Raises:
        EOFError: If stdin closes before a name is entered.
    """
    read_line = read_line or input
    while True:
        words = read_line(NAME_PROMPT).split()
        if words:
            return words[0]


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the keyteleop CLI."""
    args = parse_args(argv)

    try:
        name = prompt_name()
    except KeyboardInterrupt:
        print(file=sys.stderr)
        sys.exit(130)
    except EOFError:
        print("\nNo name entered", file=sys.stderr)
        sys.exit(1)

    from keyteleop.config.settings import load_settings
    from keyteleop.sim.http_backend import HttpSimulatorClient
    from keyteleop.teleop.session import TeleopSession
    from keyteleop.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    logger.info("Starting teleop session for %s", name)
    with HttpSimulatorClient(
        base_url=settings.simulator.base_url,
        timeout=settings.simulator.timeout,
    ) as simulator:
        session = TeleopSession(name=name, simulator=simulator, settings=settings)
        code = session.run()

    sys.exit(code)


if __name__ == "__main__":
    main()
