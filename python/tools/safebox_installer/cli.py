"""Command-line interface for the safebox installer."""

import argparse
from typing import List, Optional

from loguru import logger

from .api import install_binary, uninstall_binary
from .config import InstallerConfig, load_config
from .logging_config import setup_logging
from .models import Command, InvalidCommandError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="safebox-installer",
        description="Install or remove the prebuilt safebox binary.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Download the binary for this platform and install it
  python -m safebox_installer install

  # Remove the installed binary
  python -m safebox_installer uninstall
""",
    )

    parser.add_argument(
        "command",
        nargs="?",
        help="Either 'install' or 'uninstall'. Without a command nothing is done.",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging."
    )

    return parser.parse_args(argv)


def run_command(command: Command, config: InstallerConfig) -> int:
    """
    Dispatch a parsed command.

    Returns:
        Integer exit code
    """
    match command:
        case Command.INSTALL:
            result = install_binary(config)
            return 0 if result.success else 1
        case Command.UNINSTALL:
            uninstall_binary(config)
            return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function for command-line execution.

    Returns:
        Integer exit code: 0 for success (or no command), 1 for error
    """
    args = parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "INFO")

    if args.command is None:
        return 0

    try:
        command = Command.parse(args.command)
    except InvalidCommandError as e:
        logger.error(e.args[0])
        return 1

    try:
        config = load_config()
        return run_command(command, config)
    except Exception as e:
        logger.opt(exception=e).error(f"{command.value} failed: {e}")
        return 1
