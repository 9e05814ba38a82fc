"""Command-line argument parsing for arborist."""

import argparse
from typing import List, Optional

from arborist.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arborist",
        description="Automatically manage git worktrees and branches for command execution",
        epilog="Inside a git repository the command runs in an isolated worktree on an "
        "'arborist/<label>' branch. The worktree is removed afterwards unless it holds "
        "uncommitted changes or unpushed commits.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "-r",
        "--random",
        action="store_true",
        help="Pick a random label instead of one derived from the parent process",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"arborist {__version__}")
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        metavar="COMMAND [ARGS...]",
        help="Command and arguments to execute",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Everything from the first positional token on belongs to the command,
    including tokens that look like options.
    """
    parser = build_parser()
    parsed_args = parser.parse_args(argv)

    command = list(parsed_args.command)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        parser.error("the following arguments are required: COMMAND")
    parsed_args.command = command

    return parsed_args
