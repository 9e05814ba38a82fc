"""Entry point for the arborist command."""

import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from arborist.cli.args import parse_args
from arborist.config import Config
from arborist.constants import EXIT_FAILURE, EXIT_INTERRUPTED
from arborist.core.orchestrator import Arborist
from arborist.exceptions import ArboristError
from arborist.logging_config import setup_logging

# stdout belongs to the wrapped command
console = Console(stderr=True)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)

    # Setup logging before creating Arborist
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = Config(
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
            random_label=parsed_args.random,
        )

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {escape(str(value))}", soft_wrap=True)

        return Arborist(config).run(parsed_args.command)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return EXIT_INTERRUPTED
    except ArboristError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        if parsed_args.debug:
            console.print_exception()
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
