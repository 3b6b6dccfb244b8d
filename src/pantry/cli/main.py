"""
Main CLI entry point for Pantry.

This module provides the main CLI group and global options.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from pantry import __version__
from pantry.cli.formatting import console, print_error
from pantry.cli.utils import load_config, setup_logging


class CLIContext:
    """Context object for CLI commands."""

    def __init__(self):
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.quiet: bool = False
        self.log_level: str = "WARNING"


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


@click.group()
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to config file (default: pantry.yml)",
)
@click.option(
    "--verbose", "-v",
    count=True,
    help="Enable verbose logging (can be repeated: -vv)",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="Pantry")
@click.pass_context
def cli(ctx, config: Optional[Path], verbose: int, quiet: bool):
    """
    Pantry - duplicate product detection for shopping lists.

    \b
    Typical use:
      pantry check cheerios -e cereal     # Is "cheerios" already covered?
      pantry normalize "Great Value Milk" # Show the canonical name
      pantry init-config pantry.yml       # Write a default config
    """
    cli_ctx = ctx.ensure_object(CLIContext)
    cli_ctx.config_path = config
    cli_ctx.verbose = verbose
    cli_ctx.quiet = quiet

    default_level = "WARNING"
    if not verbose and not quiet:
        default_level = load_config(config).log_level
    cli_ctx.log_level = setup_logging(verbose=verbose, quiet=quiet, default_level=default_level)


# Import and register commands
from pantry.cli.check import check, normalize  # noqa: E402
from pantry.cli.init import init_config  # noqa: E402

cli.add_command(check)
cli.add_command(normalize)
cli.add_command(init_config)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        if "--verbose" in sys.argv or "-v" in sys.argv:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
