"""Write a default configuration file."""

from pathlib import Path

import click

from pantry.cli.formatting import print_success
from pantry.core.config import PantryConfig, save_config


@click.command("init-config")
@click.argument("path", type=click.Path(path_type=Path), default=Path("pantry.yml"))
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init_config(path: Path, force: bool):
    """Write the default configuration, including the built-in tables, to PATH."""
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")

    save_config(PantryConfig(), path)
    print_success(f"Wrote default configuration to {path}")
