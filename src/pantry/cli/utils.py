"""Shared helpers for CLI commands."""

from pathlib import Path
from typing import Optional

import click

from pantry.core.config import PantryConfig
from pantry.core.config import load_config as _load_config
from pantry.utils.exceptions import ConfigurationError
from pantry.utils.logging import configure_library_logging
from pantry.utils.logging import setup_logging as _setup_logging

DEFAULT_CONFIG_NAMES = ("pantry.yml", "pantry.yaml")


def load_config(config_path: Optional[Path] = None) -> PantryConfig:
    """Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, looks for
            pantry.yml / pantry.yaml in the working directory

    Raises:
        click.ClickException: If config is invalid
    """
    if config_path is None:
        for candidate in DEFAULT_CONFIG_NAMES:
            if Path(candidate).exists():
                config_path = Path(candidate)
                break
        else:
            return PantryConfig()

    try:
        return _load_config(config_path)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))
    except ConfigurationError as e:
        raise click.ClickException(f"Invalid config file {config_path}: {e}")


def setup_logging(verbose: int = 0, quiet: bool = False, default_level: str = "WARNING") -> str:
    """Set up logging based on verbosity level.

    Args:
        verbose: Verbosity level (1=INFO, 2+=DEBUG)
        quiet: If True, suppress all non-error output
        default_level: Level used when neither -v nor -q is given,
            normally ``log_level`` from the config file

    Returns:
        The level name that was applied
    """
    if quiet:
        level = "ERROR"
    elif verbose == 1:
        level = "INFO"
    elif verbose >= 2:
        level = "DEBUG"
    else:
        level = default_level

    _setup_logging(level=level)
    configure_library_logging(quiet=verbose < 2)
    return level
