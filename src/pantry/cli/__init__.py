"""
Pantry CLI module.

This module provides the command-line interface for Pantry.
"""

from pantry.cli.main import cli, main

__all__ = ["cli", "main"]
