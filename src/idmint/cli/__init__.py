"""Command-line interface for idmint."""

from idmint.cli.main import cli

__all__ = ["cli"]
