"""CLI module for Strata."""

from strata.cli.main import cli

__all__ = ["cli"]
