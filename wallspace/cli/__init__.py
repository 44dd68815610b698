"""Command-line interface."""

from wallspace.cli.arguments import parse_arguments

__all__ = ["parse_arguments"]
