"""dslschema command line interface."""

from dslschema.cli.main import cli, main

__all__ = ["cli", "main"]
