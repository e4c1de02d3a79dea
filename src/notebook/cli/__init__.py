"""Command line front end for the notebook CLI."""

from notebook.cli.args_handler import ParsedArgs, parse_args

__all__ = ["ParsedArgs", "parse_args"]
