"""Subcommands of the ehstat CLI."""
