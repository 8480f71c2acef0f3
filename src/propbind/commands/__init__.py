"""Subcommand modules for propbind.

Provides register_commands() which uses deferred imports to keep
``propbind --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from propbind.commands.converters import converters
    from propbind.commands.keys import keys
    from propbind.commands.run import run

    cli.add_command(keys)
    cli.add_command(run)
    cli.add_command(converters)
