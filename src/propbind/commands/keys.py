"""Command: show the layered property namespace."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from propbind.commands._base import PbCommand, property_files_argument

if TYPE_CHECKING:
    from propbind.commands._context import AppContext


@click.command(
    cls=PbCommand,
    examples="""\
  propbind keys
  propbind keys application.properties
  propbind keys base.properties overrides.yml
  propbind --json keys config.toml""",
)
@property_files_argument
@click.pass_obj
def keys(app: AppContext, files: tuple[Path, ...]) -> None:
    """Show the properties read from FILES (later files override earlier)."""
    from propbind.services.binding import BindingService

    app.emit(BindingService(app.registry).keys(app.source_paths(files)))
