"""Command: start the example application."""

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
  propbind run
  propbind run application.properties
  propbind -q run application.properties local.properties
  propbind --json run application.yml""",
)
@property_files_argument
@click.pass_obj
def run(app: AppContext, files: tuple[Path, ...]) -> None:
    """Bind the example application's configuration from FILES and start it.

    Prints every bound value under its canonical key. If anything is
    missing or malformed, every issue is listed and the exit code is 1.
    """
    from propbind.services.binding import BindingService

    app.emit(BindingService(app.registry).run(app.source_paths(files)))
