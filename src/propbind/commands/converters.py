"""Command: list the types the converter registry can bind."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from propbind.commands._base import PbCommand

if TYPE_CHECKING:
    from propbind.commands._context import AppContext


@click.command(
    cls=PbCommand,
    examples="""\
  propbind converters
  propbind --json converters""",
)
@click.pass_obj
def converters(app: AppContext) -> None:
    """List built-in and plugin-provided converters."""
    from propbind.services.binding import BindingService

    app.emit(BindingService(app.registry).converters())
