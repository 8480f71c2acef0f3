"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy converter-registry initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import click

from propbind.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from propbind.config.settings import PropbindSettings
    from propbind.domain.converters import TypeConverterRegistry
    from propbind.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The registry is built on first use so ``--help`` and ``--version``
    never trigger plugin discovery.
    """

    def __init__(self, settings: PropbindSettings) -> None:
        self.settings = settings
        self._registry: TypeConverterRegistry | None = None

        from propbind.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def registry(self) -> TypeConverterRegistry:
        """The frozen converter registry (plugins applied on first access)."""
        if self._registry is None:
            from propbind.demo.converters import FullNameConverterPlugin
            from propbind.plugins.manager import PluginManager

            pm = PluginManager()
            pm.register_plugin(FullNameConverterPlugin(), name="full-name")
            if self.settings.plugins.entry_points:
                pm.discover_and_load()
            self._registry = pm.build_registry()
        return self._registry

    def source_paths(self, files: Sequence[Path]) -> list[Path]:
        """Property files for a command: explicit ones, else configured ones."""
        from propbind.demo.app import SAMPLE_PROPERTIES
        from propbind.services.binding import resolve_sources

        sources = self.settings.sources
        return resolve_sources(
            files,
            sources.files,
            self.settings.project_root,
            fallback=SAMPLE_PROPERTIES if sources.fallback_to_sample else None,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
