"""BindingService — load property files and bind the application's records.

Expected failures (unreadable files, misconfiguration) come back as a
failed ServiceResult; nothing here raises for them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from propbind.domain.binder import ConfigBinder
from propbind.domain.converters import TypeConverterRegistry
from propbind.domain.errors import BindingError, UnknownTypeError, type_name
from propbind.domain.namespace import PropertyNamespace
from propbind.infrastructure.sources import SourceError, read_sources
from propbind.services.result import BINDING_FAILED, SOURCE_ERROR, ServiceResult

logger = logging.getLogger(__name__)


def resolve_sources(
    explicit: Sequence[Path],
    configured: Sequence[str],
    root: Path,
    fallback: Path | None = None,
) -> list[Path]:
    """Pick the property files for a command.

    Explicit paths always win. Otherwise configured names are resolved
    against *root* and kept if they exist; when none do, *fallback* is used.
    """
    if explicit:
        return list(explicit)
    found = [root / name for name in configured if (root / name).is_file()]
    if not found and fallback is not None:
        logger.debug("No configured property files under %s; using %s", root, fallback)
        return [fallback]
    return found


def _items(namespace: PropertyNamespace) -> list[dict[str, str]]:
    return [{"key": key, "value": value} for key, value in namespace.items()]


def _source_failure(op: str, exc: SourceError) -> ServiceResult:
    return ServiceResult.failure(op, SOURCE_ERROR, str(exc), {"path": str(exc.path)})


class BindingService:
    """Operations over property files for a fixed converter registry."""

    def __init__(self, registry: TypeConverterRegistry) -> None:
        self._registry = registry
        self._binder = ConfigBinder(registry)

    @staticmethod
    def load(paths: Sequence[Path]) -> PropertyNamespace:
        """Read and layer *paths* in order.

        Raises:
            SourceError: A file is missing, unsupported, or malformed.
        """
        return PropertyNamespace(read_sources(paths))

    def keys(self, paths: Sequence[Path]) -> ServiceResult:
        """Show the layered namespace built from *paths*."""
        op = "keys"
        try:
            namespace = self.load(paths)
        except SourceError as exc:
            return _source_failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(namespace), "items": _items(namespace)},
            meta={"sources": [str(p) for p in paths]},
        )

    def run(self, paths: Sequence[Path]) -> ServiceResult:
        """Start the example application against *paths*.

        On success, ``data.items`` holds every bound value re-serialized
        under its canonical key.
        """
        from propbind.demo.app import TARGETS, start

        op = "run"
        warnings: list[str] = []
        if not paths:
            warnings.append("No property files found; binding against an empty namespace")
        try:
            namespace = self.load(paths)
        except SourceError as exc:
            return _source_failure(op, exc)

        try:
            app = start(namespace, self._registry)
        except BindingError as exc:
            logger.debug("Startup failed: %s", exc)
            return ServiceResult.failure(
                op,
                BINDING_FAILED,
                f"{len(exc.errors)} configuration issue(s) under {exc.prefix}",
                {"errors": exc.to_dicts()},
                warnings=warnings,
            )

        records = app.records
        bound: list[tuple[str, str]] = []
        for target in TARGETS:
            try:
                rendered = self._binder.unbind(
                    records[target.prefix], target.prefix, target.schema
                )
            except UnknownTypeError as exc:
                warnings.append(f"Cannot display {type_name(exc.target_type)} values at {exc.path}")
                continue
            bound.extend(rendered.items())
        data: dict[str, Any] = {
            "count": len(bound),
            "items": [{"key": key, "value": value} for key, value in bound],
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=data,
            warnings=warnings,
            meta={
                "sources": [str(p) for p in paths],
                "records": [t.prefix for t in TARGETS],
            },
        )

    def converters(self) -> ServiceResult:
        """List every target type the registry can convert to."""
        items = [
            {
                "type": type_name(target),
                "source": "custom" if self._registry.is_custom(target) else "builtin",
                "invertible": self._registry.formatter(target) is not None,
            }
            for target in self._registry.types()
        ]
        return ServiceResult(ok=True, op="converters", data={"count": len(items), "items": items})
