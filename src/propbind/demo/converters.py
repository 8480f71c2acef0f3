"""Full-name conversion: ``"Jane Doe"`` -> ``FullName("Jane", "Doe")``."""

from __future__ import annotations

from propbind.demo.models import FullName
from propbind.domain.converters import TypeConverterRegistry
from propbind.plugins.hookspecs import hookimpl


def parse_full_name(raw: str) -> FullName:
    """Split on the first run of whitespace into first and last name.

    Everything after the first boundary is the last name, so
    ``"Mary Ann Smith"`` becomes ``("Mary", "Ann Smith")``.

    Raises:
        ValueError: Fewer than two tokens.
    """
    parts = raw.split(None, 1)
    if len(parts) < 2:
        msg = f"Expected 'First Last', got {raw!r}"
        raise ValueError(msg)
    return FullName(first_name=parts[0], last_name=parts[1].strip())


def format_full_name(name: FullName) -> str:
    return f"{name.first_name} {name.last_name}"


class FullNameConverterPlugin:
    """Contributes the FullName converter to the registry."""

    @hookimpl
    def propbind_register_converters(self, registry: TypeConverterRegistry) -> None:
        registry.register(FullName, parse_full_name, formatter=format_full_name)
