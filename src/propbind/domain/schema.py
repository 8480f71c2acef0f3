"""ConfigurationModel — declarative description of a configuration shape.

A schema is a tuple of fields. Scalars name a target type that the
converter registry knows how to build from a string; lists, maps and
records describe structure. Schemas are passed to the binder explicitly.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel

from propbind.domain.keys import to_kebab, uniform


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing.MISSING
"""Sentinel for "no default declared" (``None`` is a valid default)."""


class BoundRecord(BaseModel):
    """Frozen record used when a schema declares no factory.

    Field values are exposed as attributes named after the schema fields.
    """

    model_config = {"frozen": True, "extra": "allow"}


@dataclass(frozen=True)
class ScalarField:
    """Leaf field converted from a single raw string."""

    name: str
    type: type
    default: Any = MISSING

    @property
    def key(self) -> str:
        return to_kebab(self.name)


@dataclass(frozen=True)
class ListField:
    """Ordered, index-addressed list of scalars or records."""

    name: str
    element: type | ConfigurationModel
    default: Any = MISSING

    @property
    def key(self) -> str:
        return to_kebab(self.name)


@dataclass(frozen=True)
class MapField:
    """Mapping whose keys come from the namespace, not the schema."""

    name: str
    value: type | ConfigurationModel
    default: Any = MISSING

    @property
    def key(self) -> str:
        return to_kebab(self.name)


@dataclass(frozen=True)
class RecordField:
    """Fixed nested record bound under ``<prefix>.<name>``."""

    name: str
    schema: ConfigurationModel
    default: Any = MISSING

    @property
    def key(self) -> str:
        return to_kebab(self.name)


FieldSpec = ScalarField | ListField | MapField | RecordField


@dataclass(frozen=True)
class ConfigurationModel:
    """A named record schema.

    Attributes:
        name: Display name (used in logs).
        fields: Field declarations, bound in order.
        factory: Builds the immutable record from ``{field name: value}``.
            Pydantic models are filled with ``model_construct`` since values
            arrive already typed; other callables receive keyword arguments;
            ``None`` produces a :class:`BoundRecord`.
    """

    name: str
    fields: tuple[FieldSpec, ...]
    factory: Callable[..., Any] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        seen: dict[str, str] = {}
        for spec in self.fields:
            relaxed = uniform(spec.key)
            if relaxed in seen:
                msg = (
                    f"Duplicate field {spec.name!r} in schema {self.name!r}"
                    f" (binds the same property as {seen[relaxed]!r})"
                )
                raise ValueError(msg)
            seen[relaxed] = spec.name

    def build(self, values: Mapping[str, Any]) -> Any:
        """Construct the immutable record for fully bound *values*."""
        factory = self.factory
        if factory is None:
            return BoundRecord(**values)
        if isinstance(factory, type) and issubclass(factory, BaseModel):
            return factory.model_construct(**values)
        return factory(**values)
