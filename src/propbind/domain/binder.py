"""ConfigBinder — materialize typed configuration from a PropertyNamespace.

INVARIANT: Binding never exposes partial objects. Every issue found in a
pass is collected; if any exist, :class:`BindingError` is raised with all
of them and nothing is returned.

INVARIANT: Binding is a pure function of (namespace, prefix, schema) and
the registry's contents. The binder holds no per-call state.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from propbind.domain.converters import TypeConverterRegistry
from propbind.domain.errors import (
    BindingError,
    BindingIssue,
    ConversionError,
    MissingKeyError,
    UnknownTypeError,
)
from propbind.domain.keys import join_key
from propbind.domain.namespace import PropertyNamespace
from propbind.domain.schema import (
    MISSING,
    ConfigurationModel,
    FieldSpec,
    ListField,
    MapField,
    RecordField,
    ScalarField,
)

logger = logging.getLogger(__name__)


class _Failed:
    """Marker for a field that produced at least one issue."""


_FAILED = _Failed()


@dataclass(frozen=True)
class BindingTarget:
    """A schema together with the prefix it binds under."""

    prefix: str
    schema: ConfigurationModel


class ConfigBinder:
    """Binds schemas against a namespace using a converter registry."""

    def __init__(self, registry: TypeConverterRegistry) -> None:
        self._registry = registry

    # ------------------------------------------------------------------
    # bind
    # ------------------------------------------------------------------

    def bind(self, namespace: PropertyNamespace, prefix: str, schema: ConfigurationModel) -> Any:
        """Bind *schema* under *prefix* and return the immutable record.

        Raises:
            BindingError: One or more fields were missing, unconvertible,
                or declared with a type that has no converter.
        """
        logger.debug("Binding %s at '%s'", schema.name, prefix)
        errors: list[BindingIssue] = []
        result = self._bind_record(namespace, prefix, schema, errors)
        if errors:
            logger.debug("Binding %s failed with %d issue(s)", schema.name, len(errors))
            raise BindingError(prefix, errors)
        return result

    def bind_all(
        self,
        namespace: PropertyNamespace,
        targets: Sequence[BindingTarget],
    ) -> dict[str, Any]:
        """Bind several schemas, returning ``{prefix: record}``.

        Issues from all targets are reported together in one BindingError.
        """
        errors: list[BindingIssue] = []
        bound: dict[str, Any] = {}
        for target in targets:
            try:
                bound[target.prefix] = self.bind(namespace, target.prefix, target.schema)
            except BindingError as exc:
                errors.extend(exc.errors)
        if errors:
            raise BindingError(", ".join(t.prefix for t in targets), errors)
        return bound

    def _bind_record(
        self,
        namespace: PropertyNamespace,
        prefix: str,
        schema: ConfigurationModel,
        errors: list[BindingIssue],
    ) -> Any:
        before = len(errors)
        values: dict[str, Any] = {}
        for spec in schema.fields:
            value = self._bind_field(namespace, join_key(prefix, spec.key), spec, errors)
            values[spec.name] = value
        if len(errors) > before:
            return _FAILED
        return schema.build(values)

    def _bind_field(
        self,
        namespace: PropertyNamespace,
        key: str,
        spec: FieldSpec,
        errors: list[BindingIssue],
    ) -> Any:
        if isinstance(spec, ScalarField):
            return self._bind_scalar(namespace, key, spec.type, spec.default, errors)
        if isinstance(spec, ListField):
            return self._bind_list(namespace, key, spec, errors)
        if isinstance(spec, MapField):
            return self._bind_map(namespace, key, spec, errors)
        if isinstance(spec, RecordField):
            if spec.default is not MISSING and not namespace.has_prefix(key):
                self._check_types(key, spec.schema, errors)
                return spec.default
            return self._bind_record(namespace, key, spec.schema, errors)
        msg = f"Unsupported field declaration: {spec!r}"
        raise TypeError(msg)

    def _bind_scalar(
        self,
        namespace: PropertyNamespace,
        key: str,
        target: type,
        default: Any,
        errors: list[BindingIssue],
    ) -> Any:
        try:
            converter = self._registry.resolve(target)
        except UnknownTypeError:
            errors.append(UnknownTypeError(target, path=key))
            return _FAILED
        raw = namespace.get(key)
        if raw is None:
            if default is not MISSING:
                return default
            errors.append(MissingKeyError(key))
            return _FAILED
        return self._convert(key, raw, target, converter, errors)

    def _convert(
        self,
        key: str,
        raw: str,
        target: type,
        converter: Any,
        errors: list[BindingIssue],
    ) -> Any:
        try:
            return converter(raw)
        except ValueError as exc:
            errors.append(ConversionError(key, raw, target, exc))
            return _FAILED

    def _bind_list(
        self,
        namespace: PropertyNamespace,
        key: str,
        spec: ListField,
        errors: list[BindingIssue],
    ) -> Any:
        element = spec.element
        if isinstance(element, ConfigurationModel):
            records: list[Any] = []
            while namespace.has_prefix(join_key(key, str(len(records)))):
                element_key = join_key(key, str(len(records)))
                records.append(self._bind_record(namespace, element_key, element, errors))
            if not records:
                self._check_types(join_key(key, "*"), element, errors)
                return self._absent(key, spec.default, errors)
            return tuple(records)

        try:
            converter = self._registry.resolve(element)
        except UnknownTypeError:
            errors.append(UnknownTypeError(element, path=key))
            return _FAILED

        raws: list[str] = []
        while join_key(key, str(len(raws))) in namespace:
            raws.append(namespace[join_key(key, str(len(raws)))])
        if not raws and key in namespace:
            # Comma-separated form: ``hobbies=reading, hiking``
            raw = namespace[key]
            raws = [part.strip() for part in raw.split(",")] if raw.strip() else []
        elif not raws:
            return self._absent(key, spec.default, errors)
        return tuple(
            self._convert(join_key(key, str(index)), raw, element, converter, errors)
            for index, raw in enumerate(raws)
        )

    def _bind_map(
        self,
        namespace: PropertyNamespace,
        key: str,
        spec: MapField,
        errors: list[BindingIssue],
    ) -> Any:
        value_spec = spec.value
        entries: dict[str, Any] = {}
        for map_key in namespace.child_segments(key):
            entry_key = join_key(key, map_key)
            if isinstance(value_spec, ConfigurationModel):
                entries[map_key] = self._bind_record(namespace, entry_key, value_spec, errors)
            else:
                entries[map_key] = self._bind_scalar(
                    namespace, entry_key, value_spec, MISSING, errors
                )
        if not entries:
            if isinstance(value_spec, ConfigurationModel):
                self._check_types(join_key(key, "*"), value_spec, errors)
            elif not self._check_type(key, value_spec, errors):
                return _FAILED
            return self._absent(key, spec.default, errors)
        return MappingProxyType(entries)

    def _check_types(
        self,
        prefix: str,
        schema: ConfigurationModel,
        errors: list[BindingIssue],
    ) -> None:
        """Report unknown types in a schema whose values are not being read.

        Dynamic map keys and list indices appear as ``*`` in the paths.
        """
        for spec in schema.fields:
            key = join_key(prefix, spec.key)
            if isinstance(spec, ScalarField):
                self._check_type(key, spec.type, errors)
            elif isinstance(spec, RecordField):
                self._check_types(key, spec.schema, errors)
            else:
                nested = spec.element if isinstance(spec, ListField) else spec.value
                if isinstance(nested, ConfigurationModel):
                    self._check_types(join_key(key, "*"), nested, errors)
                else:
                    self._check_type(key, nested, errors)

    def _check_type(self, key: str, target: type, errors: list[BindingIssue]) -> bool:
        try:
            self._registry.resolve(target)
        except UnknownTypeError:
            errors.append(UnknownTypeError(target, path=key))
            return False
        return True

    @staticmethod
    def _absent(key: str, default: Any, errors: list[BindingIssue]) -> Any:
        if default is not MISSING:
            return default
        errors.append(MissingKeyError(key))
        return _FAILED

    # ------------------------------------------------------------------
    # unbind (inverse)
    # ------------------------------------------------------------------

    def unbind(self, instance: Any, prefix: str, schema: ConfigurationModel) -> PropertyNamespace:
        """Re-serialize a bound record into canonical raw properties.

        Raises:
            UnknownTypeError: A scalar type has no formatter, so the value
                cannot be turned back into a string.
        """
        pairs: list[tuple[str, str]] = []
        self._unbind_record(instance, prefix, schema, pairs)
        return PropertyNamespace(pairs)

    def _unbind_record(
        self,
        instance: Any,
        prefix: str,
        schema: ConfigurationModel,
        pairs: list[tuple[str, str]],
    ) -> None:
        for spec in schema.fields:
            value = getattr(instance, spec.name)
            key = join_key(prefix, spec.key)
            if value is None:
                continue
            if isinstance(spec, ScalarField):
                pairs.append((key, self._format(key, spec.type, value)))
            elif isinstance(spec, ListField):
                for index, item in enumerate(value):
                    self._unbind_element(item, join_key(key, str(index)), spec.element, pairs)
            elif isinstance(spec, MapField):
                for map_key, item in value.items():
                    self._unbind_element(item, join_key(key, map_key), spec.value, pairs)
            else:
                self._unbind_record(value, key, spec.schema, pairs)

    def _unbind_element(
        self,
        value: Any,
        key: str,
        spec: type | ConfigurationModel,
        pairs: list[tuple[str, str]],
    ) -> None:
        if isinstance(spec, ConfigurationModel):
            self._unbind_record(value, key, spec, pairs)
        else:
            pairs.append((key, self._format(key, spec, value)))

    def _format(self, key: str, target: type, value: Any) -> str:
        formatter = self._registry.formatter(target)
        if formatter is None:
            raise UnknownTypeError(target, path=key)
        return formatter(value)
