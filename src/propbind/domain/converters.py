"""TypeConverterRegistry — resolves ``str -> T`` converters by target type.

Built-in converters cover the canonical scalar types. Custom converters are
layered on top with :meth:`TypeConverterRegistry.register`; the last
registration for a type wins and shadows any built-in.

INVARIANT: A converter either returns a value or raises ``ValueError``.
The binder reports anything else as a programming error, not a
configuration error.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import timedelta
from decimal import Decimal
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import TypeAdapter

from propbind.domain.currency import Currency
from propbind.domain.errors import UnknownTypeError, type_name

logger = logging.getLogger(__name__)

Converter = Callable[[str], Any]
Formatter = Callable[[Any], str]

# --- Durations ---

_SIMPLE_DURATION = re.compile(r"^([+-]?\d+)\s*([a-zA-Z]*)$")

_DURATION_UNITS: dict[str, timedelta] = {
    "us": timedelta(microseconds=1),
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
}

# Largest first, for formatting.
_FORMAT_UNITS = ("d", "h", "m", "s", "ms", "us")

_timedelta_adapter: TypeAdapter[timedelta] = TypeAdapter(timedelta)


def parse_duration(raw: str) -> timedelta:
    """Parse ``10s`` / ``500ms`` / ``2h`` style or ISO-8601 durations.

    A bare number is milliseconds.

    Examples:
        >>> parse_duration("30s")
        datetime.timedelta(seconds=30)
        >>> parse_duration("PT1M")
        datetime.timedelta(seconds=60)
    """
    text = raw.strip()
    match = _SIMPLE_DURATION.match(text)
    if match:
        amount = int(match.group(1))
        unit = match.group(2).lower() or "ms"
        if unit != "ns" and unit not in _DURATION_UNITS:
            msg = f"Unknown duration unit {unit!r}"
            raise ValueError(msg)
        try:
            if unit == "ns":
                return timedelta(microseconds=amount / 1000)
            return amount * _DURATION_UNITS[unit]
        except OverflowError as exc:
            msg = f"Duration {raw!r} is out of range"
            raise ValueError(msg) from exc
    if not text.upper().startswith(("P", "-P", "+P")):
        msg = f"Invalid duration {raw!r}"
        raise ValueError(msg)
    return _timedelta_adapter.validate_python(text)


def format_duration(value: timedelta) -> str:
    """Inverse of :func:`parse_duration`, using the largest exact unit."""
    total_us = value // _DURATION_UNITS["us"]
    if total_us == 0:
        return "0s"
    for unit in _FORMAT_UNITS:
        size = _DURATION_UNITS[unit] // _DURATION_UNITS["us"]
        if total_us % size == 0:
            return f"{total_us // size}{unit}"
    return f"{total_us}us"


# --- Other built-ins ---


def _lax(target: type) -> Converter:
    adapter: TypeAdapter[Any] = TypeAdapter(target)

    def convert(raw: str) -> Any:
        return adapter.validate_python(raw.strip())

    convert.__name__ = f"parse_{target.__name__.lower()}"
    return convert


def parse_zone(raw: str) -> ZoneInfo:
    key = raw.strip()
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        # Directory names such as "America" surface as IsADirectoryError.
        msg = f"Unknown time zone {key!r}"
        raise ValueError(msg) from exc


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


_BUILTIN_CONVERTERS: dict[type, Converter] = {
    str: str,
    int: _lax(int),
    float: _lax(float),
    Decimal: _lax(Decimal),
    bool: _lax(bool),
    timedelta: parse_duration,
    Currency: Currency.of,
    ZoneInfo: parse_zone,
}

_BUILTIN_FORMATTERS: dict[type, Formatter] = {
    str: str,
    int: str,
    float: repr,
    Decimal: str,
    bool: _format_bool,
    timedelta: format_duration,
    Currency: str,
    ZoneInfo: lambda zone: zone.key,
}


class TypeConverterRegistry:
    """Maps target types to converters (and optional inverse formatters).

    Populate during an initialization phase, then :meth:`freeze` it; a
    frozen registry is safe to share between concurrent ``bind`` calls.
    """

    def __init__(self) -> None:
        self._converters: dict[type, Converter] = {}
        self._formatters: dict[type, Formatter] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(
        self,
        target_type: type,
        converter: Converter,
        *,
        formatter: Formatter | None = None,
    ) -> None:
        """Add or override the converter for *target_type*.

        Overriding also drops any formatter registered or built in for the
        type unless a new one is supplied.
        """
        if self._frozen:
            msg = "Converter registry is frozen; register converters before binding"
            raise RuntimeError(msg)
        if target_type in self._converters or target_type in _BUILTIN_CONVERTERS:
            logger.debug("Overriding converter for %s", type_name(target_type))
        self._converters[target_type] = converter
        self._formatters.pop(target_type, None)
        if formatter is not None:
            self._formatters[target_type] = formatter

    def resolve(self, target_type: type) -> Converter:
        """Return the converter for *target_type*.

        Raises:
            UnknownTypeError: Neither a custom nor a built-in converter exists.
        """
        converter = self._converters.get(target_type) or _BUILTIN_CONVERTERS.get(target_type)
        if converter is None:
            raise UnknownTypeError(target_type)
        return converter

    def formatter(self, target_type: type) -> Formatter | None:
        """Return the inverse of the active converter, if one is known."""
        if target_type in self._converters:
            return self._formatters.get(target_type)
        return _BUILTIN_FORMATTERS.get(target_type)

    def types(self) -> list[type]:
        """All resolvable target types: built-ins first, then custom ones."""
        ordered = list(_BUILTIN_CONVERTERS)
        ordered.extend(t for t in self._converters if t not in _BUILTIN_CONVERTERS)
        return ordered

    def is_custom(self, target_type: type) -> bool:
        return target_type in self._converters

    def freeze(self) -> TypeConverterRegistry:
        """Make the registry read-only. Returns ``self`` for chaining."""
        self._frozen = True
        return self
