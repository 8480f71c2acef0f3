"""Tests for TypeConverterRegistry and the built-in converters."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from propbind.domain.converters import (
    TypeConverterRegistry,
    format_duration,
    parse_duration,
    parse_zone,
)
from propbind.domain.currency import Currency
from propbind.domain.errors import UnknownTypeError


class _Unregistered:
    pass


class TestBuiltins:
    def test_int(self, registry: TypeConverterRegistry) -> None:
        assert registry.resolve(int)(" 42 ") == 42

    def test_decimal_keeps_precision(self, registry: TypeConverterRegistry) -> None:
        assert registry.resolve(Decimal)("1500.75") == Decimal("1500.75")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("FALSE", False), ("yes", True), ("off", False), ("1", True)],
    )
    def test_bool(self, registry: TypeConverterRegistry, raw: str, expected: bool) -> None:
        assert registry.resolve(bool)(raw) is expected

    def test_bool_rejects_garbage(self, registry: TypeConverterRegistry) -> None:
        with pytest.raises(ValueError):
            registry.resolve(bool)("maybe")

    def test_int_rejects_garbage(self, registry: TypeConverterRegistry) -> None:
        with pytest.raises(ValueError):
            registry.resolve(int)("forty-two")

    def test_str_is_identity(self, registry: TypeConverterRegistry) -> None:
        assert registry.resolve(str)(" padded ") == " padded "

    def test_currency(self, registry: TypeConverterRegistry) -> None:
        assert registry.resolve(Currency)("usd") == Currency("USD")

    def test_zone(self, registry: TypeConverterRegistry) -> None:
        assert registry.resolve(ZoneInfo)("Asia/Ho_Chi_Minh") == ZoneInfo("Asia/Ho_Chi_Minh")


class TestDuration:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("30s", timedelta(seconds=30)),
            ("500ms", timedelta(milliseconds=500)),
            ("500", timedelta(milliseconds=500)),
            ("2m", timedelta(minutes=2)),
            ("1h", timedelta(hours=1)),
            ("3d", timedelta(days=3)),
            ("250us", timedelta(microseconds=250)),
            ("-5s", timedelta(seconds=-5)),
            ("PT30S", timedelta(seconds=30)),
            ("PT1H30M", timedelta(hours=1, minutes=30)),
        ],
    )
    def test_parse(self, raw: str, expected: timedelta) -> None:
        assert parse_duration(raw) == expected

    @pytest.mark.parametrize(
        "raw", ["10 parsecs", "soon", "", "1.5s", "999999999999d", "99999999999999999999999999ns"]
    )
    def test_parse_rejects(self, raw: str) -> None:
        with pytest.raises(ValueError):
            parse_duration(raw)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (timedelta(seconds=90), "90s"),
            (timedelta(hours=1), "1h"),
            (timedelta(days=2), "2d"),
            (timedelta(milliseconds=1500), "1500ms"),
            (timedelta(microseconds=7), "7us"),
            (timedelta(0), "0s"),
            (timedelta(seconds=-90), "-90s"),
        ],
    )
    def test_format_uses_largest_exact_unit(self, value: timedelta, expected: str) -> None:
        assert format_duration(value) == expected
        assert parse_duration(format_duration(value)) == value


class TestZone:
    def test_unknown_zone_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="Unknown time zone"):
            parse_zone("Mars/Olympus_Mons")

    @pytest.mark.parametrize("raw", ["America", "Europe"])
    def test_region_directory_is_value_error(self, raw: str) -> None:
        with pytest.raises(ValueError, match="Unknown time zone"):
            parse_zone(raw)


class TestRegistry:
    def test_unknown_type(self, registry: TypeConverterRegistry) -> None:
        with pytest.raises(UnknownTypeError) as exc_info:
            registry.resolve(_Unregistered)
        assert exc_info.value.target_type is _Unregistered
        assert "_Unregistered" in str(exc_info.value)

    def test_custom_type(self, registry: TypeConverterRegistry) -> None:
        registry.register(_Unregistered, lambda raw: _Unregistered())
        assert isinstance(registry.resolve(_Unregistered)("x"), _Unregistered)
        assert registry.is_custom(_Unregistered)

    def test_custom_overrides_builtin(self, registry: TypeConverterRegistry) -> None:
        registry.register(int, lambda raw: -1)
        assert registry.resolve(int)("42") == -1

    def test_last_registration_wins(self, registry: TypeConverterRegistry) -> None:
        registry.register(_Unregistered, lambda raw: "first")
        registry.register(_Unregistered, lambda raw: "second")
        assert registry.resolve(_Unregistered)("x") == "second"

    def test_override_drops_builtin_formatter(self, registry: TypeConverterRegistry) -> None:
        assert registry.formatter(int) is not None
        registry.register(int, lambda raw: -1)
        assert registry.formatter(int) is None

    def test_override_with_formatter(self, registry: TypeConverterRegistry) -> None:
        registry.register(int, int, formatter=lambda v: f"{v:+d}")
        assert registry.formatter(int)(5) == "+5"  # type: ignore[misc]

    def test_frozen_rejects_registration(self, registry: TypeConverterRegistry) -> None:
        registry.freeze()
        assert registry.frozen
        with pytest.raises(RuntimeError, match="frozen"):
            registry.register(_Unregistered, str)

    def test_freeze_keeps_resolution(self, registry: TypeConverterRegistry) -> None:
        assert registry.freeze().resolve(int)("7") == 7

    def test_types_lists_builtins_then_custom(self, registry: TypeConverterRegistry) -> None:
        registry.register(_Unregistered, str)
        types = registry.types()
        assert types[0] is str
        assert types[-1] is _Unregistered
        assert {int, bool, Decimal, timedelta, Currency, ZoneInfo} <= set(types)
