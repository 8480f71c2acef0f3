"""Tests for PropertyNamespace — relaxed lookup, ordering, layering."""

from __future__ import annotations

import pytest

from propbind.domain.namespace import PropertyNamespace


class TestLookup:
    def test_relaxed_lookup(self) -> None:
        ns = PropertyNamespace({"my-service.person.last-name": "Smith"})
        assert ns["my_service.person.lastName"] == "Smith"
        assert ns["MY-SERVICE.PERSON.LASTNAME"] == "Smith"
        assert "my-service.person.last_name" in ns

    def test_bracket_and_dot_index_equivalent(self) -> None:
        ns = PropertyNamespace({"a.hobbies[1]": "chess"})
        assert ns["a.hobbies.1"] == "chess"

    def test_missing_key(self) -> None:
        ns = PropertyNamespace({"a": "1"})
        with pytest.raises(KeyError):
            ns["b"]
        assert ns.get("b") is None

    def test_values_are_strings(self) -> None:
        ns = PropertyNamespace({"a": 1})  # type: ignore[dict-item]
        assert ns["a"] == "1"


class TestOrdering:
    def test_iteration_keeps_insertion_order(self) -> None:
        ns = PropertyNamespace([("b", "1"), ("a", "2"), ("c", "3")])
        assert list(ns) == ["b", "a", "c"]

    def test_equivalent_key_later_wins_in_place(self) -> None:
        ns = PropertyNamespace([("first-name", "A"), ("other", "x"), ("firstName", "B")])
        assert list(ns) == ["firstName", "other"]
        assert ns["first-name"] == "B"
        assert len(ns) == 2


class TestPrefixQueries:
    def test_has_prefix(self) -> None:
        ns = PropertyNamespace({"a.b.c": "1"})
        assert ns.has_prefix("a")
        assert ns.has_prefix("a.b")
        assert not ns.has_prefix("a.b.c")
        assert not ns.has_prefix("x")

    def test_child_segments_in_order_of_appearance(self) -> None:
        ns = PropertyNamespace(
            [
                ("countries.vn.iso3-code", "VNM"),
                ("countries.us.iso3-code", "USA"),
                ("countries.vn.timezones[0]", "Asia/Ho_Chi_Minh"),
                ("other.key", "x"),
            ]
        )
        assert ns.child_segments("countries") == ["vn", "us"]

    def test_child_segments_keep_first_spelling(self) -> None:
        ns = PropertyNamespace([("m.New-York.a", "1"), ("m.new_york.b", "2")])
        assert ns.child_segments("m") == ["New-York"]


class TestLayering:
    def test_later_layers_override(self) -> None:
        base = PropertyNamespace({"a": "1", "b": "2"})
        merged = base.layered({"b": "3"}, {"c": "4"})
        assert dict(merged) == {"a": "1", "b": "3", "c": "4"}
        assert base["b"] == "2"

    def test_equality_is_structural(self) -> None:
        assert PropertyNamespace({"a": "1"}) == PropertyNamespace([("a", "1")])
