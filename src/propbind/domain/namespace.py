"""PropertyNamespace — the flattened raw input to binding.

An immutable, ordered snapshot of ``key -> raw string`` pairs. Lookups use
the relaxed segment form from :mod:`propbind.domain.keys`, so the spelling
in the property file does not have to match the schema's field names.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from propbind.domain.keys import split_key, uniform_key


class PropertyNamespace(Mapping[str, str]):
    """Read-only mapping of raw property keys to raw string values.

    Iteration yields keys in the order they first appeared. When two keys
    are equivalent under relaxed matching, the later one wins: its value and
    spelling replace the earlier entry in place.
    """

    __slots__ = ("_entries",)

    def __init__(self, data: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        pairs = data.items() if isinstance(data, Mapping) else data
        entries: dict[tuple[str, ...], tuple[str, str]] = {}
        for key, value in pairs:
            ukey = uniform_key(key)
            if not ukey:
                continue
            entries[ukey] = (key.strip(), str(value))
        self._entries: Mapping[tuple[str, ...], tuple[str, str]] = MappingProxyType(entries)

    # -- Mapping protocol ------------------------------------------------

    def __getitem__(self, key: str) -> str:
        entry = self._entries.get(uniform_key(key))
        if entry is None:
            raise KeyError(key)
        return entry[1]

    def __iter__(self) -> Iterator[str]:
        return (raw for raw, _value in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PropertyNamespace({dict(self.items())!r})"

    # -- Prefix queries --------------------------------------------------

    def has_prefix(self, key: str) -> bool:
        """True if any entry lives strictly below *key*."""
        prefix = uniform_key(key)
        depth = len(prefix)
        return any(len(ukey) > depth and ukey[:depth] == prefix for ukey in self._entries)

    def child_segments(self, key: str) -> list[str]:
        """Distinct segments directly below *key*, in order of appearance.

        Each child keeps the spelling of its first occurrence.
        """
        prefix = uniform_key(key)
        depth = len(prefix)
        seen: dict[str, str] = {}
        for ukey, (raw, _value) in self._entries.items():
            if len(ukey) > depth and ukey[:depth] == prefix:
                seen.setdefault(ukey[depth], split_key(raw)[depth])
        return list(seen.values())

    def layered(self, *others: Mapping[str, str]) -> PropertyNamespace:
        """Return a new namespace with *others* applied on top, in order."""
        pairs: list[tuple[str, str]] = list(self.items())
        for other in others:
            pairs.extend(other.items())
        return PropertyNamespace(pairs)
