"""Property source readers.

Three formats are understood, chosen by file suffix:

- ``.properties`` — Java-style ``key=value`` lines
- ``.yml`` / ``.yaml`` — nested mappings, flattened to dotted keys
- ``.toml`` — nested tables, flattened to dotted keys

Sequences flatten to indexed keys (``hobbies.0``, ``hobbies.1``).
All values become strings; binding does the typing.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

logger = logging.getLogger(__name__)

PROPERTIES_SUFFIXES = frozenset({".properties"})
YAML_SUFFIXES = frozenset({".yml", ".yaml"})
TOML_SUFFIXES = frozenset({".toml"})

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class SourceError(Exception):
    """A property file could not be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


# ---------------------------------------------------------------------------
# .properties
# ---------------------------------------------------------------------------


def _logical_lines(text: str) -> Iterable[str]:
    """Join backslash-continued lines, dropping blanks and comments."""
    pending = ""
    for physical in text.splitlines():
        line = physical.lstrip() if pending else physical.strip()
        if not pending and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue
        yield pending + line
        pending = ""
    if pending:
        yield pending


def _unescape(text: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\" or i + 1 == len(text):
            out.append(ch)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u" and i + 6 <= len(text):
            try:
                out.append(chr(int(text[i + 2 : i + 6], 16)))
            except ValueError as exc:
                msg = f"Malformed \\u escape in {text!r}"
                raise ValueError(msg) from exc
            i += 6
            continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line at the first unescaped ``=``, ``:`` or whitespace."""
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in "=: \t\f":
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(" \t\f")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t\f")
    return _unescape(key), _unescape(rest)


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``.properties`` content into an ordered ``{key: value}`` dict."""
    data: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        data[key] = value
    return data


# ---------------------------------------------------------------------------
# Structured formats
# ---------------------------------------------------------------------------


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings and sequences into dotted string keys.

    Examples:
        >>> flatten({"a": {"b": 1, "c": [True, None]}})
        {'a.b': '1', 'a.c.0': 'true', 'a.c.1': ''}
    """
    out: dict[str, str] = {}

    def walk(node: Any, path: str) -> None:
        if isinstance(node, Mapping):
            for key, child in node.items():
                walk(child, f"{path}.{key}" if path else str(key))
        elif isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
            for index, child in enumerate(node):
                walk(child, f"{path}.{index}")
        else:
            out[path] = _scalar_text(node)

    walk(data, prefix)
    return out


def parse_yaml(text: str) -> dict[str, str]:
    yaml = YAML(typ="safe", pure=True)
    data = yaml.load(text)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        msg = "top level must be a mapping"
        raise ValueError(msg)
    return flatten(data)


def parse_toml(text: str) -> dict[str, str]:
    return flatten(tomllib.loads(text))


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_source(path: Path) -> dict[str, str]:
    """Read one property file, dispatching on its suffix.

    Raises:
        SourceError: Missing file, unsupported suffix, or invalid content.
    """
    suffix = path.suffix.lower()
    if suffix in PROPERTIES_SUFFIXES:
        parser = parse_properties
    elif suffix in YAML_SUFFIXES:
        parser = parse_yaml
    elif suffix in TOML_SUFFIXES:
        parser = parse_toml
    else:
        raise SourceError(path, f"unsupported property file type {suffix or '(none)'!r}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SourceError(path, f"not valid UTF-8: {exc.reason}") from exc
    except OSError as exc:
        raise SourceError(path, exc.strerror or str(exc)) from exc

    try:
        data = parser(text)
    except (ValueError, YAMLError) as exc:
        # tomllib.TOMLDecodeError is a ValueError subclass
        raise SourceError(path, f"invalid content: {exc}") from exc
    logger.debug("Read %d properties from %s", len(data), path)
    return data


def read_sources(paths: Sequence[Path]) -> list[tuple[str, str]]:
    """Read several files in order; later entries override earlier ones."""
    pairs: list[tuple[str, str]] = []
    for path in paths:
        pairs.extend(read_source(path).items())
    return pairs
