"""Property key handling.

Keys are dotted paths. Each segment is compared in a relaxed form so that
``first-name``, ``first_name``, ``firstName`` and ``FIRSTNAME`` all address
the same property. Schema field names are displayed in kebab-case.
"""

from __future__ import annotations

import re

_INDEX = re.compile(r"\[([^\]]*)\]")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[-_]")


def split_key(key: str) -> tuple[str, ...]:
    """Split a dotted key into segments.

    Examples:
        >>> split_key("my-service.person.hobbies[0]")
        ('my-service', 'person', 'hobbies', '0')
        >>> split_key("")
        ()
    """
    text = _INDEX.sub(r".\1", key.strip())
    return tuple(part.strip() for part in text.split(".") if part.strip())


def uniform(segment: str) -> str:
    """Relaxed comparison form of a single segment."""
    return _SEPARATORS.sub("", segment).lower()


def uniform_key(key: str) -> tuple[str, ...]:
    return tuple(uniform(part) for part in split_key(key))


def to_kebab(name: str) -> str:
    """Canonical form of a field name.

    Examples:
        >>> to_kebab("iso3Code")
        'iso3-code'
        >>> to_kebab("read_timeout")
        'read-timeout'
    """
    text = _CAMEL_BOUNDARY.sub("-", name.strip())
    return text.replace("_", "-").lower()


def join_key(*parts: str) -> str:
    """Join key fragments with ``.``, skipping empty ones."""
    return ".".join(part for part in parts if part)
