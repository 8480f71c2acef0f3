"""Binding error taxonomy.

Every problem found while binding is a :class:`BindingIssue` carrying the
canonical key path of the offending field. The binder collects all of them
and raises a single :class:`BindingError` at the end of the pass.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def type_name(target_type: Any) -> str:
    """Human-readable name of a target type (``ZoneInfo``, ``Decimal``...)."""
    return getattr(target_type, "__name__", None) or repr(target_type)


class BindingIssue(Exception):
    """Base class for a single field-level binding problem."""

    code = "BINDING_ISSUE"

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "path": self.path, "message": self.message}


class MissingKeyError(BindingIssue):
    """A required key has no entry in the namespace and no default."""

    code = "MISSING_KEY"

    def __init__(self, path: str) -> None:
        super().__init__(path, f"Missing required property '{path}'")


class ConversionError(BindingIssue):
    """A converter rejected the raw value."""

    code = "CONVERSION_FAILED"

    def __init__(
        self,
        path: str,
        raw_value: str,
        target_type: Any,
        cause: BaseException | None = None,
    ) -> None:
        reason = f": {cause}" if cause is not None else ""
        super().__init__(
            path,
            f"Cannot convert '{raw_value}' to {type_name(target_type)} for '{path}'{reason}",
        )
        self.raw_value = raw_value
        self.target_type = target_type
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["raw_value"] = self.raw_value
        data["target_type"] = type_name(self.target_type)
        return data


class UnknownTypeError(BindingIssue):
    """No built-in and no registered converter exists for a type."""

    code = "UNKNOWN_TYPE"

    def __init__(self, target_type: Any, path: str = "") -> None:
        where = f" (field '{path}')" if path else ""
        super().__init__(path, f"No converter registered for type {type_name(target_type)}{where}")
        self.target_type = target_type

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["target_type"] = type_name(self.target_type)
        return data


class BindingError(Exception):
    """Raised once per ``bind`` call that found one or more issues.

    Attributes:
        prefix: The prefix the schema was bound under.
        errors: Every issue found, in schema order.
    """

    def __init__(self, prefix: str, errors: Sequence[BindingIssue]) -> None:
        self.prefix = prefix
        self.errors: tuple[BindingIssue, ...] = tuple(errors)
        lines = "\n".join(f"  - {issue.message}" for issue in self.errors)
        super().__init__(f"Failed to bind '{prefix}' ({len(self.errors)} issue(s)):\n{lines}")

    def to_dicts(self) -> list[dict[str, Any]]:
        return [issue.to_dict() for issue in self.errors]
