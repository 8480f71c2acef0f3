"""ServiceResult and ServiceError — what every BindingService operation returns.

INVARIANT: Expected failures (unreadable property files, binding issues)
come back as ``ok=False`` results carrying one of the error codes below.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

SOURCE_ERROR = "SOURCE_ERROR"
BINDING_FAILED = "BINDING_FAILED"


class ServiceError(BaseModel):
    """Error payload. For ``BINDING_FAILED``, ``detail["errors"]`` lists every issue."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one CLI-facing operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``keys``, ``run``, ``converters``).
        data: JSON-safe payload; property listings use ``count`` and
            ``items`` of ``{"key", "value"}``.
        warnings: Non-fatal notes, such as running without property files.
        error: Set when ``ok`` is False.
        meta: Source files and bound prefixes.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        detail: dict[str, Any] | None = None,
        *,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )

    @property
    def issues(self) -> list[dict[str, Any]]:
        """Binding issues of a failed result (empty otherwise)."""
        if self.error is None:
            return []
        return list(self.error.detail.get("errors", []))
