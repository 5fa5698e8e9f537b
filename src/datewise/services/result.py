"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: every public service method returns a ServiceResult.  Domain
errors never escape a service; they become ``ServiceError`` payloads.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"to_utc"``).
        data: Operation payload on success.  Scalar answers live under
            ``result``, sequences under ``items``, spans under
            ``start``/``end``.
        warnings: Non-fatal issues, such as a defaulted billing period.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing when verbose).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
