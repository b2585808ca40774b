"""Uniform response envelope shared by every tool.

Every tool returns::

    {
        "success": bool,
        "data": {...},                      # on success
        "error": {"code", "message", "suggestions"?},  # on failure
        "timestamp": str,                   # ISO-8601, UTC
        "execution_time_ms": int,
    }
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from vault_navigator.errors import VaultToolError

logger = logging.getLogger(__name__)

# pydantic error types produced by the input models, mapped to response codes
VALIDATION_ERROR_CODES = {
    "missing": "MISSING_PARAMETER",
    "missing_parameter": "MISSING_PARAMETER",
    "invalid_path": "INVALID_PATH",
}


class ErrorDetail(BaseModel):
    code: str
    message: str
    suggestions: Optional[list[str]] = None


class ToolResponse(BaseModel):
    """Success/error sum type; exactly one of ``data`` and ``error`` is set."""

    success: bool
    data: Optional[Any] = None
    error: Optional[ErrorDetail] = None
    timestamp: str
    execution_time_ms: int

    def as_payload(self) -> dict[str, Any]:
        # tool data is passed through untouched so None-valued fields survive
        payload = self.model_dump(exclude={"data", "error"})
        if self.success:
            payload["data"] = self.data
        elif self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        return payload


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _elapsed_ms(started: Optional[float]) -> int:
    if started is None:
        return 0
    return int((time.perf_counter() - started) * 1000)


def success_response(data: Any, started: Optional[float] = None) -> dict[str, Any]:
    """Build a success envelope around ``data``."""
    return ToolResponse(
        success=True,
        data=data,
        timestamp=_now(),
        execution_time_ms=_elapsed_ms(started),
    ).as_payload()


def error_response(
    code: str,
    message: str,
    suggestions: Optional[list[str]] = None,
    started: Optional[float] = None,
) -> dict[str, Any]:
    """Build an error envelope."""
    return ToolResponse(
        success=False,
        error=ErrorDetail(code=code, message=message, suggestions=suggestions or None),
        timestamp=_now(),
        execution_time_ms=_elapsed_ms(started),
    ).as_payload()


def validation_error_response(exc: ValidationError, started: Optional[float] = None) -> dict[str, Any]:
    """Convert the first pydantic validation failure into an error envelope."""
    first = exc.errors()[0]
    code = VALIDATION_ERROR_CODES.get(first["type"], "INVALID_PARAMETER")
    field_name = ".".join(str(part) for part in first.get("loc", ()))
    message = first["msg"]
    if first["type"] == "missing" and field_name:
        message = f"Parameter '{field_name}' is required"
    return error_response(code, message, started=started)


def run_tool(
    tool_name: str,
    fallback_code: str,
    operation: Callable[[], Any],
) -> dict[str, Any]:
    """Run a tool operation and wrap its outcome in the response envelope.

    Args:
        tool_name: Name used in log lines.
        fallback_code: Code reported for unexpected exceptions
            (e.g. ``SEARCH_ERROR``).
        operation: Zero-argument callable performing validation and the core work.

    Returns:
        The serialized envelope. This function never raises for failures
        inside ``operation``.
    """
    started = time.perf_counter()
    try:
        data = operation()
    except ValidationError as exc:
        logger.info("[%s] rejected invalid input: %s", tool_name, exc.errors()[0]["msg"])
        return validation_error_response(exc, started)
    except VaultToolError as exc:
        logger.info("[%s] %s: %s", tool_name, exc.code, exc.message)
        return error_response(exc.code, exc.message, exc.suggestions, started)
    except Exception as exc:
        logger.exception("[%s] failed", tool_name)
        return error_response(fallback_code, f"{tool_name} failed: {exc}", started=started)
    return success_response(data, started)
