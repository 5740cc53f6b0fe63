"""
Error taxonomy for tool calls.

Every failure of a tool call is classified into exactly one of three kinds.
Failures travel as ``ToolError`` values from validation through dispatch to
the protocol layer instead of being raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict

from opensvm_mcp.opensvm_api import (
    BackendTimeoutError,
    BackendUnreachableError,
    OpenSVMApiError,
)


class ErrorCode(IntEnum):
    INVALID_PARAMS = -32602
    METHOD_NOT_FOUND = -32601
    INTERNAL_ERROR = -32603


@dataclass(slots=True, frozen=True)
class ToolError:
    code: ErrorCode
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"code": int(self.code), "message": self.message}


def invalid_params(message: str) -> ToolError:
    return ToolError(ErrorCode.INVALID_PARAMS, message)


def method_not_found(tool_name: str) -> ToolError:
    return ToolError(ErrorCode.METHOD_NOT_FOUND, f"Unknown tool: {tool_name}")


def internal_error(message: str) -> ToolError:
    return ToolError(ErrorCode.INTERNAL_ERROR, message)


def from_backend_error(exc: OpenSVMApiError) -> ToolError:
    """
    Convert a backend client failure into an InternalError.

    The upstream status code and message are kept verbatim; no traceback or
    exception type leaks into the message.
    """
    if isinstance(exc, BackendTimeoutError):
        return internal_error(f"API Error (timeout): {exc.message}")
    if isinstance(exc, BackendUnreachableError):
        return internal_error(f"API Error (unreachable): {exc.message}")
    if exc.status_code is not None:
        return internal_error(f"API Error ({exc.status_code}): {exc.message}")
    return internal_error(f"API Error: {exc.message}")
