"""
Resolve tool calls against the registry and run them.

``Dispatcher.handle`` never raises. It returns a ``ToolCallResult`` for
successes and backend failures (the latter with ``isError`` set), or a
``ToolError`` for invalid parameters and unknown tools, which the protocol
layer turns into JSON-RPC error objects.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from opensvm_mcp.errors import (
    ErrorCode,
    ToolError,
    from_backend_error,
    internal_error,
    invalid_params,
    method_not_found,
)
from opensvm_mcp.mcp import TOOL_REGISTRY, ToolDefinition
from opensvm_mcp.opensvm_api import OpenSVMApiError
from opensvm_mcp.tools.validators import find_schema_violation

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ToolCallResult:
    content: List[Dict[str, str]] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, text: str, *, is_error: bool = False) -> "ToolCallResult":
        return cls(content=[{"type": "text", "text": text}], is_error=is_error)

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.content, "isError": self.is_error}


def serialize_payload(payload: Any) -> str:
    """Render a backend payload as the text of a content item."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


class Dispatcher:
    """Dispatch tool calls to their handlers with an injected backend client."""

    def __init__(self, client, registry: Optional[Mapping[str, ToolDefinition]] = None) -> None:
        self.client = client
        self.registry = registry if registry is not None else TOOL_REGISTRY

    def resolve(self, tool_name: str) -> Optional[ToolDefinition]:
        return self.registry.get(tool_name)

    def list_tools(self) -> List[Dict[str, Any]]:
        return [tool.to_dict() for tool in self.registry.values()]

    def _prepare_arguments(
        self, tool: ToolDefinition, arguments: Optional[Mapping[str, Any]]
    ) -> Dict[str, Any] | ToolError:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            return invalid_params("Tool arguments must be an object.")
        declared = tool.input_schema.get("properties") or {}
        accepted = {key: value for key, value in arguments.items() if key in declared}
        ignored = sorted(set(arguments) - set(accepted))
        if ignored:
            logger.debug("tool=%s ignoring undeclared arguments %s", tool.name, ignored)
        problem = find_schema_violation(tool.input_schema, accepted)
        if problem:
            return invalid_params(problem)
        return accepted

    async def handle(
        self, tool_name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> ToolCallResult | ToolError:
        tool = self.resolve(tool_name)
        if tool is None:
            return method_not_found(tool_name)

        prepared = self._prepare_arguments(tool, arguments)
        if isinstance(prepared, ToolError):
            return prepared

        if tool.requires_jwt and not getattr(self.client, "has_jwt", True):
            logger.warning(
                "tool=%s called without OPENSVM_JWT_TOKEN; backend will likely reject it",
                tool.name,
                extra={"tool": tool.name},
            )

        try:
            outcome = await tool.handler(self.client, prepared)
        except OpenSVMApiError as exc:
            return self._render_failure(from_backend_error(exc))
        except Exception:
            logger.exception("Unexpected error in tool %s", tool.name, extra={"tool": tool.name})
            return self._render_failure(internal_error("Unexpected error while calling tool."))

        if isinstance(outcome, ToolError):
            if outcome.code == ErrorCode.INTERNAL_ERROR:
                return self._render_failure(outcome)
            return outcome

        try:
            text = serialize_payload(outcome)
        except (TypeError, ValueError):
            logger.exception("Tool %s returned a non-serializable payload", tool.name)
            return self._render_failure(internal_error("Unexpected response from backend."))
        return ToolCallResult.text(text)

    @staticmethod
    def _render_failure(error: ToolError) -> ToolCallResult:
        # InternalError failures travel in-band so the caller sees the upstream detail.
        return ToolCallResult.text(error.message, is_error=True)
