"""
Minimal JSON-RPC 2.0 surface for MCP-style integrations.

Supported methods:
  - initialize
  - ping
  - tools/list (alias list_tools)
  - tools/call (alias call_tool)
  - notifications/* (no response)

Transports (stdio, HTTP) hand decoded messages to ``McpProtocol`` and write
back whatever it returns; ``None`` means no response is owed.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Dict, Optional

from opensvm_mcp.config import SERVER_NAME, SERVER_VERSION
from opensvm_mcp.dispatcher import Dispatcher, ToolCallResult
from opensvm_mcp.errors import ErrorCode, ToolError
from opensvm_mcp.metrics import MetricsRecorder, default_metrics

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"

# Envelope-level codes; tool failures use ErrorCode.
PARSE_ERROR = -32700
INVALID_REQUEST = -32600


def jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def jsonrpc_error_payload(rpc_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": int(code), "message": message}}


def parse_error_payload() -> Dict[str, Any]:
    return jsonrpc_error_payload(None, PARSE_ERROR, "Parse error")


class McpProtocol:
    """Route JSON-RPC messages to the tool dispatcher."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        server_name: str = SERVER_NAME,
        server_version: str = SERVER_VERSION,
        metrics: MetricsRecorder = default_metrics,
    ) -> None:
        self.dispatcher = dispatcher
        self.server_name = server_name
        self.server_version = server_version
        self.metrics = metrics

    def _initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        protocol_version = params.get("protocolVersion")
        if not isinstance(protocol_version, str) or not protocol_version:
            protocol_version = PROTOCOL_VERSION
        return {
            "protocolVersion": protocol_version,
            "serverInfo": {"name": self.server_name, "version": self.server_version},
            "capabilities": {"tools": {"listChanged": False}},
        }

    def _log_tool_result(
        self,
        tool_name: str,
        outcome: ToolCallResult | ToolError,
        request_id: str,
        duration_ms: float,
    ) -> None:
        if isinstance(outcome, ToolError):
            error_text: Optional[str] = outcome.message
            self.metrics.record_error_code(int(outcome.code))
        elif outcome.is_error:
            error_text = outcome.content[0]["text"] if outcome.content else "error"
            self.metrics.record_error_code(int(ErrorCode.INTERNAL_ERROR))
        else:
            error_text = None

        if error_text is not None:
            logger.warning(
                "tool=%s outcome=error error=%s request_id=%s",
                tool_name,
                error_text,
                request_id,
                extra={"tool": tool_name, "request_id": request_id, "error": error_text},
            )
            self.metrics.record_tool(tool_name, success=False, duration_ms=duration_ms)
        else:
            logger.info(
                "tool=%s outcome=success request_id=%s duration_ms=%.2f",
                tool_name,
                request_id,
                duration_ms,
                extra={"tool": tool_name, "request_id": request_id},
            )
            self.metrics.record_tool(tool_name, success=True, duration_ms=duration_ms)

    async def _call_tool(self, rpc_id: Any, params: Dict[str, Any], request_id: str) -> Dict[str, Any]:
        tool_name = params.get("name") or params.get("tool")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = params.get("params") or {}
        if not isinstance(tool_name, str) or not tool_name.strip():
            return jsonrpc_error_payload(rpc_id, ErrorCode.INVALID_PARAMS, "Invalid params: tool name is required")
        if not isinstance(arguments, dict):
            return jsonrpc_error_payload(rpc_id, ErrorCode.INVALID_PARAMS, "Invalid params: arguments must be an object")

        start = time.monotonic()
        outcome = await self.dispatcher.handle(tool_name, arguments)
        duration_ms = (time.monotonic() - start) * 1000
        self._log_tool_result(tool_name, outcome, request_id, duration_ms)

        if isinstance(outcome, ToolError):
            return jsonrpc_error_payload(rpc_id, outcome.code, outcome.message)
        return jsonrpc_success_payload(rpc_id, outcome.to_dict())

    async def handle_message(self, message: Any) -> Optional[Dict[str, Any]]:
        """Handle one decoded JSON-RPC message; return the response or None."""
        request_id = str(uuid.uuid4())
        self.metrics.incr_request()

        if not isinstance(message, dict):
            return jsonrpc_error_payload(None, INVALID_REQUEST, "Invalid request")

        method = message.get("method")
        rpc_id = message.get("id")
        if not isinstance(method, str) or not method:
            return jsonrpc_error_payload(rpc_id, INVALID_REQUEST, "Invalid request")

        if method.startswith("notifications/") or method == "initialized":
            logger.debug("mcp notification %s request_id=%s", method, request_id, extra={"request_id": request_id})
            return None

        raw_params = message.get("params")
        if raw_params is None:
            params: Dict[str, Any] = {}
        elif isinstance(raw_params, dict):
            params = raw_params
        else:
            return jsonrpc_error_payload(rpc_id, ErrorCode.INVALID_PARAMS, "Invalid params")

        logger.debug("mcp method=%s id=%s request_id=%s", method, rpc_id, request_id, extra={"request_id": request_id})

        if method == "initialize":
            return jsonrpc_success_payload(rpc_id, self._initialize(params))
        if method == "ping":
            return jsonrpc_success_payload(rpc_id, {})
        if method in ("tools/list", "list_tools"):
            return jsonrpc_success_payload(rpc_id, {"tools": self.dispatcher.list_tools()})
        if method in ("tools/call", "call_tool"):
            return await self._call_tool(rpc_id, params, request_id)

        return jsonrpc_error_payload(rpc_id, ErrorCode.METHOD_NOT_FOUND, "Method not found")
