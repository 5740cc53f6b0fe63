import json

import pytest

from opensvm_mcp.dispatcher import Dispatcher
from opensvm_mcp.metrics import default_metrics
from opensvm_mcp.opensvm_api import BackendHTTPError
from opensvm_mcp.protocol import PROTOCOL_VERSION, McpProtocol

SIG = "5" * 88


def make_protocol(client):
    return McpProtocol(Dispatcher(client), server_name="opensvm-api-server", server_version="1.0.0")


@pytest.mark.asyncio
async def test_initialize_reports_server_info(recording_client):
    protocol = make_protocol(recording_client())
    resp = await protocol.handle_message({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}})
    result = resp["result"]
    assert resp["id"] == 1
    assert result["serverInfo"] == {"name": "opensvm-api-server", "version": "1.0.0"}
    assert result["protocolVersion"] == PROTOCOL_VERSION
    assert "tools" in result["capabilities"]


@pytest.mark.asyncio
async def test_initialize_echoes_client_protocol_version(recording_client):
    protocol = make_protocol(recording_client())
    resp = await protocol.handle_message(
        {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "2025-03-26"}}
    )
    assert resp["result"]["protocolVersion"] == "2025-03-26"


@pytest.mark.asyncio
async def test_tools_list_returns_full_catalog(recording_client):
    protocol = make_protocol(recording_client())
    resp = await protocol.handle_message({"jsonrpc": "2.0", "id": "a", "method": "tools/list"})
    tools = resp["result"]["tools"]
    assert len(tools) == 33
    assert tools[0]["name"] == "get_transaction"
    assert "inputSchema" in tools[0]


@pytest.mark.asyncio
async def test_tools_call_success(recording_client):
    client = recording_client({"slot": 9})
    protocol = make_protocol(client)
    resp = await protocol.handle_message(
        {
            "jsonrpc": "2.0",
            "id": 2,
            "method": "tools/call",
            "params": {"name": "get_block", "arguments": {"slot": 9}},
        }
    )
    result = resp["result"]
    assert result["isError"] is False
    assert json.loads(result["content"][0]["text"]) == {"slot": 9}
    assert default_metrics.snapshot()["tool_success"]["get_block"] == 1


@pytest.mark.asyncio
async def test_tools_call_unknown_tool_is_jsonrpc_error(recording_client):
    protocol = make_protocol(recording_client())
    resp = await protocol.handle_message(
        {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": {"name": "nope", "arguments": {}}}
    )
    assert resp["error"]["code"] == -32601
    assert "nope" in resp["error"]["message"]
    assert "result" not in resp


@pytest.mark.asyncio
async def test_tools_call_invalid_params_is_jsonrpc_error(recording_client):
    client = recording_client()
    protocol = make_protocol(client)
    resp = await protocol.handle_message(
        {
            "jsonrpc": "2.0",
            "id": 4,
            "method": "tools/call",
            "params": {"name": "get_transaction", "arguments": {"signature": "5" * 86}},
        }
    )
    assert resp["error"]["code"] == -32602
    assert client.calls == []


@pytest.mark.asyncio
async def test_tools_call_backend_failure_is_in_band(recording_client):
    client = recording_client(exc=BackendHTTPError("Internal Server Error", status_code=500))
    protocol = make_protocol(client)
    resp = await protocol.handle_message(
        {
            "jsonrpc": "2.0",
            "id": 5,
            "method": "tools/call",
            "params": {"name": "get_transaction", "arguments": {"signature": SIG}},
        }
    )
    assert resp["result"]["isError"] is True
    assert "500" in resp["result"]["content"][0]["text"]
    assert default_metrics.snapshot()["error_codes"]["-32603"] == 1


@pytest.mark.asyncio
async def test_tools_call_requires_name(recording_client):
    protocol = make_protocol(recording_client())
    resp = await protocol.handle_message({"jsonrpc": "2.0", "id": 6, "method": "tools/call", "params": {}})
    assert resp["error"]["code"] == -32602


@pytest.mark.asyncio
async def test_call_tool_alias_accepts_tool_and_params(recording_client):
    client = recording_client({"ok": 1})
    protocol = make_protocol(client)
    resp = await protocol.handle_message(
        {"jsonrpc": "2.0", "id": 7, "method": "call_tool", "params": {"tool": "get_block_stats", "params": {}}}
    )
    assert resp["result"]["isError"] is False
    assert client.calls == [("GET", "/blocks/stats", None)]


@pytest.mark.asyncio
async def test_notifications_get_no_response(recording_client):
    protocol = make_protocol(recording_client())
    assert await protocol.handle_message({"jsonrpc": "2.0", "method": "notifications/initialized"}) is None


@pytest.mark.asyncio
async def test_ping(recording_client):
    protocol = make_protocol(recording_client())
    resp = await protocol.handle_message({"jsonrpc": "2.0", "id": 8, "method": "ping"})
    assert resp == {"jsonrpc": "2.0", "id": 8, "result": {}}


@pytest.mark.asyncio
async def test_unknown_method(recording_client):
    protocol = make_protocol(recording_client())
    resp = await protocol.handle_message({"jsonrpc": "2.0", "id": 9, "method": "resources/list"})
    assert resp["error"] == {"code": -32601, "message": "Method not found"}


@pytest.mark.asyncio
@pytest.mark.parametrize("message", [[1, 2], "text", {"id": 10}])
async def test_invalid_request(message, recording_client):
    protocol = make_protocol(recording_client())
    resp = await protocol.handle_message(message)
    assert resp["error"]["code"] == -32600


@pytest.mark.asyncio
async def test_non_object_params_rejected(recording_client):
    protocol = make_protocol(recording_client())
    resp = await protocol.handle_message({"jsonrpc": "2.0", "id": 11, "method": "tools/call", "params": [1]})
    assert resp["error"]["code"] == -32602
