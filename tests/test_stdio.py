import asyncio
import contextlib
import io
import json

import pytest

from opensvm_mcp import stdio
from opensvm_mcp.config import OpenSVMConfig
from opensvm_mcp.dispatcher import Dispatcher
from opensvm_mcp.protocol import McpProtocol
from opensvm_mcp.stdio import serve


def _reader_with(*lines):
    reader = asyncio.StreamReader()
    for line in lines:
        reader.feed_data(line.encode("utf-8") + b"\n")
    reader.feed_eof()
    return reader


def _responses(writer):
    return [json.loads(line) for line in writer.getvalue().splitlines()]


def _protocol(client):
    config = OpenSVMConfig()
    return McpProtocol(Dispatcher(client), server_name=config.server_name, server_version=config.server_version)


@pytest.mark.asyncio
async def test_responses_are_written_in_order(recording_client):
    reader = _reader_with(
        json.dumps({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}}),
        json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}),
        json.dumps({"jsonrpc": "2.0", "id": 2, "method": "tools/list"}),
        json.dumps(
            {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": {"name": "get_block", "arguments": {"slot": 1}}}
        ),
    )
    writer = io.StringIO()
    await serve(_protocol(recording_client({"slot": 1})), reader, writer)

    responses = _responses(writer)
    assert [resp["id"] for resp in responses] == [1, 2, 3]
    assert responses[0]["result"]["serverInfo"]["name"] == "opensvm-api-server"
    assert len(responses[1]["result"]["tools"]) == 33
    assert responses[2]["result"]["isError"] is False


@pytest.mark.asyncio
async def test_blank_lines_are_skipped(recording_client):
    reader = _reader_with("", "   ", json.dumps({"jsonrpc": "2.0", "id": 7, "method": "ping"}))
    writer = io.StringIO()
    await serve(_protocol(recording_client()), reader, writer)
    assert _responses(writer) == [{"jsonrpc": "2.0", "id": 7, "result": {}}]


@pytest.mark.asyncio
async def test_parse_error_ends_session(recording_client):
    reader = _reader_with(
        json.dumps({"jsonrpc": "2.0", "id": 1, "method": "ping"}),
        "{not json",
        json.dumps({"jsonrpc": "2.0", "id": 2, "method": "ping"}),
    )
    writer = io.StringIO()
    await serve(_protocol(recording_client()), reader, writer)

    responses = _responses(writer)
    assert len(responses) == 2
    assert responses[0]["id"] == 1
    assert responses[1]["error"]["code"] == -32700
    assert responses[1]["id"] is None


@pytest.mark.asyncio
async def test_each_response_is_one_line(recording_client):
    payload = {"text": "line one\nline two"}
    reader = _reader_with(
        json.dumps(
            {"jsonrpc": "2.0", "id": 1, "method": "tools/call", "params": {"name": "get_block_stats", "arguments": {}}}
        )
    )
    writer = io.StringIO()
    await serve(_protocol(recording_client(payload)), reader, writer)
    lines = writer.getvalue().splitlines()
    assert len(lines) == 1
    assert json.loads(json.loads(lines[0])["result"]["content"][0]["text"]) == payload


@pytest.mark.asyncio
async def test_eof_without_input_writes_nothing(recording_client):
    writer = io.StringIO()
    await serve(_protocol(recording_client()), _reader_with(), writer)
    assert writer.getvalue() == ""


class FakeTransport:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class ClosingClient:
    def __init__(self):
        self.closed = False

    async def aclose(self):
        self.closed = True


@pytest.mark.asyncio
async def test_run_stdio_closes_transport_and_client_on_eof(monkeypatch):
    transport = FakeTransport()
    reader = _reader_with(json.dumps({"jsonrpc": "2.0", "id": 1, "method": "ping"}))

    async def fake_open():
        return reader, transport

    monkeypatch.setattr(stdio, "_open_stdin_reader", fake_open)
    monkeypatch.setattr(stdio.sys, "stdout", io.StringIO())
    client = ClosingClient()
    assert await stdio.run_stdio(OpenSVMConfig(), client=client) == 0
    assert transport.closed is True
    assert client.closed is True


@pytest.mark.asyncio
async def test_run_stdio_closes_transport_when_cancelled(monkeypatch):
    transport = FakeTransport()
    idle_reader = asyncio.StreamReader()

    async def fake_open():
        return idle_reader, transport

    monkeypatch.setattr(stdio, "_open_stdin_reader", fake_open)
    monkeypatch.setattr(stdio.sys, "stdout", io.StringIO())
    client = ClosingClient()
    task = asyncio.ensure_future(stdio.run_stdio(OpenSVMConfig(), client=client))
    await asyncio.sleep(0.05)
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task
    assert transport.closed is True
    assert client.closed is True
