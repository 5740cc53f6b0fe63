"""
Newline-delimited JSON-RPC over stdio.

One message is read, fully handled (including the backend round-trip), and
answered before the next line is read. A line that is not valid JSON is
answered with a parse error and ends the session.
"""

from __future__ import annotations

import asyncio
import json
import logging
import signal
import sys
from typing import Any, Dict, Optional, TextIO, Tuple

from opensvm_mcp.config import OpenSVMConfig
from opensvm_mcp.dispatcher import Dispatcher
from opensvm_mcp.opensvm_api import OpenSVMApiClient
from opensvm_mcp.protocol import McpProtocol, parse_error_payload

logger = logging.getLogger(__name__)

# Tool payloads (e.g. batch transaction lookups) can be large.
STREAM_LIMIT = 16 * 1024 * 1024


def _write_message(writer: TextIO, payload: Dict[str, Any]) -> None:
    writer.write(json.dumps(payload) + "\n")
    writer.flush()


async def serve(protocol: McpProtocol, reader: asyncio.StreamReader, writer: TextIO) -> None:
    """Answer messages from ``reader`` on ``writer`` until EOF or a transport fault."""
    while True:
        try:
            raw = await reader.readline()
        except ValueError:
            logger.error("Inbound message exceeds %d bytes; closing connection", STREAM_LIMIT)
            _write_message(writer, parse_error_payload())
            return
        if not raw:
            return
        line = raw.decode("utf-8", errors="replace").strip()
        if not line:
            continue
        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            logger.error("Malformed JSON-RPC message; closing connection")
            _write_message(writer, parse_error_payload())
            return
        response = await protocol.handle_message(message)
        if response is not None:
            _write_message(writer, response)


async def _open_stdin_reader() -> Tuple[asyncio.StreamReader, asyncio.BaseTransport]:
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=STREAM_LIMIT)
    transport, _ = await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
    return reader, transport


async def run_stdio(config: OpenSVMConfig, *, client: Optional[OpenSVMApiClient] = None) -> int:
    """Serve on stdin/stdout until EOF or SIGINT/SIGTERM; always exits with 0."""
    client = client or OpenSVMApiClient(config)
    protocol = McpProtocol(
        Dispatcher(client),
        server_name=config.server_name,
        server_version=config.server_version,
    )
    loop = asyncio.get_running_loop()
    reader, transport = await _open_stdin_reader()
    serve_task = asyncio.ensure_future(serve(protocol, reader, sys.stdout))

    installed = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, serve_task.cancel)
            installed.append(sig)
        except (NotImplementedError, RuntimeError):
            # Windows event loops do not support signal handlers.
            pass

    logger.info("OpenSVM API MCP server running on stdio (backend %s)", config.base_url)
    try:
        await serve_task
    except asyncio.CancelledError:
        logger.info("Shutdown signal received; closing transport")
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)
        transport.close()
        await client.aclose()
    return 0
