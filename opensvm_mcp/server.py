"""FastAPI application exposing the OpenSVM tool protocol over HTTP."""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from opensvm_mcp.config import OpenSVMConfig, load_config
from opensvm_mcp.dispatcher import Dispatcher
from opensvm_mcp.errors import ErrorCode, ToolError
from opensvm_mcp.metrics import default_metrics
from opensvm_mcp.opensvm_api import OpenSVMApiClient
from opensvm_mcp.protocol import McpProtocol, parse_error_payload

logger = logging.getLogger(__name__)

HEALTH_STATUS = {"status": "ok"}


def create_app(
    config: Optional[OpenSVMConfig] = None,
    *,
    client: Optional[OpenSVMApiClient] = None,
) -> FastAPI:
    """Build the HTTP app; ``client`` may be injected (tests use stubs)."""
    config = config or load_config()
    backend = client or OpenSVMApiClient(config)
    dispatcher = Dispatcher(backend)
    protocol = McpProtocol(
        dispatcher,
        server_name=config.server_name,
        server_version=config.server_version,
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        await backend.aclose()

    app = FastAPI(
        title="OpenSVM MCP Server",
        description="OpenSVM Solana API tool surface for LLM agents.",
        version=config.server_version,
        lifespan=lifespan,
    )
    app.state.protocol = protocol
    app.state.dispatcher = dispatcher

    @app.middleware("http")
    async def add_request_context(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000
        logger.debug(
            "http path=%s status=%s duration_ms=%.2f",
            request.url.path,
            response.status_code,
            duration_ms,
            extra={"request_id": request_id},
        )
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/health")
    async def health() -> JSONResponse:
        """Lightweight health endpoint for monitoring."""
        return JSONResponse(content=HEALTH_STATUS)

    @app.get("/metrics")
    async def metrics() -> JSONResponse:
        """Return in-process metrics snapshot."""
        return JSONResponse(content=default_metrics.snapshot())

    @app.post("/tools/{tool_name}")
    async def call_tool_route(tool_name: str, request: Request) -> JSONResponse:
        """Call one tool with the JSON request body as its arguments."""
        raw_body = await request.body()
        arguments: Any = {}
        if raw_body.strip():
            try:
                arguments = json.loads(raw_body)
            except ValueError:
                return JSONResponse(status_code=400, content={"error": parse_error_payload()["error"]})
        if not isinstance(arguments, dict):
            error = ToolError(ErrorCode.INVALID_PARAMS, "Tool arguments must be an object.")
            return JSONResponse(status_code=400, content={"error": error.to_dict()})

        outcome = await dispatcher.handle(tool_name, arguments)
        if isinstance(outcome, ToolError):
            status_code = 404 if outcome.code == ErrorCode.METHOD_NOT_FOUND else 400
            return JSONResponse(status_code=status_code, content={"error": outcome.to_dict()})
        return JSONResponse(content=outcome.to_dict())

    @app.post("/mcp")
    async def mcp_gateway(request: Request) -> Response:
        """JSON-RPC gateway; same methods as the stdio transport."""
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content=parse_error_payload())

        payload: Optional[Dict[str, Any]] = await protocol.handle_message(body)
        if payload is None:
            # Notifications do not get a JSON-RPC response body.
            return Response(status_code=204)
        if not isinstance(body, dict):
            return JSONResponse(status_code=400, content=payload)
        return JSONResponse(content=payload)

    return app


# Run with: uvicorn opensvm_mcp.server:create_app --factory
