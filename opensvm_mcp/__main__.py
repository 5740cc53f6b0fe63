"""Command-line entry point: ``python -m opensvm_mcp`` or ``opensvm-mcp``."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List, Optional

from opensvm_mcp.config import load_config
from opensvm_mcp.logging_setup import configure_logging

logger = logging.getLogger("opensvm_mcp")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opensvm-mcp",
        description="Serve the OpenSVM Solana API as MCP tools.",
    )
    parser.add_argument(
        "--transport",
        choices=("stdio", "http"),
        default="stdio",
        help="stdio (default) or http (FastAPI gateway served by uvicorn)",
    )
    parser.add_argument("--host", default="127.0.0.1", help="HTTP bind host")
    parser.add_argument("--port", type=int, default=8000, help="HTTP bind port")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()
    configure_logging(config)

    if args.transport == "http":
        import uvicorn

        from opensvm_mcp.server import create_app

        uvicorn.run(create_app(config), host=args.host, port=args.port, log_config=None)
        return 0

    from opensvm_mcp.stdio import run_stdio

    try:
        return asyncio.run(run_stdio(config))
    except KeyboardInterrupt:
        # Event loops without signal-handler support surface SIGINT here.
        logger.info("Interrupted; exiting")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
