"""Raw Solana RPC passthrough."""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional


def build_rpc_envelope(method: str, params: Optional[List[Any]] = None) -> Dict[str, Any]:
    """JSON-RPC 2.0 request body; the id is a millisecond timestamp."""
    return {
        "jsonrpc": "2.0",
        "id": int(time.time() * 1000),
        "method": method,
        "params": params if params is not None else [],
    }


async def solana_rpc_call(client, args: Dict[str, Any]) -> Any:
    return await client.post("/solana-rpc", build_rpc_envelope(args["method"], args.get("params")))
