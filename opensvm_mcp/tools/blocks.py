"""Block tools."""

from __future__ import annotations

from typing import Any, Dict

from opensvm_mcp.tools._common import as_int


async def get_block(client, args: Dict[str, Any]) -> Any:
    # Schema guarantees a non-negative integral slot.
    return await client.get(f"/blocks/{as_int(args['slot'])}")


async def get_recent_blocks(client, args: Dict[str, Any]) -> Any:
    return await client.get(
        "/blocks", {"limit": as_int(args.get("limit")), "before": as_int(args.get("before"))}
    )


async def get_block_stats(client, args: Dict[str, Any]) -> Any:
    return await client.get("/blocks/stats")
