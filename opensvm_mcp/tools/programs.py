"""Program registry tools."""

from __future__ import annotations

from typing import Any, Dict

from opensvm_mcp.tools._common import check_address, segment


async def get_program_registry(client, args: Dict[str, Any]) -> Any:
    return await client.get(
        "/program-registry", {"category": args.get("category"), "verified": args.get("verified")}
    )


async def get_program_info(client, args: Dict[str, Any]) -> Any:
    error = check_address(args, "programId", label="program ID")
    if error:
        return error
    return await client.get(f"/program-registry/{segment(args['programId'])}")
