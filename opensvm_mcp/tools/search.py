"""Search tools."""

from __future__ import annotations

from typing import Any, Dict


async def universal_search(client, args: Dict[str, Any]) -> Any:
    """Search accounts, transactions, tokens and programs in one query."""
    return await client.get(
        "/search",
        {
            "q": args["query"],
            "type": args.get("type"),
            "start": args.get("start"),
            "end": args.get("end"),
            "status": args.get("status"),
            "min": args.get("min"),
            "max": args.get("max"),
        },
    )


async def search_accounts(client, args: Dict[str, Any]) -> Any:
    return await client.get(
        "/search/accounts",
        {
            "q": args["query"],
            "tokenMint": args.get("tokenMint"),
            "minBalance": args.get("minBalance"),
            "maxBalance": args.get("maxBalance"),
        },
    )
