"""User management tools."""

from __future__ import annotations

from typing import Any, Dict

from opensvm_mcp.tools._common import as_int, check_address, segment


async def verify_wallet_signature(client, args: Dict[str, Any]) -> Any:
    # Wallet message signatures are not transaction signatures; no length check.
    return await client.post(
        "/auth/verify",
        {
            "message": args["message"],
            "signature": args["signature"],
            "publicKey": args["publicKey"],
        },
    )


async def get_user_history(client, args: Dict[str, Any]) -> Any:
    error = check_address(args, "walletAddress", label="wallet address")
    if error:
        return error
    return await client.get(
        f"/user-history/{segment(args['walletAddress'])}", {"limit": as_int(args.get("limit"))}
    )
