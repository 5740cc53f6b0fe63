"""Token and NFT tools."""

from __future__ import annotations

from typing import Any, Dict

from opensvm_mcp.config import MAX_TOKEN_MINTS
from opensvm_mcp.tools._common import as_int, check_address, check_bounded_list, segment


async def get_token_info(client, args: Dict[str, Any]) -> Any:
    error = check_address(args, "address", label="token address")
    if error:
        return error
    return await client.get(f"/token/{segment(args['address'])}")


async def get_token_metadata(client, args: Dict[str, Any]) -> Any:
    """Batch metadata lookup; the backend takes mints as one comma-separated value."""
    error = check_bounded_list(args, "mints", max_items=MAX_TOKEN_MINTS)
    if error:
        return error
    return await client.get("/token-metadata", {"mints": ",".join(args["mints"])})


async def get_nft_collections(client, args: Dict[str, Any]) -> Any:
    return await client.get("/nft-collections", {"limit": as_int(args.get("limit")), "sort": args.get("sort")})


async def get_trending_nfts(client, args: Dict[str, Any]) -> Any:
    return await client.get("/nft-collections/trending")
