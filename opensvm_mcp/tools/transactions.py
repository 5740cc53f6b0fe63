"""Transaction tools."""

from __future__ import annotations

from typing import Any, Dict

from opensvm_mcp.config import MAX_BATCH_SIGNATURES
from opensvm_mcp.tools._common import check_bounded_list, check_signature, segment


async def get_transaction(client, args: Dict[str, Any]) -> Any:
    """Fetch a single transaction with enhanced parsing."""
    error = check_signature(args)
    if error:
        return error
    return await client.get(f"/transaction/{segment(args['signature'])}")


async def batch_transactions(client, args: Dict[str, Any]) -> Any:
    """Fetch up to 20 transactions in one backend call."""
    error = check_bounded_list(args, "signatures", max_items=MAX_BATCH_SIGNATURES)
    if error:
        return error
    include_details = args.get("includeDetails")
    return await client.post(
        "/transaction/batch",
        {
            "signatures": args["signatures"],
            "includeDetails": True if include_details is None else include_details,
        },
    )


async def analyze_transaction(client, args: Dict[str, Any]) -> Any:
    error = check_signature(args)
    if error:
        return error
    return await client.get(
        f"/transaction/{segment(args['signature'])}/analysis",
        {"model": args.get("model")},
    )


async def explain_transaction(client, args: Dict[str, Any]) -> Any:
    error = check_signature(args)
    if error:
        return error
    return await client.get(
        f"/transaction/{segment(args['signature'])}/explain",
        {"language": args.get("language")},
    )
