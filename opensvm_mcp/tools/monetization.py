"""
Monetization tools (SVMAI balance, usage, API keys).

These endpoints authenticate with the bearer JWT from ``OPENSVM_JWT_TOKEN``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from opensvm_mcp.errors import invalid_params
from opensvm_mcp.tools._common import segment

logger = logging.getLogger(__name__)

API_KEYS_PATH = "/opensvm/anthropic-keys"
API_KEY_ACTIONS = ("list", "create", "delete")


async def get_balance(client, args: Dict[str, Any]) -> Any:
    """SVMAI token balance of the authenticated user, not a SOL balance."""
    return await client.get("/opensvm/balance")


async def get_usage_stats(client, args: Dict[str, Any]) -> Any:
    return await client.get("/opensvm/usage")


async def manage_api_keys(client, args: Dict[str, Any]) -> Any:
    """
    List, create, or delete API keys depending on ``action``.

    ``delete`` requires ``keyId``; a missing id is an invalid-params failure
    and no backend call is made.
    """
    action = args.get("action")
    if action == "list":
        return await client.get(API_KEYS_PATH)
    if action == "create":
        payload = {"name": args.get("name"), "permissions": args.get("permissions")}
        return await client.post(
            API_KEYS_PATH, {key: value for key, value in payload.items() if value is not None}
        )
    if action == "delete":
        key_id = args.get("keyId")
        if not isinstance(key_id, str) or not key_id.strip():
            return invalid_params("Key ID is required for delete action ('keyId').")
        logger.info("Deleting API key", extra={"tool": "manage_api_keys"})
        return await client.delete(f"{API_KEYS_PATH}/{segment(key_id)}")
    return invalid_params("Invalid action. Use: list, create, or delete")
