"""DeFi and network analytics tools."""

from __future__ import annotations

from typing import Any, Dict


async def get_defi_overview(client, args: Dict[str, Any]) -> Any:
    return await client.get("/analytics/overview")


async def get_dex_analytics(client, args: Dict[str, Any]) -> Any:
    return await client.get(
        "/analytics/dex", {"dex": args.get("dex"), "timeframe": args.get("timeframe")}
    )


async def get_defi_health(client, args: Dict[str, Any]) -> Any:
    return await client.get("/analytics/defi-health")


async def get_validator_analytics(client, args: Dict[str, Any]) -> Any:
    return await client.get("/analytics/validators")
