"""Account-related tools."""

from __future__ import annotations

from typing import Any, Dict

from opensvm_mcp.tools._common import as_int, check_address, segment

NATIVE_BALANCE_FIELDS = ("balance", "price", "value", "change24h")


def _portfolio_path(address: str) -> str:
    return f"/account-portfolio/{segment(address)}"


def project_native_balance(address: str, portfolio: Any) -> Dict[str, Any]:
    """
    Reduce a portfolio payload to its native SOL figures.

    Every field defaults to 0 when the portfolio, its ``native`` object, or the
    field itself is missing or null.
    """
    native = portfolio.get("native") if isinstance(portfolio, dict) else None
    if not isinstance(native, dict):
        native = {}
    projected: Dict[str, Any] = {"address": address}
    for field in NATIVE_BALANCE_FIELDS:
        value = native.get(field)
        projected[field] = 0 if value is None else value
    return projected


async def get_account_stats(client, args: Dict[str, Any]) -> Any:
    error = check_address(args, "address")
    if error:
        return error
    return await client.get(f"/account-stats/{segment(args['address'])}")


async def get_account_portfolio(client, args: Dict[str, Any]) -> Any:
    error = check_address(args, "address")
    if error:
        return error
    return await client.get(_portfolio_path(args["address"]))


async def get_solana_balance(client, args: Dict[str, Any]) -> Any:
    """Same backend call as the portfolio tool, projected to the native asset."""
    error = check_address(args, "address")
    if error:
        return error
    address = args["address"]
    portfolio = await client.get(_portfolio_path(address))
    return project_native_balance(address, portfolio)


async def get_account_transactions(client, args: Dict[str, Any]) -> Any:
    error = check_address(args, "address")
    if error:
        return error
    return await client.get(
        f"/account-transactions/{segment(args['address'])}",
        {
            "limit": as_int(args.get("limit")),
            "before": args.get("before"),
            "type": args.get("type"),
        },
    )


async def get_account_token_stats(client, args: Dict[str, Any]) -> Any:
    error = check_address(args, "address") or check_address(args, "mint", label="token mint")
    if error:
        return error
    return await client.get(
        f"/account-token-stats/{segment(args['address'])}/{segment(args['mint'])}"
    )


async def check_account_type(client, args: Dict[str, Any]) -> Any:
    error = check_address(args, "address")
    if error:
        return error
    return await client.get("/check-account-type", {"address": args["address"]})
