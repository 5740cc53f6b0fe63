"""
Tool catalog for MCP-style tooling.

``TOOL_REGISTRY`` is the single source of truth: each entry carries the schema
advertised by ``tools/list`` and the handler used by ``tools/call``, so the two
can never drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from opensvm_mcp.config import MAX_ACCOUNT_TRANSACTIONS, MAX_BATCH_SIGNATURES, MAX_TOKEN_MINTS
from opensvm_mcp.tools import (
    analyze_transaction,
    batch_transactions,
    check_account_type,
    explain_transaction,
    get_account_portfolio,
    get_account_stats,
    get_account_token_stats,
    get_account_transactions,
    get_api_metrics,
    get_balance,
    get_block,
    get_block_stats,
    get_defi_health,
    get_defi_overview,
    get_dex_analytics,
    get_nft_collections,
    get_program_info,
    get_program_registry,
    get_recent_blocks,
    get_solana_balance,
    get_token_info,
    get_token_metadata,
    get_transaction,
    get_trending_nfts,
    get_usage_stats,
    get_user_history,
    get_validator_analytics,
    manage_api_keys,
    report_error,
    search_accounts,
    solana_rpc_call,
    universal_search,
    verify_wallet_signature,
)
from opensvm_mcp.tools.monetization import API_KEY_ACTIONS
from opensvm_mcp.tools.validators import (
    ADDRESS_MAX_LENGTH,
    ADDRESS_MIN_LENGTH,
    SIGNATURE_MAX_LENGTH,
    SIGNATURE_MIN_LENGTH,
)

ToolHandler = Callable[[Any, Dict[str, Any]], Awaitable[Any]]


def _object_schema(properties: Optional[Dict[str, Any]] = None, required: Iterable[str] = ()) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties or {},
        "required": list(required),
    }


def _address(description: str = "Solana account address") -> Dict[str, Any]:
    return {
        "type": "string",
        "description": f"{description} (base58, {ADDRESS_MIN_LENGTH}-{ADDRESS_MAX_LENGTH} chars)",
    }


def _signature(description: str = "Transaction signature") -> Dict[str, Any]:
    return {
        "type": "string",
        "description": f"{description} (base58, {SIGNATURE_MIN_LENGTH}-{SIGNATURE_MAX_LENGTH} chars)",
    }


def _limit(description: str, *, maximum: Optional[int] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "integer", "minimum": 1, "description": description}
    if maximum is not None:
        schema["maximum"] = maximum
    return schema


@dataclass(slots=True, frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: Dict[str, Any]
    handler: ToolHandler
    category: str
    requires_jwt: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


_TOOL_DEFINITIONS: List[ToolDefinition] = [
    # Transactions
    ToolDefinition(
        name="get_transaction",
        description="Get detailed transaction information with enhanced parsing",
        input_schema=_object_schema({"signature": _signature()}, required=["signature"]),
        handler=get_transaction,
        category="transaction",
    ),
    ToolDefinition(
        name="batch_transactions",
        description="Batch fetch multiple transactions",
        input_schema=_object_schema(
            {
                "signatures": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": f"Array of transaction signatures (max {MAX_BATCH_SIGNATURES})",
                    "minItems": 1,
                    "maxItems": MAX_BATCH_SIGNATURES,
                },
                "includeDetails": {
                    "type": "boolean",
                    "description": "Include detailed transaction information (default true)",
                },
            },
            required=["signatures"],
        ),
        handler=batch_transactions,
        category="transaction",
    ),
    ToolDefinition(
        name="analyze_transaction",
        description="AI-powered transaction analysis",
        input_schema=_object_schema(
            {
                "signature": _signature(),
                "model": {"type": "string", "description": "AI model to use (optional)"},
            },
            required=["signature"],
        ),
        handler=analyze_transaction,
        category="transaction",
    ),
    ToolDefinition(
        name="explain_transaction",
        description="Get natural language explanation of a transaction",
        input_schema=_object_schema(
            {
                "signature": _signature(),
                "language": {"type": "string", "description": "Output language (optional)"},
            },
            required=["signature"],
        ),
        handler=explain_transaction,
        category="transaction",
    ),
    # Accounts
    ToolDefinition(
        name="get_account_stats",
        description=(
            "Get account transaction statistics (total transactions, token transfers, last updated)"
            " - NOTE: Does NOT include balance! Use get_account_portfolio for SOL balance."
        ),
        input_schema=_object_schema({"address": _address()}, required=["address"]),
        handler=get_account_stats,
        category="account",
    ),
    ToolDefinition(
        name="get_account_portfolio",
        description=(
            "Get complete account portfolio including SOL balance, token holdings, prices,"
            " and total portfolio value in USD"
        ),
        input_schema=_object_schema({"address": _address()}, required=["address"]),
        handler=get_account_portfolio,
        category="account",
    ),
    ToolDefinition(
        name="get_solana_balance",
        description=(
            "Get Solana (SOL) balance for an account - convenience wrapper around"
            " get_account_portfolio that returns only native SOL balance"
        ),
        input_schema=_object_schema({"address": _address()}, required=["address"]),
        handler=get_solana_balance,
        category="account",
    ),
    ToolDefinition(
        name="get_account_transactions",
        description="Get account transaction history",
        input_schema=_object_schema(
            {
                "address": _address(),
                "limit": _limit(
                    f"Number of transactions to return (max {MAX_ACCOUNT_TRANSACTIONS})",
                    maximum=MAX_ACCOUNT_TRANSACTIONS,
                ),
                "before": {"type": "string", "description": "Pagination cursor"},
                "type": {"type": "string", "description": "Transaction type filter"},
            },
            required=["address"],
        ),
        handler=get_account_transactions,
        category="account",
    ),
    ToolDefinition(
        name="get_account_token_stats",
        description="Get token statistics for specific account",
        input_schema=_object_schema(
            {"address": _address("Account address"), "mint": _address("Token mint address")},
            required=["address", "mint"],
        ),
        handler=get_account_token_stats,
        category="account",
    ),
    ToolDefinition(
        name="check_account_type",
        description="Determine account type (wallet, program, token, etc.)",
        input_schema=_object_schema({"address": _address("Account address to check")}, required=["address"]),
        handler=check_account_type,
        category="account",
    ),
    # Blocks
    ToolDefinition(
        name="get_block",
        description="Get specific block information",
        input_schema=_object_schema(
            {"slot": {"type": "integer", "minimum": 0, "description": "Block slot number"}},
            required=["slot"],
        ),
        handler=get_block,
        category="block",
    ),
    ToolDefinition(
        name="get_recent_blocks",
        description="List recent blocks",
        input_schema=_object_schema(
            {
                "limit": _limit("Number of blocks to return (default 20)"),
                "before": {"type": "integer", "minimum": 0, "description": "Slot number for pagination"},
            }
        ),
        handler=get_recent_blocks,
        category="block",
    ),
    ToolDefinition(
        name="get_block_stats",
        description="Get block statistics and performance metrics",
        input_schema=_object_schema(),
        handler=get_block_stats,
        category="block",
    ),
    # Search
    ToolDefinition(
        name="universal_search",
        description="Search across all data types (accounts, transactions, tokens, programs)",
        input_schema=_object_schema(
            {
                "query": {"type": "string", "description": "Search query (address, signature, token name)"},
                "type": {
                    "type": "string",
                    "enum": ["account", "transaction", "token", "program"],
                    "description": "Filter by type",
                },
                "start": {"type": "string", "description": "Start date ISO string"},
                "end": {"type": "string", "description": "End date ISO string"},
                "status": {
                    "type": "string",
                    "enum": ["success", "failed"],
                    "description": "Transaction status filter",
                },
                "min": {"type": "number", "description": "Minimum amount"},
                "max": {"type": "number", "description": "Maximum amount"},
            },
            required=["query"],
        ),
        handler=universal_search,
        category="search",
    ),
    ToolDefinition(
        name="search_accounts",
        description="Account-specific search with filters",
        input_schema=_object_schema(
            {
                "query": {"type": "string", "description": "Search query"},
                "tokenMint": {"type": "string", "description": "Filter by token mint address"},
                "minBalance": {"type": "number", "description": "Minimum balance filter"},
                "maxBalance": {"type": "number", "description": "Maximum balance filter"},
            },
            required=["query"],
        ),
        handler=search_accounts,
        category="search",
    ),
    # Analytics
    ToolDefinition(
        name="get_defi_overview",
        description="Get comprehensive DeFi ecosystem overview",
        input_schema=_object_schema(),
        handler=get_defi_overview,
        category="analytics",
    ),
    ToolDefinition(
        name="get_dex_analytics",
        description="Get DEX-specific analytics with real-time prices",
        input_schema=_object_schema(
            {
                "dex": {"type": "string", "description": "Specific DEX name"},
                "timeframe": {"type": "string", "enum": ["1h", "24h", "7d"], "description": "Time period"},
            }
        ),
        handler=get_dex_analytics,
        category="analytics",
    ),
    ToolDefinition(
        name="get_defi_health",
        description="Get DeFi ecosystem health metrics",
        input_schema=_object_schema(),
        handler=get_defi_health,
        category="analytics",
    ),
    ToolDefinition(
        name="get_validator_analytics",
        description="Get validator network analytics",
        input_schema=_object_schema(),
        handler=get_validator_analytics,
        category="analytics",
    ),
    # Tokens & NFTs
    ToolDefinition(
        name="get_token_info",
        description="Get token details and metadata",
        input_schema=_object_schema({"address": _address("Token mint address")}, required=["address"]),
        handler=get_token_info,
        category="token",
    ),
    ToolDefinition(
        name="get_token_metadata",
        description="Batch token metadata lookup",
        input_schema=_object_schema(
            {
                "mints": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": f"Array of token mint addresses (max {MAX_TOKEN_MINTS})",
                    "minItems": 1,
                    "maxItems": MAX_TOKEN_MINTS,
                }
            },
            required=["mints"],
        ),
        handler=get_token_metadata,
        category="token",
    ),
    ToolDefinition(
        name="get_nft_collections",
        description="List NFT collections",
        input_schema=_object_schema(
            {
                "limit": _limit("Number of collections to return"),
                "sort": {"type": "string", "enum": ["volume", "floor", "items"], "description": "Sort criteria"},
            }
        ),
        handler=get_nft_collections,
        category="token",
    ),
    ToolDefinition(
        name="get_trending_nfts",
        description="Get trending NFT collections",
        input_schema=_object_schema(),
        handler=get_trending_nfts,
        category="token",
    ),
    # User management
    ToolDefinition(
        name="verify_wallet_signature",
        description="Verify wallet signature for authentication",
        input_schema=_object_schema(
            {
                "message": {"type": "string", "description": "Message that was signed"},
                "signature": {"type": "string", "description": "Wallet signature"},
                "publicKey": {"type": "string", "description": "Public key of the wallet"},
            },
            required=["message", "signature", "publicKey"],
        ),
        handler=verify_wallet_signature,
        category="user",
    ),
    ToolDefinition(
        name="get_user_history",
        description="Get user transaction history",
        input_schema=_object_schema(
            {
                "walletAddress": _address("User wallet address"),
                "limit": _limit("Number of transactions to return"),
            },
            required=["walletAddress"],
        ),
        handler=get_user_history,
        category="user",
    ),
    # Monetization
    ToolDefinition(
        name="get_balance",
        description=(
            "Get user SVMAI token balance (requires JWT) - NOTE: This is for SVMAI tokens only,"
            " NOT Solana/SOL balance! Use get_account_stats or get_solana_balance for Solana"
            " account balance."
        ),
        input_schema=_object_schema(),
        handler=get_balance,
        category="monetization",
        requires_jwt=True,
    ),
    ToolDefinition(
        name="get_usage_stats",
        description="Track API usage and metrics (requires JWT)",
        input_schema=_object_schema(),
        handler=get_usage_stats,
        category="monetization",
        requires_jwt=True,
    ),
    ToolDefinition(
        name="manage_api_keys",
        description="List, create, or manage API keys (requires JWT)",
        input_schema=_object_schema(
            {
                "action": {
                    "type": "string",
                    "enum": list(API_KEY_ACTIONS),
                    "description": "Action to perform",
                },
                "keyId": {"type": "string", "description": "Key ID for delete action"},
                "name": {"type": "string", "description": "Name for new key"},
                "permissions": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Permissions for new key",
                },
            },
            required=["action"],
        ),
        handler=manage_api_keys,
        category="monetization",
        requires_jwt=True,
    ),
    # Infrastructure
    ToolDefinition(
        name="get_api_metrics",
        description="Get API performance metrics",
        input_schema=_object_schema(),
        handler=get_api_metrics,
        category="infrastructure",
    ),
    ToolDefinition(
        name="report_error",
        description="Report client-side errors",
        input_schema=_object_schema(
            {
                "message": {"type": "string", "description": "Error message"},
                "stack": {"type": "string", "description": "Error stack trace"},
                "url": {"type": "string", "description": "URL where error occurred"},
                "userAgent": {"type": "string", "description": "User agent string"},
            },
            required=["message"],
        ),
        handler=report_error,
        category="infrastructure",
    ),
    # Program registry
    ToolDefinition(
        name="get_program_registry",
        description="List registered Solana programs",
        input_schema=_object_schema(
            {
                "category": {"type": "string", "description": "Program category filter"},
                "verified": {"type": "boolean", "description": "Show only verified programs"},
            }
        ),
        handler=get_program_registry,
        category="program",
    ),
    ToolDefinition(
        name="get_program_info",
        description="Get specific program details and metadata",
        input_schema=_object_schema({"programId": _address("Program address")}, required=["programId"]),
        handler=get_program_info,
        category="program",
    ),
    # Utility
    ToolDefinition(
        name="solana_rpc_call",
        description="Make direct Solana RPC calls through OpenSVM proxy",
        input_schema=_object_schema(
            {
                "method": {"type": "string", "description": "RPC method name"},
                "params": {"type": "array", "description": "RPC method parameters"},
            },
            required=["method"],
        ),
        handler=solana_rpc_call,
        category="utility",
    ),
]


def build_registry(definitions: Iterable[ToolDefinition]) -> Dict[str, ToolDefinition]:
    """Index definitions by name, preserving order and rejecting duplicates."""
    registry: Dict[str, ToolDefinition] = {}
    for definition in definitions:
        if definition.name in registry:
            raise ValueError(f"Duplicate tool name: {definition.name}")
        registry[definition.name] = definition
    return registry


TOOL_REGISTRY: Dict[str, ToolDefinition] = build_registry(_TOOL_DEFINITIONS)


def list_tools() -> List[Dict[str, Any]]:
    """Return the catalog in declaration order."""
    return [tool.to_dict() for tool in TOOL_REGISTRY.values()]


def resolve(tool_name: str) -> Optional[ToolDefinition]:
    """Return the tool registered under ``tool_name``, or None."""
    return TOOL_REGISTRY.get(tool_name)
