"""LLM-facing tool handlers, one module per API domain."""

from .transactions import (
    analyze_transaction,
    batch_transactions,
    explain_transaction,
    get_transaction,
)
from .accounts import (
    check_account_type,
    get_account_portfolio,
    get_account_stats,
    get_account_token_stats,
    get_account_transactions,
    get_solana_balance,
)
from .blocks import get_block, get_block_stats, get_recent_blocks
from .search import search_accounts, universal_search
from .analytics import (
    get_defi_health,
    get_defi_overview,
    get_dex_analytics,
    get_validator_analytics,
)
from .tokens import get_nft_collections, get_token_info, get_token_metadata, get_trending_nfts
from .users import get_user_history, verify_wallet_signature
from .monetization import get_balance, get_usage_stats, manage_api_keys
from .infrastructure import get_api_metrics, report_error
from .programs import get_program_info, get_program_registry
from .rpc import solana_rpc_call
from . import validators

__all__ = [
    "get_transaction",
    "batch_transactions",
    "analyze_transaction",
    "explain_transaction",
    "get_account_stats",
    "get_account_portfolio",
    "get_solana_balance",
    "get_account_transactions",
    "get_account_token_stats",
    "check_account_type",
    "get_block",
    "get_recent_blocks",
    "get_block_stats",
    "universal_search",
    "search_accounts",
    "get_defi_overview",
    "get_dex_analytics",
    "get_defi_health",
    "get_validator_analytics",
    "get_token_info",
    "get_token_metadata",
    "get_nft_collections",
    "get_trending_nfts",
    "verify_wallet_signature",
    "get_user_history",
    "get_balance",
    "get_usage_stats",
    "manage_api_keys",
    "get_api_metrics",
    "report_error",
    "get_program_registry",
    "get_program_info",
    "solana_rpc_call",
    "validators",
]
