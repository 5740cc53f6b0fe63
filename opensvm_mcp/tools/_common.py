"""Helpers shared by the tool handlers."""

from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import quote

from opensvm_mcp.errors import ToolError, invalid_params
from opensvm_mcp.tools.validators import (
    ADDRESS_MAX_LENGTH,
    ADDRESS_MIN_LENGTH,
    SIGNATURE_MAX_LENGTH,
    SIGNATURE_MIN_LENGTH,
    is_valid_bounded_list,
    is_valid_solana_address,
    is_valid_transaction_signature,
)


def segment(value: Any) -> str:
    """Encode a value for use as a single URL path segment."""
    return quote(str(value), safe="")


def check_address(args: Mapping[str, Any], field: str, *, label: str = "Solana address") -> Optional[ToolError]:
    if is_valid_solana_address(args.get(field)):
        return None
    return invalid_params(
        f"Invalid {label} format for '{field}' "
        f"(expected {ADDRESS_MIN_LENGTH}-{ADDRESS_MAX_LENGTH} characters)."
    )


def check_signature(args: Mapping[str, Any], field: str = "signature") -> Optional[ToolError]:
    if is_valid_transaction_signature(args.get(field)):
        return None
    return invalid_params(
        f"Invalid transaction signature format for '{field}' "
        f"(expected {SIGNATURE_MIN_LENGTH}-{SIGNATURE_MAX_LENGTH} characters)."
    )


def check_bounded_list(args: Mapping[str, Any], field: str, *, max_items: int) -> Optional[ToolError]:
    if is_valid_bounded_list(args.get(field), max_items=max_items):
        return None
    return invalid_params(f"'{field}' must be a non-empty array of at most {max_items} items.")


def as_int(value: Any) -> Optional[int]:
    """Integer-typed arguments may arrive as integral floats (``5.0``)."""
    return None if value is None else int(value)
