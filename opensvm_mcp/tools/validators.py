"""Shared validation helpers for OpenSVM MCP tools."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

# Solana addresses are base58 public keys, 32-44 characters. This is a length
# pre-filter only; alphabet and checksum validation is left to the backend.
ADDRESS_MIN_LENGTH = 32
ADDRESS_MAX_LENGTH = 44
SIGNATURE_MIN_LENGTH = 87
SIGNATURE_MAX_LENGTH = 88

_TYPE_LABELS = {
    "string": "a string",
    "number": "a number",
    "integer": "an integer",
    "boolean": "a boolean",
    "array": "an array",
    "object": "an object",
}


def is_valid_solana_address(address: Any) -> bool:
    """Basic length check for Solana addresses (weak guarantee, not a checksum)."""
    if not isinstance(address, str):
        return False
    return ADDRESS_MIN_LENGTH <= len(address) <= ADDRESS_MAX_LENGTH


def is_valid_transaction_signature(signature: Any) -> bool:
    """Basic length check for base58 transaction signatures."""
    if not isinstance(signature, str):
        return False
    return SIGNATURE_MIN_LENGTH <= len(signature) <= SIGNATURE_MAX_LENGTH


def is_valid_bounded_list(value: Any, *, max_items: int) -> bool:
    """Accept a non-empty list of at most ``max_items`` entries."""
    if not isinstance(value, list):
        return False
    return 0 < len(value) <= max_items


def _matches_type(value: Any, expected: str) -> bool:
    # bool is an int subclass; never let it satisfy a numeric type.
    if expected == "string":
        return isinstance(value, str)
    if expected == "boolean":
        return isinstance(value, bool)
    if expected == "integer":
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        return isinstance(value, float) and value.is_integer()
    if expected == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected == "array":
        return isinstance(value, list)
    if expected == "object":
        return isinstance(value, dict)
    return True


def _check_property(name: str, value: Any, constraints: Mapping[str, Any]) -> Optional[str]:
    expected = constraints.get("type")
    if isinstance(expected, str) and not _matches_type(value, expected):
        return f"Invalid {name}: expected {_TYPE_LABELS.get(expected, expected)}."

    allowed = constraints.get("enum")
    if allowed is not None and value not in allowed:
        return f"Invalid {name}: must be one of {', '.join(str(item) for item in allowed)}."

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        minimum = constraints.get("minimum")
        if minimum is not None and value < minimum:
            return f"Invalid {name}: must be >= {minimum}."
        maximum = constraints.get("maximum")
        if maximum is not None and value > maximum:
            return f"Invalid {name}: must be <= {maximum}."

    if isinstance(value, str):
        min_length = constraints.get("minLength")
        if min_length is not None and len(value) < min_length:
            return f"Invalid {name}: must be at least {min_length} characters."
        max_length = constraints.get("maxLength")
        if max_length is not None and len(value) > max_length:
            return f"Invalid {name}: must be at most {max_length} characters."

    if isinstance(value, list):
        min_items = constraints.get("minItems")
        if min_items is not None and len(value) < min_items:
            return f"Invalid {name}: must contain at least {min_items} item(s)."
        max_items = constraints.get("maxItems")
        if max_items is not None and len(value) > max_items:
            return f"Invalid {name}: must contain at most {max_items} items."
        item_type = (constraints.get("items") or {}).get("type")
        if isinstance(item_type, str):
            for index, item in enumerate(value):
                if not _matches_type(item, item_type):
                    return (
                        f"Invalid {name}[{index}]: expected {_TYPE_LABELS.get(item_type, item_type)}."
                    )
    return None


def find_schema_violation(schema: Mapping[str, Any], arguments: Mapping[str, Any]) -> Optional[str]:
    """
    Check arguments against a tool's declared input schema.

    Returns:
        A message naming the first offending parameter, or None when the
        arguments satisfy the schema. ``None`` values count as absent.
    """
    properties: Dict[str, Any] = schema.get("properties") or {}
    for name in schema.get("required") or []:
        if arguments.get(name) is None:
            return f"Missing required parameter: {name}"
    for name, value in arguments.items():
        constraints = properties.get(name)
        if constraints is None or value is None:
            continue
        problem = _check_property(name, value, constraints)
        if problem:
            return problem
    return None
