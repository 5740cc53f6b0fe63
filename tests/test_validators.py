import pytest

from opensvm_mcp.tools import validators


@pytest.mark.parametrize("length", range(0, 60))
def test_address_validation_is_length_window(length):
    expected = 32 <= length <= 44
    assert validators.is_valid_solana_address("a" * length) is expected


@pytest.mark.parametrize("length", range(80, 95))
def test_signature_validation_is_length_window(length):
    expected = 87 <= length <= 88
    assert validators.is_valid_transaction_signature("5" * length) is expected


@pytest.mark.parametrize("value", [None, 12345, ["a" * 40], {"address": "a" * 40}, b"a" * 40])
def test_non_string_inputs_fail_without_raising(value):
    assert validators.is_valid_solana_address(value) is False
    assert validators.is_valid_transaction_signature(value) is False


def test_real_addresses_pass():
    assert validators.is_valid_solana_address("vines1vzrYbzLMRdu58ou5XTby4qAqVRLmqo36NKPTg")
    assert validators.is_valid_solana_address("11111111111111111111111111111111")
    # Length heuristic only: non-base58 characters are not rejected.
    assert validators.is_valid_solana_address("0" * 40)


def test_bounded_list():
    assert validators.is_valid_bounded_list(["a"], max_items=20)
    assert validators.is_valid_bounded_list(["a"] * 20, max_items=20)
    assert not validators.is_valid_bounded_list([], max_items=20)
    assert not validators.is_valid_bounded_list(["a"] * 21, max_items=20)
    assert not validators.is_valid_bounded_list("abc", max_items=20)
    assert not validators.is_valid_bounded_list(None, max_items=20)


SCHEMA = {
    "type": "object",
    "properties": {
        "query": {"type": "string"},
        "limit": {"type": "integer", "minimum": 1, "maximum": 100},
        "min": {"type": "number"},
        "verified": {"type": "boolean"},
        "status": {"type": "string", "enum": ["success", "failed"]},
        "mints": {"type": "array", "items": {"type": "string"}, "maxItems": 2},
    },
    "required": ["query"],
}


def test_schema_missing_required():
    assert validators.find_schema_violation(SCHEMA, {}) == "Missing required parameter: query"
    assert validators.find_schema_violation(SCHEMA, {"query": None}) == "Missing required parameter: query"


def test_schema_accepts_valid_arguments():
    args = {"query": "sol", "limit": 10, "min": 1.5, "verified": True, "status": "failed", "mints": ["a"]}
    assert validators.find_schema_violation(SCHEMA, args) is None


def test_schema_accepts_integral_float_for_integer():
    assert validators.find_schema_violation(SCHEMA, {"query": "q", "limit": 5.0}) is None


@pytest.mark.parametrize(
    "args, fragment",
    [
        ({"query": 5}, "Invalid query: expected a string"),
        ({"query": "q", "limit": "10"}, "Invalid limit: expected an integer"),
        ({"query": "q", "limit": True}, "Invalid limit: expected an integer"),
        ({"query": "q", "limit": 0}, "Invalid limit: must be >= 1"),
        ({"query": "q", "limit": 101}, "Invalid limit: must be <= 100"),
        ({"query": "q", "min": True}, "Invalid min: expected a number"),
        ({"query": "q", "verified": "yes"}, "Invalid verified: expected a boolean"),
        ({"query": "q", "status": "pending"}, "Invalid status: must be one of success, failed"),
        ({"query": "q", "mints": ["a", "b", "c"]}, "Invalid mints: must contain at most 2 items"),
        ({"query": "q", "mints": ["a", 3]}, "Invalid mints[1]: expected a string"),
    ],
)
def test_schema_violations_name_the_parameter(args, fragment):
    problem = validators.find_schema_violation(SCHEMA, args)
    assert problem is not None
    assert problem.startswith(fragment)


def test_schema_ignores_undeclared_and_null_optionals():
    assert validators.find_schema_violation(SCHEMA, {"query": "q", "limit": None, "other": object()}) is None
