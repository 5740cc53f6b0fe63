import json
import logging
import sys

import pytest

from opensvm_mcp.config import OpenSVMConfig
from opensvm_mcp.logging_setup import JsonFormatter, configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    httpx_level = logging.getLogger("httpx").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)


def _record(**extra):
    record = logging.LogRecord("opensvm_mcp.test", logging.WARNING, __file__, 1, "tool failed %s", ("x",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extras():
    payload = json.loads(JsonFormatter().format(_record(tool="get_block", request_id="abc")))
    assert payload["level"] == "WARNING"
    assert payload["message"] == "tool failed x"
    assert payload["tool"] == "get_block"
    assert payload["request_id"] == "abc"
    assert "error" not in payload


def test_configure_logging_uses_stderr_and_level():
    configure_logging(OpenSVMConfig(log_level="DEBUG", log_format="json"))
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler.formatter, JsonFormatter)
    assert handler.stream is sys.stderr
    assert logging.getLogger("httpx").level == logging.WARNING


def test_configure_logging_plain_format_and_bad_level():
    configure_logging(OpenSVMConfig(log_level="verbose", log_format="plain"))
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert not isinstance(root.handlers[0].formatter, JsonFormatter)
