from opensvm_mcp.metrics import MetricsRecorder


def test_recorder_counts_and_resets():
    metrics = MetricsRecorder()
    metrics.incr_request()
    metrics.record_tool("get_block", success=True, duration_ms=10.0)
    metrics.record_tool("get_block", success=False, duration_ms=30.0)
    metrics.record_tool("get_block_stats", success=True)
    metrics.record_error_code(-32602)

    snap = metrics.snapshot()
    assert snap["requests"] == 1
    assert snap["tool_success"] == {"get_block": 1, "get_block_stats": 1}
    assert snap["tool_error"] == {"get_block": 1}
    assert snap["error_codes"] == {"-32602": 1}
    assert snap["tool_latency_ms"] == {"get_block": {"avg": 20.0, "max": 30.0}}

    metrics.reset()
    snap = metrics.snapshot()
    assert snap["requests"] == 0
    assert snap["tool_success"] == {}
    assert snap["tool_latency_ms"] == {}
