"""In-process counters for tool traffic (single process only, reset on restart)."""

from __future__ import annotations

from collections import Counter
from threading import Lock
from typing import Dict


class MetricsRecorder:
    def __init__(self) -> None:
        self._lock = Lock()
        self._requests = 0
        self._tool_success: Counter[str] = Counter()
        self._tool_error: Counter[str] = Counter()
        self._error_codes: Counter[int] = Counter()
        self._latency_total_ms: Dict[str, float] = {}
        self._latency_max_ms: Dict[str, float] = {}

    def incr_request(self) -> None:
        with self._lock:
            self._requests += 1

    def record_tool(self, tool: str, *, success: bool, duration_ms: float | None = None) -> None:
        with self._lock:
            counter = self._tool_success if success else self._tool_error
            counter[tool] += 1
            if duration_ms is None:
                return
            self._latency_total_ms[tool] = self._latency_total_ms.get(tool, 0.0) + duration_ms
            self._latency_max_ms[tool] = max(self._latency_max_ms.get(tool, 0.0), duration_ms)

    def record_error_code(self, code: int) -> None:
        with self._lock:
            self._error_codes[code] += 1

    def snapshot(self) -> Dict[str, object]:
        """JSON-ready view; error code keys are strings."""
        with self._lock:
            latency = {}
            for tool, total in self._latency_total_ms.items():
                calls = self._tool_success[tool] + self._tool_error[tool]
                latency[tool] = {
                    "avg": round(total / calls, 2) if calls else 0.0,
                    "max": round(self._latency_max_ms[tool], 2),
                }
            return {
                "requests": self._requests,
                "tool_success": dict(self._tool_success),
                "tool_error": dict(self._tool_error),
                "error_codes": {str(code): count for code, count in self._error_codes.items()},
                "tool_latency_ms": latency,
            }

    def reset(self) -> None:
        with self._lock:
            self._requests = 0
            self._tool_success.clear()
            self._tool_error.clear()
            self._error_codes.clear()
            self._latency_total_ms.clear()
            self._latency_max_ms.clear()


default_metrics = MetricsRecorder()
