"""Infrastructure tools."""

from __future__ import annotations

from typing import Any, Dict

ERROR_REPORT_FIELDS = ("message", "stack", "url", "userAgent")


async def get_api_metrics(client, args: Dict[str, Any]) -> Any:
    return await client.get("/monitoring/api")


async def report_error(client, args: Dict[str, Any]) -> Any:
    """Forward a client-side error report; absent fields are left out of the body."""
    report = {field: args.get(field) for field in ERROR_REPORT_FIELDS if args.get(field) is not None}
    return await client.post("/error-tracking", {"error": report})
