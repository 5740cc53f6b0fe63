"""
Thin HTTP client for the OpenSVM REST API.

The client only knows verbs, paths and payloads. Every failure is raised as an
``OpenSVMApiError`` subclass carrying the upstream status code and message so
the dispatcher can turn it into a safe, user-facing error.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from opensvm_mcp.config import OpenSVMConfig

logger = logging.getLogger(__name__)


class OpenSVMApiError(Exception):
    """Base exception for OpenSVM API errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendHTTPError(OpenSVMApiError):
    """Raised when the backend answers with a non-2xx status."""


class UnauthorizedError(BackendHTTPError):
    """Raised when the backend rejects the request due to missing credentials."""


class BackendUnreachableError(OpenSVMApiError):
    """Raised when the backend cannot be reached."""


class BackendTimeoutError(BackendUnreachableError):
    """Raised when the backend does not answer within the configured timeout."""


class UnexpectedResponseError(OpenSVMApiError):
    """Raised when a 2xx response body is not valid JSON."""


def _drop_none(values: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not values:
        return None
    cleaned = {key: value for key, value in values.items() if value is not None}
    return cleaned or None


def _extract_error_message(data: Any, status_code: int) -> str:
    """Pull the upstream error text out of an error body, if there is one."""
    if isinstance(data, dict):
        raw_error = data.get("error")
        if isinstance(raw_error, dict):
            nested = raw_error.get("message")
            if isinstance(nested, str) and nested:
                return nested
        if isinstance(raw_error, str) and raw_error:
            return raw_error
        raw_message = data.get("message")
        if isinstance(raw_message, str) and raw_message:
            return raw_message
    return f"Request failed with status code {status_code}"


class OpenSVMApiClient:
    """Async client for the OpenSVM API surface."""

    def __init__(
        self,
        config: OpenSVMConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or OpenSVMConfig()
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None
        self._headers = self._build_headers()

    def _build_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["X-API-Key"] = self.config.api_key
        if self.config.jwt_token:
            headers["Authorization"] = f"Bearer {self.config.jwt_token}"
        return headers

    @property
    def has_jwt(self) -> bool:
        return bool(self.config.jwt_token)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                headers=self._headers,
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _process_response(self, response: httpx.Response, path: str) -> Any:
        status_code = response.status_code
        data: Any = None
        try:
            data = response.json()
            parsed = True
        except ValueError:
            parsed = False

        if not 200 <= status_code < 300:
            message = _extract_error_message(data, status_code)
            logger.warning("OpenSVM API error status=%s path=%s message=%s", status_code, path, message)
            if status_code in {401, 403}:
                raise UnauthorizedError(message, status_code=status_code)
            raise BackendHTTPError(message, status_code=status_code)

        if not parsed:
            if not (getattr(response, "text", "") or "").strip():
                return None
            raise UnexpectedResponseError(
                "Unexpected response from backend (invalid JSON).", status_code=status_code
            )
        return data

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        client = await self._get_client()
        if method == "GET":
            call = client.get(path, params=_drop_none(params))
        elif method == "POST":
            call = client.post(path, json=payload if payload is not None else {})
        elif method == "DELETE":
            call = client.delete(path)
        else:
            raise ValueError(f"Unsupported method: {method}")
        try:
            # httpx timeouts apply per phase; this bounds the whole exchange.
            response = await asyncio.wait_for(call, self.config.timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            logger.warning("OpenSVM API timeout for %s %s", method, path)
            raise BackendTimeoutError(
                f"Request timed out after {self.config.timeout:g}s"
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("OpenSVM API unreachable for %s %s", method, path)
            raise BackendUnreachableError(f"Backend unreachable: {exc}") from exc
        return self._process_response(response, path)

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Issue a GET; ``None``-valued query parameters are omitted."""
        return await self._request("GET", path, params=params)

    async def post(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """Issue a POST with a JSON body."""
        return await self._request("POST", path, payload=payload)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)
