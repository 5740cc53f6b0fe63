"""
Configuration helpers for the OpenSVM MCP server.

This module centralizes base URL selection, credential loading, the backend
timeout, logging settings, and request-shaping limits. Nothing is read from the
environment at call time: ``load_config`` is invoked once at process start and
the resulting frozen config is handed to the client and transports.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Environment variables
BASE_URL_ENV_VAR = "OPENSVM_BASE_URL"
API_KEY_ENV_VAR = "OPENSVM_API_KEY"
JWT_TOKEN_ENV_VAR = "OPENSVM_JWT_TOKEN"
TIMEOUT_ENV_VAR = "OPENSVM_HTTP_TIMEOUT"
LOG_LEVEL_ENV_VAR = "OPENSVM_MCP_LOG_LEVEL"
LOG_FORMAT_ENV_VAR = "OPENSVM_MCP_LOG_FORMAT"

# Default connection settings
DEFAULT_BASE_URL = "https://osvm.ai/api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"  # json or plain

SERVER_NAME = "opensvm-api-server"
SERVER_VERSION = "1.0.0"

# Request-shaping limits
MAX_BATCH_SIGNATURES = 20
MAX_TOKEN_MINTS = 100
MAX_ACCOUNT_TRANSACTIONS = 100


def _load_timeout(raw_timeout: Optional[str]) -> float:
    if raw_timeout:
        try:
            value = float(raw_timeout)
        except ValueError:
            return DEFAULT_TIMEOUT
        if value > 0:
            return value
    return DEFAULT_TIMEOUT


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


@dataclass(slots=True, frozen=True)
class OpenSVMConfig:
    """Runtime configuration for OpenSVM API access."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    api_key: Optional[str] = None
    jwt_token: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT
    server_name: str = SERVER_NAME
    server_version: str = SERVER_VERSION


def load_config(environ: Optional[Mapping[str, str]] = None) -> OpenSVMConfig:
    """
    Build the process configuration from environment variables.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``.

    Returns:
        An immutable ``OpenSVMConfig``. Credentials are never logged.
    """
    env = os.environ if environ is None else environ
    return OpenSVMConfig(
        base_url=_clean(env.get(BASE_URL_ENV_VAR)) or DEFAULT_BASE_URL,
        timeout=_load_timeout(env.get(TIMEOUT_ENV_VAR)),
        api_key=_clean(env.get(API_KEY_ENV_VAR)),
        jwt_token=_clean(env.get(JWT_TOKEN_ENV_VAR)),
        log_level=_clean(env.get(LOG_LEVEL_ENV_VAR)) or DEFAULT_LOG_LEVEL,
        log_format=_clean(env.get(LOG_FORMAT_ENV_VAR)) or DEFAULT_LOG_FORMAT,
    )
