"""HTTP client wrappers for the OpenSVM API."""

from .client import (
    BackendHTTPError,
    BackendTimeoutError,
    BackendUnreachableError,
    OpenSVMApiClient,
    OpenSVMApiError,
    UnauthorizedError,
    UnexpectedResponseError,
)

__all__ = [
    "OpenSVMApiClient",
    "OpenSVMApiError",
    "BackendHTTPError",
    "UnauthorizedError",
    "BackendUnreachableError",
    "BackendTimeoutError",
    "UnexpectedResponseError",
]
