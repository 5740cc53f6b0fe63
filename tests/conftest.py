import os
import sys

import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from opensvm_mcp.metrics import default_metrics  # noqa: E402


class RecordingClient:
    """Backend stand-in that records every call and replays canned results."""

    def __init__(self, response=None, *, exc=None, has_jwt=True):
        self.response = {"ok": True} if response is None else response
        self.exc = exc
        self.has_jwt = has_jwt
        self.calls = []

    def _reply(self):
        if self.exc is not None:
            raise self.exc
        return self.response

    async def get(self, path, params=None):
        self.calls.append(("GET", path, params))
        return self._reply()

    async def post(self, path, payload=None):
        self.calls.append(("POST", path, payload))
        return self._reply()

    async def delete(self, path):
        self.calls.append(("DELETE", path, None))
        return self._reply()

    async def aclose(self):
        return None


@pytest.fixture
def recording_client():
    return RecordingClient


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()
