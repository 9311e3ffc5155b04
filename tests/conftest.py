"""
Shared fixtures: a fake n8n API built on httpx.MockTransport.
"""

import json
from collections import defaultdict, deque
from typing import Any, Optional

import httpx
import pytest

from core.client import N8nClient
from core.config import N8nConfig

BASE_URL = "http://n8n.test"
API_PREFIX = "/api/v1"


class FakeN8n:
    """Queues canned responses per (method, path) and records every request."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], deque] = defaultdict(deque)

    def add(self, method: str, path: str, status: int = 200, json_body: Any = None, text: Optional[str] = None):
        self._routes[(method.upper(), API_PREFIX + path)].append((status, json_body, text))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(501, json={"message": f"unexpected {request.method} {request.url.path}"})
        status, json_body, text = queue.popleft()
        if text is not None:
            return httpx.Response(status, text=text)
        if json_body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=json_body)

    @property
    def calls(self) -> list[tuple[str, str]]:
        """(method, path) of every request, with the /api/v1 prefix stripped."""
        return [(r.method, r.url.path[len(API_PREFIX):]) for r in self.requests]

    def body(self, index: int) -> Any:
        content = self.requests[index].content
        return json.loads(content) if content else None


@pytest.fixture
def config():
    return N8nConfig(base_url=BASE_URL, api_key="test-key")


@pytest.fixture
def fake_n8n():
    return FakeN8n()


@pytest.fixture
def client(config, fake_n8n):
    return N8nClient(config, transport=httpx.MockTransport(fake_n8n.handler))


@pytest.fixture
def sample_nodes():
    return [
        {"name": "Start", "type": "n8n-nodes-base.manualTrigger"},
        {"name": "Set", "type": "n8n-nodes-base.set", "parameters": {"values": {}}},
    ]
