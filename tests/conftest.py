import pytest
import json
import os
from typing import List
from unittest.mock import AsyncMock
import httpx
from dotenv import load_dotenv

from docpulse.schemas.notifications import CommandInvocation, Reply

@pytest.fixture(scope="session", autouse=True)
def _load_env():
    # Load .env once per session to avoid side-effects on import time
    load_dotenv()

def _truthy(v: str | None) -> bool:
    return v is not None and v.strip().lower() not in ("", "0", "false", "no")

@pytest.fixture(scope="session")
def allow_integration(_load_env) -> bool:
    # Depends on _load_env to ensure .env is loaded first
    return _truthy(os.getenv("RUN_INTEGRATION_TESTS"))

@pytest.fixture
def write_urls(tmp_path):
    """
    Writes a URL list file into a temp dir and returns its path.
    """
    def _write(name: str, urls) -> str:
        path = tmp_path / name
        path.write_text(json.dumps(urls), encoding="utf-8")
        return str(path)
    return _write

def mock_http(handler) -> httpx.AsyncClient:
    """
    AsyncClient whose requests are answered by `handler(request) -> httpx.Response`.
    """
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))

class FakeInteraction:
    """
    Records the reply lifecycle the dispatcher drives, in call order.
    """
    def __init__(self, command_name: str, subcommand: str | None = None, argument: str | None = None):
        self.invocation = CommandInvocation(
            command_name=command_name, subcommand=subcommand, argument=argument, user_id="U1"
        )
        self.acknowledged = False
        self.deferred = False
        self.replied = False
        self.calls: List[tuple] = []

    async def defer(self):
        self.calls.append(("defer",))
        self.acknowledged = True
        self.deferred = True

    async def reject(self, text: str):
        self.calls.append(("reject", text))
        self.acknowledged = True
        self.replied = True

    async def reply(self, reply: Reply):
        self.calls.append(("reply", reply))
        self.replied = True

    async def follow_up(self, reply: Reply):
        self.calls.append(("follow_up", reply))

    @property
    def replies(self) -> List[Reply]:
        return [c[1] for c in self.calls if c[0] in ("reply", "follow_up")]

@pytest.fixture
def services():
    """
    AsyncMock stand-ins for the responder and both notifiers.
    """
    responder = AsyncMock()
    commits = AsyncMock()
    blogs = AsyncMock()
    return responder, commits, blogs

@pytest.fixture
def http_client():
    """Factory for MockTransport-backed AsyncClients."""
    return mock_http

@pytest.fixture
def make_interaction():
    return FakeInteraction

@pytest.fixture(scope="session")
def openai_api_key(_load_env) -> str | None:
    key = os.getenv("OPENAI_API_KEY")
    if not key or key == "sk-...":
        return None
    return key
