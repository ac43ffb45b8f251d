"""Pytest configuration and fixtures for splait tests."""

import json
from collections.abc import Callable

import httpx
import pytest

from splait import SplaitConfig

# Anvil's pre-funded test accounts (same as Hardhat/Foundry)
# Addresses only - DO NOT send real funds
ALICE = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
BOB = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
CAROL = "0x90F79bf6EB2c4f870365E785982E1f101E93b906"

SPLIT_CONTRACT = "0x4ec44e6a10a87F77c5b34b9BF518fAea306d4079"

EQUAL_INSTRUCTION = f"Split 10 ETH equally among {ALICE}, {BOB}"


@pytest.fixture
def config() -> SplaitConfig:
    """Config with a dummy key and the default precision policy."""
    return SplaitConfig(api_key="sk-test")


def chat_response(content: str | None, status_code: int = 200) -> httpx.Response:
    """Build a chat-completions response carrying `content`."""
    body = {"choices": [{"message": {"role": "assistant", "content": content}}]}
    return httpx.Response(status_code, json=body)


def plan_reply(plan: dict) -> httpx.Response:
    """Chat-completions response whose content is `plan` as JSON."""
    return chat_response(json.dumps(plan))


class RecordingHandler:
    """MockTransport handler that returns canned responses and records requests."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self.respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def calls(self) -> int:
        return len(self.requests)


def mock_client(handler: RecordingHandler) -> httpx.Client:
    """Sync httpx client backed by `handler`."""
    return httpx.Client(transport=httpx.MockTransport(handler))


def mock_async_client(handler: RecordingHandler) -> httpx.AsyncClient:
    """Async httpx client backed by `handler`."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
