"""Root conftest: shared test configuration and REST client fixtures."""

import os

# Tests never talk to a real API or touch the user's token file
os.environ.setdefault("SNOWBOARD_SWAP_API_BASE_URL", "http://test/api")
os.environ.setdefault("SNOWBOARD_SWAP_TOKEN_FILE", "/tmp/snowboard_swap_test_token.json")

import pytest
from httpx import ASGITransport

from snowboard_swap.infrastructure.api_client import APIClient
from snowboard_swap.infrastructure.token_store import InMemoryTokenStore
from tests.fake_api import FakeBackend, create_fake_api


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def token_store():
    return InMemoryTokenStore()


@pytest.fixture
async def api_client(backend, token_store):
    """APIClient wired to the in-memory fake API."""
    client = APIClient(
        "http://test/api",
        token_store,
        transport=ASGITransport(app=create_fake_api(backend)),
    )
    async with client:
        yield client
