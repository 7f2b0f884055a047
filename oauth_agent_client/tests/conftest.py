"""
Pytest configuration for oauth_agent_client. Async tests run on the anyio plugin (asyncio backend).
"""
import httpx
import pytest

from oauth_agent_client.client import OAuthAgentClient
from oauth_agent_client.config import Configuration
from oauth_agent_client.tests.fake_agent import SERVER_URL, create_fake_agent


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def agent_app():
    return create_fake_agent()


@pytest.fixture
def client(agent_app):
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=agent_app))
    return OAuthAgentClient(Configuration(oauth_agent_base_url=SERVER_URL), http_client=http)


@pytest.fixture
def mock_client():
    """Factory: OAuthAgentClient whose requests go to an httpx.MockTransport handler."""

    def _make(handler, base_url: str = SERVER_URL, **config) -> OAuthAgentClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return OAuthAgentClient(Configuration(oauth_agent_base_url=base_url, **config), http_client=http)

    return _make
