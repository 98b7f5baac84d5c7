"""Shared fixtures and utilities for OAuth provider tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from oauth_provider.config import OAuthServerConfig
from oauth_provider.context import HostRequest, RequestContext
from oauth_provider.engine import AuthorizationCode, Token
from oauth_provider.provider import OAuthProvider


# ============================================================================
# Fakes
# ============================================================================


class FakeEngine:
    """Protocol engine double with AsyncMock operations."""

    def __init__(self, model: Any = None, **options: Any):
        self.model = model
        self.options = options
        self.authenticate = AsyncMock()
        self.authorize = AsyncMock()
        self.token = AsyncMock()


class FakeModel:
    """Backing model without any policy hooks."""


def make_context(method: str = "GET", **kwargs: Any) -> RequestContext:
    """Create a request context for a bare host request."""
    return RequestContext(request=HostRequest(method=method, **kwargs))


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_token() -> Token:
    """Create a token granted read and write scopes."""
    return Token(access_token="access-123", scope=["read", "write"])


@pytest.fixture
def sample_code() -> AuthorizationCode:
    """Create an authorization code."""
    return AuthorizationCode(
        authorization_code="code-abc",
        redirect_uri="https://client.example.com/cb",
        scope=["read"],
    )


@pytest.fixture
def model() -> FakeModel:
    return FakeModel()


@pytest.fixture
def config(model: FakeModel) -> OAuthServerConfig:
    """Create a configuration building FakeEngine instances."""
    return OAuthServerConfig(model=model, engine_factory=FakeEngine)


@pytest.fixture
def provider(config: OAuthServerConfig) -> OAuthProvider:
    return OAuthProvider(config)


@pytest.fixture
def engine(provider: OAuthProvider) -> FakeEngine:
    return provider.server


@pytest.fixture
def ctx() -> RequestContext:
    return make_context(
        "POST",
        path="/resource",
        headers={"Authorization": "Bearer access-123"},
        body={"grant_type": "client_credentials"},
    )


@pytest.fixture
def next_handler() -> AsyncMock:
    """Create a downstream handler returning a marker value."""
    return AsyncMock(return_value="downstream")
