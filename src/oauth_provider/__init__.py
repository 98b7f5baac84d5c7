"""
OAuth 2.0 Provider Middleware
Chainable authenticate, authorize, token and scope handlers around an
OAuth 2.0 protocol engine.
"""

from .config import OAuthServerConfig
from .context import (
    CodeState,
    HostRequest,
    RequestContext,
    RequestState,
    ResponseState,
    TokenState,
    compose,
)
from .endpoints import OAuthEndpoints, chain_endpoint
from .engine import AuthorizationCode, OAuthRequest, OAuthResponse, ProtocolEngine, Token
from .errors import (
    AccessDeniedError,
    InvalidArgumentError,
    InvalidGrantError,
    InvalidRequestError,
    InvalidScopeError,
    InvalidTokenError,
    OAuthError,
    UnauthorizedRequestError,
)
from .policy import TokenPolicy
from .provider import OAuthProvider

__all__ = [
    'OAuthProvider',
    'OAuthServerConfig',
    'TokenPolicy',
    'OAuthEndpoints',
    'chain_endpoint',
    'compose',
    'RequestContext',
    'HostRequest',
    'ResponseState',
    'RequestState',
    'TokenState',
    'CodeState',
    'ProtocolEngine',
    'OAuthRequest',
    'OAuthResponse',
    'Token',
    'AuthorizationCode',
    'OAuthError',
    'InvalidArgumentError',
    'InvalidScopeError',
    'InvalidRequestError',
    'InvalidGrantError',
    'AccessDeniedError',
    'InvalidTokenError',
    'UnauthorizedRequestError',
]
