"""
OAuth Provider Middleware
Exposes protocol engine operations as chainable request handlers.
"""

import logging
from typing import Any, Dict, Optional

from .config import OAuthServerConfig
from .context import CodeState, Middleware, Next, RequestContext, TokenState
from .engine import OAuthRequest, OAuthResponse
from .errors import InvalidArgumentError, InvalidScopeError
from .policy import TokenPolicy

logger = logging.getLogger(__name__)


def handle_error(ctx: RequestContext, err: Exception) -> None:
    """Write an error's status and headers onto the outbound response."""
    code = getattr(err, 'code', None)
    status = code if isinstance(code, int) and not isinstance(code, bool) and code else 500
    logger.debug(f"Preparing error response ({status})")

    headers = getattr(err, 'headers', None)
    if headers:
        ctx.response.set(headers)
    ctx.response.status = status


def handle_response(ctx: RequestContext, response: OAuthResponse) -> None:
    """Copy the engine response onto the outbound response."""
    logger.debug(f"Preparing success response ({response.status})")
    ctx.response.set(response.headers)
    ctx.response.status = response.status
    ctx.response.body = response.body


class OAuthProvider:
    """OAuth 2.0 authorization server middleware provider."""

    def __init__(self, config: OAuthServerConfig):
        config.validate()
        self.config = config
        self.policy = TokenPolicy(
            save_token_metadata=config.save_token_metadata,
            check_scope=config.check_scope,
        )
        self.server = config.create_engine()

    def authenticate(self) -> Middleware:
        """Return bearer token authentication middleware."""

        async def authenticate_middleware(ctx: RequestContext, next: Next) -> Any:
            request = OAuthRequest.from_host(ctx.request)
            response = OAuthResponse.from_state(ctx.response)

            try:
                token = await self.server.authenticate(request, response)
            except Exception as err:
                handle_error(ctx, err)
                raise

            ctx.state.oauth = TokenState(token=token)
            return await next()

        return authenticate_middleware

    def authorize(self, options: Optional[Dict[str, Any]] = None) -> Middleware:
        """
        Return authorization endpoint middleware.

        Used by the client to obtain authorization from the resource owner.

        Args:
            options: Passed through to the engine's authorize operation
        """

        async def authorize_middleware(ctx: RequestContext, next: Next) -> Any:
            logger.debug("Running authorize endpoint middleware")
            request = OAuthRequest.from_host(ctx.request)
            response = OAuthResponse.from_state(ctx.response)

            try:
                code = await self.server.authorize(request, response, options)
            except Exception as err:
                handle_error(ctx, err)
                raise

            ctx.state.oauth = CodeState(code=code)
            handle_response(ctx, response)
            return await next()

        return authorize_middleware

    def token(self) -> Middleware:
        """
        Return token endpoint middleware.

        Used by the client to exchange an authorization grant for an access token.
        """

        async def token_middleware(ctx: RequestContext, next: Next) -> Any:
            logger.debug("Running token endpoint middleware")
            request = OAuthRequest.from_host(ctx.request)
            response = OAuthResponse.from_state(ctx.response)

            try:
                token = await self.server.token(request, response)
                token = await self.policy.save_token_metadata(token, ctx.request)
            except Exception as err:
                handle_error(ctx, err)
                raise

            ctx.state.oauth = TokenState(token=token)
            handle_response(ctx, response)
            return await next()

        return token_middleware

    def scope(self, required: str) -> Middleware:
        """
        Return scope check middleware.

        Limits access to a route to carriers of a certain scope. Must run
        after ``authenticate()`` or ``token()`` in the same chain.

        Args:
            required: Scope the token must carry
        """

        async def scope_middleware(ctx: RequestContext, next: Next) -> Any:
            oauth = ctx.state.oauth
            if not isinstance(oauth, TokenState):
                err = InvalidArgumentError(
                    f"Missing `oauth.token`: scope `{required}` must be checked "
                    f"after authenticate() or token()"
                )
                handle_error(ctx, err)
                raise err

            result = self.policy.check_scope(required, oauth.token)
            if result is not True:
                if isinstance(result, str) and result:
                    message = result
                else:
                    message = f"Required scope: `{required}`"
                err = InvalidScopeError(message)
                handle_error(ctx, err)
                raise err

            return await next()

        return scope_middleware
