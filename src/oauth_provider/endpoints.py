"""
HTTP Endpoints for the OAuth Provider
Runs middleware chains as Starlette endpoints and registers the token and
authorize endpoints on a FastAPI app.
"""

from typing import Any, Awaitable, Callable, Dict, Optional
from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
import logging

from .context import HostRequest, Middleware, RequestContext, ResponseState, compose
from .errors import OAuthError
from .provider import OAuthProvider

logger = logging.getLogger(__name__)

Endpoint = Callable[[Request], Awaitable[Response]]


def render_response(response: ResponseState) -> Response:
    """Render the chain's response fields as a Starlette response."""
    body = response.body
    status = response.status or (200 if body is not None else 204)

    if isinstance(body, (dict, list)):
        return JSONResponse(content=body, status_code=status, headers=response.headers)
    if isinstance(body, str):
        return PlainTextResponse(content=body, status_code=status, headers=response.headers)
    return Response(status_code=status, headers=response.headers)


def chain_endpoint(*middleware: Middleware) -> Endpoint:
    """
    Build a Starlette endpoint running the given middleware in order.

    OAuth errors escaping the chain are rendered with the status and headers
    the chain already wrote; anything else becomes a 500 server_error.
    """
    handler = compose(middleware)

    async def endpoint(request: Request) -> Response:
        ctx = None

        try:
            ctx = RequestContext(request=await HostRequest.from_starlette(request))
            await handler(ctx)
        except OAuthError as e:
            logger.debug(f"OAuth error on {request.method} {request.url.path}: {e.name} ({e.code})")
            response = ctx.response if ctx is not None else ResponseState(headers=dict(e.headers))
            # A success status written earlier in the chain must not mask the error
            status = response.status if response.status and response.status >= 400 else e.code
            return JSONResponse(
                status_code=status,
                content=e.to_dict(),
                headers=response.headers
            )
        except Exception as e:
            logger.error(f"Unhandled error on {request.method} {request.url.path}: {e}")
            return JSONResponse(
                status_code=500,
                content={"error": "server_error", "error_description": "Internal server error"}
            )

        return render_response(ctx.response)

    return endpoint


class OAuthEndpoints:
    """OAuth 2.0 token and authorization endpoints."""

    def __init__(self, provider: OAuthProvider, authorize_options: Optional[Dict[str, Any]] = None):
        self.provider = provider
        self.authorize_options = authorize_options

    def register_endpoints(self, app: FastAPI, prefix: str = "/oauth") -> None:
        """Register OAuth endpoints with FastAPI app."""
        prefix = prefix.rstrip("/")

        app.add_route(
            f"{prefix}/token",
            chain_endpoint(self.provider.token()),
            methods=["POST"]
        )
        app.add_route(
            f"{prefix}/authorize",
            chain_endpoint(self.provider.authorize(self.authorize_options)),
            methods=["GET", "POST"]
        )

        logger.info(f"OAuth endpoints registered with FastAPI app under {prefix or '/'}")
