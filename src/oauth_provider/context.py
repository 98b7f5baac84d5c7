"""
Request Context for the Middleware Chain
Per-request context passed between chained handlers, plus the chain composer.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Sequence, Union

from starlette.requests import Request

from .errors import InvalidRequestError

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@dataclass
class HostRequest:
    """Inbound request as seen by chain handlers."""
    method: str
    path: str = "/"
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)
    client_host: Optional[str] = None

    def __post_init__(self):
        self.headers = {key.lower(): value for key, value in self.headers.items()}

    def get(self, header: str) -> Optional[str]:
        """Get a request header, case-insensitively."""
        return self.headers.get(header.lower())

    @classmethod
    async def from_starlette(cls, request: Request) -> 'HostRequest':
        """
        Build a host request from a Starlette request.

        Form and JSON bodies are parsed; any other body is ignored.
        """
        content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

        body: Dict[str, Any] = {}
        if content_type in FORM_CONTENT_TYPES:
            form = await request.form()
            body = dict(form)
        elif content_type == "application/json":
            try:
                payload = await request.json()
            except ValueError:
                raise InvalidRequestError("Invalid request: malformed JSON body") from None
            if isinstance(payload, dict):
                body = payload

        return cls(
            method=request.method,
            path=request.url.path,
            headers=dict(request.headers),
            query=dict(request.query_params),
            body=body,
            client_host=request.client.host if request.client else None,
        )


@dataclass
class ResponseState:
    """Outbound response fields written by chain handlers."""
    status: Optional[int] = None
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None

    def set(self, headers: Mapping[str, str]) -> None:
        """Merge a mapping of headers into the response."""
        self.headers.update(headers)


@dataclass
class TokenState:
    token: Any


@dataclass
class CodeState:
    code: Any


OAuthState = Union[TokenState, CodeState]


@dataclass
class RequestState:
    """Per-request state shared by the handlers of one chain run."""
    oauth: Optional[OAuthState] = None


@dataclass
class RequestContext:
    request: HostRequest
    response: ResponseState = field(default_factory=ResponseState)
    state: RequestState = field(default_factory=RequestState)


Next = Callable[[], Awaitable[Any]]
Middleware = Callable[[RequestContext, Next], Awaitable[Any]]
Handler = Callable[..., Awaitable[Any]]


def compose(middleware: Sequence[Middleware]) -> Handler:
    """
    Compose middleware into a single handler.

    Each middleware receives the context and a ``next`` coroutine function
    that runs the rest of the chain and returns its result.

    Args:
        middleware: Ordered middleware callables

    Returns:
        Handler called as ``await handler(ctx)`` or ``await handler(ctx, next)``

    Raises:
        TypeError: If any element is not callable
    """
    middleware = list(middleware)
    for fn in middleware:
        if not callable(fn):
            raise TypeError(f"Middleware must be callable, got {type(fn).__name__}")

    async def handler(ctx: RequestContext, next: Optional[Next] = None) -> Any:
        last_index = -1

        async def dispatch(index: int) -> Any:
            nonlocal last_index
            if index <= last_index:
                raise RuntimeError("next() called multiple times")
            last_index = index

            if index == len(middleware):
                return await next() if next is not None else None

            return await middleware[index](ctx, lambda: dispatch(index + 1))

        return await dispatch(0)

    return handler
