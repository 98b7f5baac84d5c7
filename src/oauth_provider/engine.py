"""
OAuth Protocol Engine Boundary
Value objects exchanged with the protocol engine and the engine interface itself.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from .context import HostRequest, ResponseState
from .errors import InvalidArgumentError


@dataclass
class Token:
    """Access token granted by the engine."""
    access_token: str
    scope: List[str] = field(default_factory=list)
    access_token_expires_at: Optional[datetime] = None
    refresh_token: Optional[str] = None
    refresh_token_expires_at: Optional[datetime] = None
    client: Optional[Dict[str, Any]] = None
    user: Any = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AuthorizationCode:
    """Authorization code issued by the engine."""
    authorization_code: str
    redirect_uri: str = ""
    scope: List[str] = field(default_factory=list)
    expires_at: Optional[datetime] = None
    client: Optional[Dict[str, Any]] = None
    user: Any = None


@dataclass
class OAuthRequest:
    """Request handed to the protocol engine."""
    method: str
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.method:
            raise InvalidArgumentError("Missing parameter: `method`")
        self.headers = {key.lower(): value for key, value in self.headers.items()}

    def get(self, header: str) -> Optional[str]:
        return self.headers.get(header.lower())

    @classmethod
    def from_host(cls, request: HostRequest) -> 'OAuthRequest':
        return cls(
            method=request.method,
            headers=dict(request.headers),
            query=dict(request.query),
            body=dict(request.body),
        )


@dataclass
class OAuthResponse:
    """Response the protocol engine writes into."""
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = field(default_factory=dict)

    def get(self, header: str) -> Optional[str]:
        return self.headers.get(header)

    def set(self, header: str, value: str) -> None:
        self.headers[header] = value

    def redirect(self, url: str) -> None:
        self.set("Location", url)
        self.status = 302

    @classmethod
    def from_state(cls, response: ResponseState) -> 'OAuthResponse':
        body = copy.copy(response.body) if response.body is not None else {}
        return cls(headers=dict(response.headers), body=body)


class ProtocolEngine(Protocol):
    """
    OAuth 2.0 protocol engine.

    Implementations validate clients, grants and tokens against their model
    and raise ``OAuthError`` subclasses on failure.
    """

    async def authenticate(self, request: OAuthRequest, response: OAuthResponse) -> Any:
        ...

    async def authorize(
        self,
        request: OAuthRequest,
        response: OAuthResponse,
        options: Optional[Dict[str, Any]] = None,
    ) -> Any:
        ...

    async def token(self, request: OAuthRequest, response: OAuthResponse) -> Any:
        ...
