"""
OAuth 2.0 Error Types
Structured protocol errors carrying an HTTP status code and response headers.
"""

from typing import Any, Dict, Mapping, Optional


class OAuthError(Exception):
    """Base OAuth protocol error."""

    name = "server_error"
    default_code = 500

    def __init__(
        self,
        message: str = "",
        code: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
    ):
        self.message = message
        self.code = code if code is not None else self.default_code
        self.headers: Dict[str, str] = dict(headers or {})
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return self.code

    def to_dict(self) -> Dict[str, Any]:
        """Convert to an OAuth 2.0 error response body."""
        response = {"error": self.name}
        if self.message:
            response["error_description"] = self.message
        return response

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code}, message={self.message!r})"


class InvalidArgumentError(OAuthError):
    """Missing or invalid configuration supplied by the application."""

    name = "invalid_argument"
    default_code = 500


class InvalidScopeError(OAuthError):
    """The requested scope is invalid, unknown, or not granted."""

    name = "invalid_scope"
    default_code = 400


class InvalidRequestError(OAuthError):
    name = "invalid_request"
    default_code = 400


class InvalidGrantError(OAuthError):
    name = "invalid_grant"
    default_code = 400


class AccessDeniedError(OAuthError):
    name = "access_denied"
    default_code = 400


class InvalidTokenError(OAuthError):
    """The access token provided is expired, revoked, or malformed."""

    name = "invalid_token"
    default_code = 401


class UnauthorizedRequestError(OAuthError):
    """The request lacks any authentication information."""

    name = "unauthorized_request"
    default_code = 401
