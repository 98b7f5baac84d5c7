"""
Token Policy Hooks
Metadata-saving and scope-checking hooks with their default behaviour.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from .context import HostRequest

logger = logging.getLogger(__name__)

ScopeCheckResult = Union[bool, str]
SaveTokenMetadata = Callable[[Any, HostRequest], Union[Any, Awaitable[Any]]]
CheckScope = Callable[[str, Any], ScopeCheckResult]


def default_check_scope(required_scope: str, token: Any) -> ScopeCheckResult:
    """Allow iff the required scope was granted to the token."""
    return required_scope in (token.scope or [])


class TokenPolicy:
    """
    Hooks applied around engine results.

    Either hook may be omitted; the defaults pass tokens through unchanged
    and check scopes by membership in ``token.scope``.
    """

    def __init__(
        self,
        save_token_metadata: Optional[SaveTokenMetadata] = None,
        check_scope: Optional[CheckScope] = None,
    ):
        self._save_token_metadata = save_token_metadata
        self._check_scope = check_scope or default_check_scope

    async def save_token_metadata(self, token: Any, request: HostRequest) -> Any:
        """
        Let the backing store annotate or persist a freshly issued token.

        Args:
            token: Token returned by the engine
            request: Host request the token was issued for

        Returns:
            The (possibly enriched) token
        """
        if self._save_token_metadata is None:
            return token

        logger.debug(f"Saving token metadata for {request.method} {request.path}")
        result = self._save_token_metadata(token, request)
        if inspect.isawaitable(result):
            result = await result
        return result

    def check_scope(self, required_scope: str, token: Any) -> ScopeCheckResult:
        """
        Check that a token carries a required scope.

        Returns:
            True if authorized, False to deny with the generic message,
            or a string to deny with that message
        """
        return self._check_scope(required_scope, token)
