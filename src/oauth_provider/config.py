"""
OAuth Provider Configuration Module
Holds the backing model, engine factory, policy hooks and engine options.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
import logging

from .engine import ProtocolEngine
from .errors import InvalidArgumentError
from .policy import CheckScope, SaveTokenMetadata

logger = logging.getLogger(__name__)

EngineFactory = Callable[..., ProtocolEngine]

# Environment variable -> engine option
LIFETIME_SETTINGS = {
    'OAUTH_ACCESS_TOKEN_LIFETIME': 'access_token_lifetime',
    'OAUTH_REFRESH_TOKEN_LIFETIME': 'refresh_token_lifetime',
    'OAUTH_AUTHORIZATION_CODE_LIFETIME': 'authorization_code_lifetime',
}

FLAG_SETTINGS = {
    'OAUTH_ALLOW_BEARER_TOKENS_IN_QUERY_STRING': 'allow_bearer_tokens_in_query_string',
    'OAUTH_ALLOW_EMPTY_STATE': 'allow_empty_state',
    'OAUTH_ADD_ACCEPTED_SCOPES_HEADER': 'add_accepted_scopes_header',
    'OAUTH_ADD_AUTHORIZED_SCOPES_HEADER': 'add_authorized_scopes_header',
}


@dataclass
class OAuthServerConfig:
    """Configuration for the OAuth provider and its protocol engine."""

    # Storage / validation backend consumed by the engine
    model: Any = None
    engine_factory: Optional[EngineFactory] = None

    # Policy hooks
    save_token_metadata: Optional[SaveTokenMetadata] = None
    check_scope: Optional[CheckScope] = None

    # Forwarded verbatim to the engine factory
    engine_options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_model(cls, model: Any, engine_factory: EngineFactory, **engine_options: Any) -> 'OAuthServerConfig':
        """
        Create a configuration taking the policy hooks from the model.

        The model may define ``save_token_metadata(token, request)`` and
        ``check_scope(required_scope, token)``; whichever it lacks falls back
        to the default behaviour.
        """
        return cls(
            model=model,
            engine_factory=engine_factory,
            save_token_metadata=getattr(model, 'save_token_metadata', None),
            check_scope=getattr(model, 'check_scope', None),
            engine_options=engine_options,
        )

    @classmethod
    def from_environment(cls, model: Any, engine_factory: EngineFactory) -> 'OAuthServerConfig':
        """Create a configuration with engine options read from environment variables."""

        engine_options: Dict[str, Any] = {}

        for env_name, option in LIFETIME_SETTINGS.items():
            raw = os.getenv(env_name)
            if raw is None or not raw.strip():
                continue
            try:
                lifetime = int(raw)
            except ValueError as err:
                raise ValueError(f"{env_name} must be an integer number of seconds, got {raw!r}") from err
            if lifetime <= 0:
                raise ValueError(f"{env_name} must be positive, got {lifetime}")
            engine_options[option] = lifetime

        for env_name, option in FLAG_SETTINGS.items():
            raw = os.getenv(env_name)
            if raw is None or not raw.strip():
                continue
            engine_options[option] = raw.strip().lower() == 'true'

        config = cls.from_model(model, engine_factory, **engine_options)
        config.validate()
        logger.info(f"OAuth configuration loaded with engine options: {sorted(engine_options)}")
        return config

    def validate(self) -> None:
        """Validate the configuration."""
        if self.model is None:
            raise InvalidArgumentError('Missing parameter: `model`')

        if self.engine_factory is None:
            raise InvalidArgumentError('Missing parameter: `engine_factory`')

    def create_engine(self) -> ProtocolEngine:
        """Build the protocol engine, forwarding the model and engine options."""
        self.validate()
        return self.engine_factory(model=self.model, **self.engine_options)

    def __str__(self) -> str:
        """String representation of the config (hiding the model)."""
        factory = getattr(self.engine_factory, '__name__', repr(self.engine_factory))
        return (
            f"OAuthServerConfig(engine_factory={factory}, "
            f"save_token_metadata={'custom' if self.save_token_metadata else 'default'}, "
            f"check_scope={'custom' if self.check_scope else 'default'}, "
            f"engine_options={self.engine_options})"
        )
