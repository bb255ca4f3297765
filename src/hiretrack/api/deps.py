from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from hiretrack.application.services import ApplicationLifecycleEngine
from hiretrack.config.settings import get_settings
from hiretrack.core.di import Container
from hiretrack.core.errors import AuthenticationError
from hiretrack.domain.application import Role
from hiretrack.infrastructure.auth import Identity, TokenService, require_role

_bearer = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_engine(container: Container = Depends(get_container)) -> ApplicationLifecycleEngine:
    return container.resolve(ApplicationLifecycleEngine)


def get_token_service(request: Request) -> TokenService:
    tokens: Optional[TokenService] = getattr(request.app.state, "token_service", None)
    if tokens is None:
        tokens = TokenService.from_config(get_settings().auth)
        request.app.state.token_service = tokens
    return tokens


def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message="Missing bearer token")
    return tokens.identity(credentials.credentials)


def require_roles(*roles: Role) -> Callable[..., Identity]:
    """Dependency factory: authenticated identity whose role is one of ``roles``."""

    def _dependency(identity: Identity = Depends(get_identity)) -> Identity:
        require_role(roles, identity.role)
        return identity

    return _dependency
