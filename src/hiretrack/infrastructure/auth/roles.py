from __future__ import annotations

from typing import Iterable, Union

from hiretrack.core.errors import AuthorizationError
from hiretrack.domain.application import Role

RoleLike = Union[Role, str]


def _normalize(role: RoleLike) -> str:
    return (role.value if isinstance(role, Role) else str(role or "")).strip().upper()


def authorize(required_roles: Iterable[RoleLike], actual_role: RoleLike) -> bool:
    """Allow when ``actual_role`` is one of ``required_roles`` (case-insensitive)."""
    actual = _normalize(actual_role)
    return bool(actual) and actual in {_normalize(r) for r in required_roles}


def require_role(required_roles: Iterable[RoleLike], actual_role: RoleLike) -> None:
    required = list(required_roles)
    if not authorize(required, actual_role):
        raise AuthorizationError(
            message="Forbidden: insufficient role",
            context={"required": [_normalize(r) for r in required], "actual": _normalize(actual_role)},
        )
