"""
Identity tokens (HS256 JWT) carrying ``user_id`` and ``role``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Optional

import jwt

from hiretrack.config.settings import AuthConfig
from hiretrack.core.errors import AuthenticationError, ConfigurationError
from hiretrack.domain.application import Role, utcnow


@dataclass(frozen=True)
class Identity:
    user_id: int
    role: Role
    email: Optional[str] = None


class TokenService:
    def __init__(self, secret: Optional[str], *, algorithm: str = "HS256", expires_in: int = 3600):
        if not secret:
            raise ConfigurationError(message="JWT secret is required (set HIRETRACK_JWT_SECRET)")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_config(cls, config: AuthConfig) -> "TokenService":
        return cls(config.jwt_secret, algorithm=config.algorithm, expires_in=config.token_ttl_seconds)

    def generate_token(self, payload: Dict[str, Any]) -> str:
        now = utcnow()
        claims = dict(payload)
        claims["iat"] = now
        claims["exp"] = now + timedelta(seconds=self.expires_in)
        claims["jti"] = uuid.uuid4().hex
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def issue_for(self, user_id: int, role: Role, email: Optional[str] = None) -> str:
        payload: Dict[str, Any] = {"user_id": int(user_id), "role": Role(role).value}
        if email:
            payload["email"] = email
        return self.generate_token(payload)

    def verify_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError(message="Token expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(message="Invalid token") from e

    def identity(self, token: str) -> Identity:
        claims = self.verify_token(token)
        try:
            return Identity(
                user_id=int(claims["user_id"]),
                role=Role(str(claims["role"]).upper()),
                email=claims.get("email"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise AuthenticationError(message="Token is missing user_id/role claims") from e
