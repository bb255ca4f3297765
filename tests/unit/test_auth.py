"""
Token and role authorization tests
"""

import jwt
import pytest

from hiretrack.config.settings import AuthConfig
from hiretrack.core.errors import AuthenticationError, AuthorizationError, ConfigurationError
from hiretrack.domain.application import Role
from hiretrack.infrastructure.auth import TokenService, authorize, require_role


class TestTokenService:
    def test_round_trip_identity(self):
        service = TokenService("secret")
        token = service.issue_for(7, Role.RECRUITER, email="r@x.test")
        identity = service.identity(token)
        assert identity.user_id == 7
        assert identity.role == Role.RECRUITER
        assert identity.email == "r@x.test"

    def test_claims_include_expiry_and_jti(self):
        service = TokenService("secret", expires_in=60)
        claims = service.verify_token(service.issue_for(1, Role.CANDIDATE))
        assert claims["exp"] - claims["iat"] == 60
        assert claims["jti"]

    def test_expired_token(self):
        service = TokenService("secret", expires_in=-10)
        with pytest.raises(AuthenticationError) as exc:
            service.verify_token(service.issue_for(1, Role.CANDIDATE))
        assert exc.value.message == "Token expired"

    def test_wrong_secret(self):
        token = TokenService("secret").issue_for(1, Role.CANDIDATE)
        with pytest.raises(AuthenticationError) as exc:
            TokenService("other").verify_token(token)
        assert exc.value.message == "Invalid token"

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError):
            TokenService("secret").identity("not-a-token")

    def test_missing_claims(self):
        token = jwt.encode({"sub": "x"}, "secret", algorithm="HS256")
        with pytest.raises(AuthenticationError):
            TokenService("secret").identity(token)

    def test_secret_required(self):
        with pytest.raises(ConfigurationError):
            TokenService.from_config(AuthConfig())


class TestRoles:
    def test_authorize_case_insensitive(self):
        assert authorize(["recruiter", Role.HIRING_MANAGER], "RECRUITER") is True
        assert authorize([Role.RECRUITER], "recruiter") is True

    def test_authorize_rejects(self):
        assert authorize([Role.RECRUITER], Role.CANDIDATE) is False
        assert authorize([Role.RECRUITER], "") is False
        assert authorize([], Role.ADMIN) is False

    def test_require_role_raises(self):
        with pytest.raises(AuthorizationError) as exc:
            require_role([Role.RECRUITER], Role.CANDIDATE)
        assert exc.value.code == "FORBIDDEN"
        require_role([Role.RECRUITER], Role.RECRUITER)
