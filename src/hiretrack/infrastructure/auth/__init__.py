from .roles import authorize, require_role
from .tokens import Identity, TokenService

__all__ = ["Identity", "TokenService", "authorize", "require_role"]
