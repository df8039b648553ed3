from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.errors import ForbiddenError, UnauthorizedError
from app.core.logger import logger
from app.core.security.jwt import TokenConfig, verify_token
from app.core.settings import settings
from app.v1_0.models import UserRole

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Caller identity handed explicitly to every mutation."""
    user_id: str
    username: Optional[str]
    role: UserRole

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "AuthContext":
        raw_role = claims.get("role")
        try:
            role = UserRole(raw_role)
        except ValueError:
            raise UnauthorizedError("rol desconocido en token", detail=f"role={raw_role}")
        return cls(user_id=str(claims["sub"]), username=claims.get("name"), role=role)


class AuthDeps:
    def __init__(self, config: TokenConfig) -> None:
        self.config = config

    def claims(self, authorization: Optional[str]) -> Dict[str, Any]:
        if not authorization or not authorization.startswith("Bearer "):
            raise ValueError("token faltante")
        token = authorization.split(" ", 1)[1].strip()
        return verify_token(token, self.config)

    def context(self, authorization: Optional[str]) -> AuthContext:
        try:
            claims = self.claims(authorization)
        except ValueError as e:
            logger.warning(f"[Auth] verify_token failed: {e}")
            raise UnauthorizedError(str(e))
        return AuthContext.from_claims(claims)


auth_deps = AuthDeps(
    TokenConfig(
        secret=settings.JWT_SECRET.get_secret_value(),
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
    )
)


async def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> AuthContext:
    if credentials is None:
        raise UnauthorizedError("missing Authorization")
    return auth_deps.context(f"{credentials.scheme} {credentials.credentials}")


def require_roles(*roles: UserRole):
    """Dependency factory: authenticated caller whose role is one of `roles`."""
    wanted = set(roles)

    async def _check(ctx: AuthContext = Depends(get_auth_context)) -> AuthContext:
        if wanted and ctx.role not in wanted:
            raise ForbiddenError("forbidden", detail=f"role={ctx.role.value}")
        return ctx

    return _check
