"""FastAPI dependencies for authentication and role gating."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from canteen.exceptions import AuthError, ForbiddenError
from canteen.identity.security import decode_access_token
from canteen.identity.user import User, UserRole
from canteen.utils.logging import add_context

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> User:
    """Resolve the bearer token to a live user."""
    if credentials is None or not credentials.credentials:
        raise AuthError({"token": ["Not authorized to access this route. Please login."]})

    claims = decode_access_token(credentials.credentials)
    try:
        user = current_domain.repository_for(User).get(claims["user_id"])
    except ObjectNotFoundError as exc:
        raise AuthError({"token": ["User no longer exists"]}) from exc

    add_context(user_id=str(user.id), role=user.role)
    return user


def require_roles(*roles: str):
    """Dependency factory admitting only users whose role is in ``roles``."""
    allowed = frozenset(roles)

    async def _check_role(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise ForbiddenError({"role": [f"Role '{user.role}' is not authorized to access this route"]})
        return user

    return _check_role


require_admin = require_roles(UserRole.ADMIN.value)
