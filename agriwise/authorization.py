import logging

from fastapi import Depends, Header, HTTPException
from firebase_admin import auth

from agriwise.config import AUTH_MODE
from agriwise.models.user import Role, UserContext
from agriwise.services.storage import get_repository

logger = logging.getLogger(__name__)


def _parse_role(value):
    try:
        return Role((value or "").strip().lower())
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Unknown role '{value}'")


def _user_from_headers(x_user_id, x_user_role):
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=401, detail="Missing X-User-Id or X-User-Role header")
    return UserContext(user_id=x_user_id, role=_parse_role(x_user_role))


def _user_from_token(authorization, repository):
    from agriwise.services.firebase_service import initialize_firebase

    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")

    initialize_firebase()
    try:
        claims = auth.verify_id_token(authorization.split(" ", 1)[1].strip())
    except (auth.InvalidIdTokenError, auth.RevokedIdTokenError, ValueError) as e:
        logger.warning(f"Rejected ID token: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    role = claims.get("role")
    if role is None:
        profile = repository.get_profile(claims["uid"])
        role = profile.role.value if profile else Role.FARMER.value
    return UserContext(user_id=claims["uid"], role=_parse_role(role), email=claims.get("email"))


def get_current_user(
        authorization: str = Header(None),
        x_user_id: str = Header(None),
        x_user_role: str = Header(None),
        repository=Depends(get_repository),
):
    """Resolve the caller into an explicit UserContext"""
    if AUTH_MODE == "header":
        return _user_from_headers(x_user_id, x_user_role)
    return _user_from_token(authorization, repository)


def require_role(*roles):
    """Dependency that only lets the given roles through"""

    def check_role(user: UserContext = Depends(get_current_user)):
        if user.role not in roles:
            allowed = ", ".join(role.value for role in roles)
            raise HTTPException(status_code=403, detail=f"Only {allowed} accounts can do this")
        return user

    return check_role
