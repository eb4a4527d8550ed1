from typing import Optional

from fastapi import Cookie, HTTPException

from storefront.services.auth_service import Role, parse_role, require_admin
from storefront.services.exceptions import AuthenticationError, PermissionDeniedError

ROLE_COOKIE = "user_role"


def current_role(user_role: Optional[str] = Cookie(None)) -> Role:
    try:
        return parse_role(user_role)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))


def admin_role(user_role: Optional[str] = Cookie(None)) -> Role:
    role = current_role(user_role)
    try:
        require_admin(role)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return role
