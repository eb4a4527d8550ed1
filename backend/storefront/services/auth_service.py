import enum
import hmac

from storefront.config import settings
from storefront.services.exceptions import AuthenticationError, PermissionDeniedError


class Role(str, enum.Enum):
    ADMIN = "admin"  # everything, including transaction edits
    MANAGER = "manager"  # inventory and categories; transactions are read-only


def authenticate(username: str, password: str) -> Role:
    """
    Check a login against the two fixed credential pairs from settings.
    This gates the back-office screens only; it is not a security boundary.
    """
    pairs = {
        Role.ADMIN: (settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD),
        Role.MANAGER: (settings.MANAGER_USERNAME, settings.MANAGER_PASSWORD),
    }
    for role, (user, pwd) in pairs.items():
        if username == user and hmac.compare_digest((password or "").encode(), pwd.encode()):
            return role
    raise AuthenticationError("Username atau password salah!")


def parse_role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise AuthenticationError("Login required")


def require_admin(role: Role):
    if role != Role.ADMIN:
        raise PermissionDeniedError("Akses Terbatas")
