# storefront/domain/permissions.py
from enum import Enum
from typing import Iterable

from storefront.domain.exceptions import AuthorizationDenied


class Permission(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"
    ITEMCREATE = "ITEMCREATE"
    ITEMUPDATE = "ITEMUPDATE"
    ITEMDELETE = "ITEMDELETE"
    PERMISSIONUPDATE = "PERMISSIONUPDATE"


def _tokens(permissions: Iterable) -> set[str]:
    return {p.value if isinstance(p, Permission) else str(p) for p in permissions}


def is_allowed(held: Iterable, required: Iterable) -> bool:
    """Niepuste przeciecie zbiorow = dostep."""
    return bool(_tokens(held) & _tokens(required))


def has_permission(user, required: Iterable) -> None:
    """
    Sprawdza role uzytkownika, rzuca AuthorizationDenied gdy zadna
    z wymaganych rol nie jest przyznana. Bez efektow ubocznych.
    """
    held = list(user.permissions or [])
    required = list(required)

    if not is_allowed(held, required):
        raise AuthorizationDenied(
            required=sorted(_tokens(required)),
            held=sorted(_tokens(held)),
        )
