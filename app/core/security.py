"""
Garde d'autorisation : prédicats purs sur le rôle résolu.

Aucun état n'est conservé entre deux appels.
"""
from typing import Callable, Union

from app.core.errors import AuthorizationError
from app.models.user import CurrentUser, UserRole

RoleLike = Union[UserRole, str]

ROLE_HIERARCHY = {
    UserRole.BUYER: 1,
    UserRole.AGENT: 2,
    UserRole.ADMIN: 3,
}


def _role(value: RoleLike) -> UserRole:
    return value if isinstance(value, UserRole) else UserRole(value)


def is_agent(role: RoleLike) -> bool:
    """Agent ou admin"""
    return _role(role) in (UserRole.AGENT, UserRole.ADMIN)


def is_admin(role: RoleLike) -> bool:
    return _role(role) == UserRole.ADMIN


def is_buyer(role: RoleLike) -> bool:
    """Acheteur ou admin (les endpoints acheteur admettent l'admin)"""
    return _role(role) in (UserRole.BUYER, UserRole.ADMIN)


def has_required_role(user_role: RoleLike, required_role: RoleLike) -> bool:
    """Vrai si le rôle est au moins aussi privilégié que required_role"""
    return ROLE_HIERARCHY[_role(user_role)] >= ROLE_HIERARCHY[_role(required_role)]


def has_exact_role(user_role: RoleLike, required_role: RoleLike) -> bool:
    return _role(user_role) == _role(required_role)


def require_role(user: CurrentUser, predicate: Callable[[RoleLike], bool], message: str) -> None:
    """Lève AuthorizationError si le prédicat refuse le rôle"""
    if not predicate(user.role):
        raise AuthorizationError(message)


def is_owner_or_admin(owner_id: str, user: CurrentUser) -> bool:
    return owner_id == user.id or is_admin(user.role)


def ensure_owner(owner_id: str, user: CurrentUser, message: str) -> None:
    if not is_owner_or_admin(owner_id, user):
        raise AuthorizationError(message)
