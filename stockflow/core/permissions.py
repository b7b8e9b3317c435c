"""
Permission system with simplified resource:action format.
"""
from enum import Enum
from typing import Callable, Dict, List, Optional, Set, Union

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from stockflow.core.errors import AuthorizationError
from stockflow.core.security import decode_access_token
from stockflow.models.actor import ActorKind, AdminActor, EmployeeActor


# Permission constants
class PermissionArea(str, Enum):
    """Resource areas for permissions. Also the realtime channel names."""
    STOCK_REQUESTS = "stock_requests"
    STOCK = "stock"
    STORES = "stores"
    SITES = "sites"
    CLIENTS = "clients"
    EGG_FISH_MEDICATION = "egg_fish_medication"


class PermissionAction(str, Enum):
    """Actions for permissions"""
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    APPROVE = "approve"
    ISSUE = "issue"
    RECEIVE = "receive"


def get_permission_string(area: PermissionArea, action: PermissionAction) -> str:
    """
    Generate a permission string in the format 'area:action'

    Args:
        area: Permission area (resource)
        action: Permission action

    Returns:
        Permission string
    """
    return f"{area.value}:{action.value}"


# Permissions granted to each actor kind
ROLE_PERMISSIONS: Dict[ActorKind, List[str]] = {
    ActorKind.ADMIN: [
        get_permission_string(area, action)
        for area in PermissionArea
        for action in PermissionAction
    ],
    ActorKind.EMPLOYEE: [
        # Stock requests - can create, view, comment and confirm receipt
        get_permission_string(PermissionArea.STOCK_REQUESTS, PermissionAction.READ),
        get_permission_string(PermissionArea.STOCK_REQUESTS, PermissionAction.WRITE),
        get_permission_string(PermissionArea.STOCK_REQUESTS, PermissionAction.RECEIVE),

        # Reference data - view only
        get_permission_string(PermissionArea.STOCK, PermissionAction.READ),
        get_permission_string(PermissionArea.STORES, PermissionAction.READ),
        get_permission_string(PermissionArea.SITES, PermissionAction.READ),
        get_permission_string(PermissionArea.CLIENTS, PermissionAction.READ),

        # Medication records are entered by employees
        get_permission_string(PermissionArea.EGG_FISH_MEDICATION, PermissionAction.READ),
        get_permission_string(PermissionArea.EGG_FISH_MEDICATION, PermissionAction.WRITE),
    ],
}

Actor = Union[AdminActor, EmployeeActor]


class PermissionChecker:
    """
    Permission checking service.
    Provides methods to check and enforce permissions for an actor.
    """

    def __init__(self, role_permissions: Optional[Dict[ActorKind, List[str]]] = None):
        self._role_permissions: Dict[ActorKind, Set[str]] = {
            kind: set(perms) for kind, perms in (role_permissions or ROLE_PERMISSIONS).items()
        }

    def get_actor_permissions(self, actor: Actor) -> Set[str]:
        return self._role_permissions.get(ActorKind(actor.kind), set())

    def has_permission(self, actor: Actor, required_permission: str) -> bool:
        """
        Check if an actor has a specific permission.

        Args:
            actor: Authenticated actor
            required_permission: Permission string to check

        Returns:
            True if the actor has the permission, False otherwise
        """
        if actor is None:
            return False
        return required_permission in self.get_actor_permissions(actor)

    def ensure_permission(self, actor: Actor, required_permission: str) -> Actor:
        """
        Raise AuthorizationError unless the actor has the permission.
        """
        if not self.has_permission(actor, required_permission):
            raise AuthorizationError(f"Not enough permissions: {required_permission} required")
        return actor


# Bearer scheme; a missing header is reported by decode_access_token
bearer_scheme = HTTPBearer(auto_error=False)

# Create global permission checker instance
permission_checker = PermissionChecker()


async def get_current_actor(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Actor:
    """
    Get the current actor from the JWT bearer token.

    Raises:
        AuthenticationError: If the token is missing or invalid
    """
    token = credentials.credentials if credentials else None
    return decode_access_token(token)


def has_permission(required_permission: str) -> Callable:
    """
    Dependency to check if the current actor has the required permission.

    Args:
        required_permission: Permission string required for access

    Returns:
        Dependency function resolving to the actor
    """

    async def permission_dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        return permission_checker.ensure_permission(actor, required_permission)

    return permission_dependency
