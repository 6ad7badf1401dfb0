"""Project access checks.

Authorization is an external concern; this module defines the interface
the push operations call and a catalog-backed implementation that checks
project membership and role.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import AuthzError, NotFoundError
from .store import TermStore


class ProjectAction(str, Enum):
    EXPORT_TRANSLATION = "export_translation"


# Roles allowed to perform each action
ROLE_PERMISSIONS: dict[ProjectAction, set[str]] = {
    ProjectAction.EXPORT_TRANSLATION: {"admin", "editor", "viewer"},
}


@dataclass(frozen=True)
class Membership:
    project_id: str
    caller: str
    role: str


class Authorizer(ABC):
    @abstractmethod
    def authorize(self, caller: Optional[str], project_id: str, action: ProjectAction) -> Membership:
        """Return the caller's membership if it permits the action.

        Raises:
            AuthzError: If the caller is unknown or lacks permission
            NotFoundError: If the project does not exist
        """


class CatalogAuthorizer(Authorizer):
    def __init__(self, store: TermStore):
        self.store = store

    def authorize(self, caller: Optional[str], project_id: str, action: ProjectAction) -> Membership:
        if not caller:
            raise AuthzError("Missing caller identity")
        if not self.store.project_exists(project_id):
            raise NotFoundError("Project", project_id)

        role = self.store.project_members(project_id).get(caller)
        if role is None or role not in ROLE_PERMISSIONS.get(action, set()):
            raise AuthzError(f"Caller may not {action.value.replace('_', ' ')} in project {project_id}")
        return Membership(project_id=project_id, caller=caller, role=role)


def caller_for_token(token: Optional[str], tokens: dict[str, str]) -> str:
    """Resolve a bearer token to a caller identity."""
    if not token or token not in tokens:
        raise AuthzError("Invalid or missing token")
    return tokens[token]
