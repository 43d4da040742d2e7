"""The acting user and the permission checks the project screens need."""

from __future__ import annotations

from dataclasses import dataclass, field

from projectdesk.db.models.user import User
from projectdesk.utils.json_helpers import safe_parse_json_list

KNOWN_PERMISSIONS = frozenset(
    {"add_project", "add_subprojects", "edit_project", "copy_projects"}
)


@dataclass(frozen=True)
class Actor:
    login: str | None = None
    admin: bool = False
    permissions: frozenset[str] = field(default_factory=frozenset)

    @property
    def anonymous(self) -> bool:
        return self.login is None

    def allowed_to(self, permission: str) -> bool:
        """Admins may do everything; others need the permission granted."""
        if self.admin:
            return True
        return permission in self.permissions

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        granted = frozenset(safe_parse_json_list(user.permissions_json)) & KNOWN_PERMISSIONS
        return cls(login=user.login, admin=bool(user.admin), permissions=granted)


ANONYMOUS = Actor()
