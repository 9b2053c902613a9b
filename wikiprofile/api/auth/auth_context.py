"""Per-request authentication context."""

import uuid
from dataclasses import dataclass

from wikiprofile.api.user.user_model import Role, User
from wikiprofile.core.errors import ForbiddenError


@dataclass(frozen=True)
class AuthContext:
    """
    The identity acting on one request. Built by the auth dependency from the
    bearer token and the stored user, and passed explicitly to services.
    """

    user_id: uuid.UUID
    role: Role

    @classmethod
    def for_user(cls, user: User) -> "AuthContext":
        return cls(user_id=user.id, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def has_role(self, role: Role) -> bool:
        return self.role.at_least(role)


def ensure_admin(actor: AuthContext) -> None:
    if not actor.is_admin:
        raise ForbiddenError("Admin access required")
