"""User use cases."""

from doclibrary.application.use_cases.users.user_admin import UserAdminService

__all__ = ["UserAdminService"]
