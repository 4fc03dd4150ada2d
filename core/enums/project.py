"""Project membership roles."""

from enum import Enum


class ProjectRole(str, Enum):
    """Role of a user inside one project."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"
    VIEWER = "VIEWER"

    @classmethod
    def managers(cls) -> tuple["ProjectRole", ...]:
        """Roles allowed to manage members and delete tasks."""
        return (cls.OWNER, cls.ADMIN)

    @classmethod
    def contributors(cls) -> tuple["ProjectRole", ...]:
        """Roles allowed to create and edit tasks and comments."""
        return (cls.OWNER, cls.ADMIN, cls.MEMBER)
