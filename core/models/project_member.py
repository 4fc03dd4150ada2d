"""Project membership model."""

from typing import ClassVar

from django.db import models
from django.utils import timezone

from core.enums import ProjectRole


class ProjectMember(models.Model):
    """Role of one user in one project.

    Attributes:
        project: The project.
        user: The member.
        role: OWNER, ADMIN, MEMBER or VIEWER.
        joined_at: When the user was added.
    """

    project = models.ForeignKey(
        "core.Project",
        on_delete=models.CASCADE,
        related_name="members",
        db_column="project_id",
    )
    user = models.ForeignKey(
        "core.User",
        on_delete=models.CASCADE,
        related_name="project_memberships",
        db_column="user_id",
    )
    role = models.CharField(
        max_length=10,
        choices=[(role.value, role.value) for role in ProjectRole],
        default=ProjectRole.MEMBER.value,
    )
    joined_at = models.DateTimeField(default=timezone.now)

    class Meta:
        """Django model metadata."""

        db_table = "project_members"
        unique_together: ClassVar[list[list[str]]] = [["project", "user"]]

    def __str__(self) -> str:
        """Return string representation of membership."""
        return f"{self.user_id} as {self.role} in {self.project_id}"
