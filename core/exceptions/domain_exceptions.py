"""Exceptions raised by the domain services."""

from uuid import UUID

from django.core.exceptions import ImproperlyConfigured

from rest_framework import status


class DomainError(Exception):
    """Base exception for failures the HTTP layer maps to a status code."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        """Initialize domain error.

        Args:
            message: Error message shown to the client
            status_code: HTTP status code the failure maps to
        """
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class EntityNotFoundError(DomainError):
    """A referenced record does not exist (404)."""

    entity_name = "Entity"

    def __init__(self, entity_id: UUID | str):
        """Initialize not found error.

        Args:
            entity_id: ID of the record that was not found
        """
        self.entity_id = entity_id
        super().__init__(
            message=f"{self.entity_name} with ID {entity_id} not found",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class NotificationNotFoundError(EntityNotFoundError):
    """Notification not found (404)."""

    entity_name = "Notification"


class ProjectNotFoundError(EntityNotFoundError):
    """Project not found (404)."""

    entity_name = "Project"


class TaskNotFoundError(EntityNotFoundError):
    """Task not found (404)."""

    entity_name = "Task"


class CommentNotFoundError(EntityNotFoundError):
    """Comment not found (404)."""

    entity_name = "Comment"


class UserNotFoundError(EntityNotFoundError):
    """User not found (404)."""

    entity_name = "User"


class NotificationOwnershipError(DomainError):
    """The caller does not own the notification (403)."""

    def __init__(self, notification_id: UUID | str):
        """Initialize ownership error.

        Args:
            notification_id: ID of the notification the caller tried to touch
        """
        self.notification_id = notification_id
        super().__init__(
            message="You do not have access to this notification",
            status_code=status.HTTP_403_FORBIDDEN,
        )


class ProjectPermissionDeniedError(DomainError):
    """The caller is not a member of the project or lacks the role (403)."""

    def __init__(self, message: str = "Insufficient permissions"):
        """Initialize permission error.

        Args:
            message: Which check failed
        """
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN)


class CommentPermissionDeniedError(DomainError):
    """The caller may not edit or delete the comment (403)."""

    def __init__(self, message: str = "You can only modify your own comments"):
        """Initialize comment permission error."""
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN)


class ConflictError(DomainError):
    """The request conflicts with existing state (409)."""

    def __init__(self, message: str):
        """Initialize conflict error."""
        super().__init__(message=message, status_code=status.HTTP_409_CONFLICT)


class HubNotInitializedError(ImproperlyConfigured):
    """The realtime hub was used before install_hub() ran at process start."""

    def __init__(self) -> None:
        """Initialize hub configuration error."""
        super().__init__(
            "Realtime hub is not initialized; call install_hub() at startup"
        )
