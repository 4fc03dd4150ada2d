"""Exception handling utilities for the Track It API."""

from core.exceptions.domain_exceptions import (
    CommentNotFoundError,
    CommentPermissionDeniedError,
    ConflictError,
    DomainError,
    EntityNotFoundError,
    HubNotInitializedError,
    NotificationNotFoundError,
    NotificationOwnershipError,
    ProjectNotFoundError,
    ProjectPermissionDeniedError,
    TaskNotFoundError,
    UserNotFoundError,
)
from core.exceptions.handlers import custom_exception_handler

__all__ = [
    "CommentNotFoundError",
    "CommentPermissionDeniedError",
    "ConflictError",
    "DomainError",
    "EntityNotFoundError",
    "HubNotInitializedError",
    "NotificationNotFoundError",
    "NotificationOwnershipError",
    "ProjectNotFoundError",
    "ProjectPermissionDeniedError",
    "TaskNotFoundError",
    "UserNotFoundError",
    "custom_exception_handler",
]
