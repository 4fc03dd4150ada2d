"""Factory helpers for test data generation."""

from datetime import timedelta

from django.conf import settings
from django.utils import timezone

import jwt
from faker import Faker

from core.enums import NotificationKind, ProjectRole, TaskPriority, TaskStatus
from core.models import Comment, Notification, Project, ProjectMember, Task, User

fake = Faker()


def create_user(**overrides) -> User:
    """Create an active user with unique email and username."""
    fields = {
        "email": fake.unique.email(),
        "username": fake.unique.user_name().replace(".", "_")[:50],
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
    }
    fields.update(overrides)
    return User.objects.create(**fields)


def create_project(owner: User | None = None, **overrides) -> Project:
    """Create a project, making ``owner`` its OWNER when given."""
    fields = {
        "name": fake.catch_phrase()[:200],
        "description": fake.sentence(),
    }
    fields.update(overrides)
    project = Project.objects.create(**fields)
    if owner is not None:
        add_member(project, owner, ProjectRole.OWNER)
    return project


def add_member(
    project: Project, user: User, role: ProjectRole = ProjectRole.MEMBER
) -> ProjectMember:
    """Add ``user`` to ``project`` with ``role``."""
    return ProjectMember.objects.create(project=project, user=user, role=role.value)


def create_task(project: Project, creator: User, **overrides) -> Task:
    """Create a TODO task of medium priority."""
    fields = {
        "title": fake.sentence(nb_words=4)[:255],
        "description": fake.paragraph(),
        "status": TaskStatus.TODO.value,
        "priority": TaskPriority.MEDIUM.value,
    }
    fields.update(overrides)
    return Task.objects.create(project=project, creator=creator, **fields)


def create_comment(task: Task, author: User, content: str | None = None) -> Comment:
    """Create a comment on ``task``."""
    return Comment.objects.create(
        task=task, author=author, content=content or fake.sentence()
    )


def create_notification(user: User, **overrides) -> Notification:
    """Create an unread OTHER notification directly in the database."""
    fields = {
        "kind": NotificationKind.OTHER.value,
        "title": fake.sentence(nb_words=3),
        "message": fake.sentence(),
        "metadata": {"version": 1, "kind": "OTHER", "attributes": {}},
    }
    fields.update(overrides)
    return Notification.objects.create(user=user, **fields)


def make_token(user_id, expires_in: timedelta = timedelta(hours=1), **claims) -> str:
    """Encode an access token for ``user_id`` signed with the test secret."""
    payload = {
        "sub": str(user_id),
        "exp": timezone.now() + expires_in,
        **claims,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm="HS256")
