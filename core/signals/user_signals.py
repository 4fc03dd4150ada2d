"""Signal receivers for user records."""

from django.db.models.signals import post_save
from django.dispatch import receiver

import structlog

from core.models import NotificationPreference

logger = structlog.get_logger(__name__)


@receiver(post_save, sender="core.User")
def create_notification_preferences(
    sender: type,  # noqa: ARG001
    instance,
    created: bool,
    **kwargs,  # noqa: ARG001
) -> None:
    """Give a new user the default notification preferences (all enabled).

    Args:
        sender: The model class (User)
        instance: The User instance being saved
        created: True if this is a new user
        **kwargs: Additional signal arguments
    """
    if not created:
        return

    _, was_created = NotificationPreference.objects.get_or_create(user=instance)
    if was_created:
        logger.info("notification_preferences_created", user_id=str(instance.user_id))
