"""Background job sending the email copy of a notification.

Queued by NotificationService.create when the owner's preferences allow
email for the notification kind. Delivery failures are retried through the
rq scheduler with exponential backoff.
"""

from datetime import timedelta
from uuid import UUID

from django.conf import settings

import django_rq
import structlog

from core.models import Notification
from core.services.email_service import EmailService

logger = structlog.get_logger(__name__)

NOTIFICATION_EMAIL_TEMPLATE = "emails/notification.html"


def retry_delay(attempt: int) -> timedelta:
    """Delay before the attempt after ``attempt``: 2s, 4s, 8s, ..."""
    return timedelta(
        seconds=settings.NOTIFICATION_EMAIL_BACKOFF_SECONDS * 2 ** (attempt - 1)
    )


def send_notification_email_job(notification_id: str, attempt: int = 1) -> None:
    """Email a notification to its owner.

    Args:
        notification_id: UUID of the notification to send.
        attempt: 1 for the first delivery, incremented on each retry.
    """
    notification = (
        Notification.objects.select_related("user")
        .filter(notification_id=UUID(notification_id))
        .first()
    )
    if notification is None:
        logger.warning(
            "notification_email_target_missing", notification_id=notification_id
        )
        return

    user = notification.user
    context = {
        "user_name": user.full_name,
        "title": notification.title,
        "message": notification.message,
        "kind": notification.kind,
        "frontend_url": settings.FRONTEND_URL,
    }

    try:
        EmailService().send_template_email(
            to_email=user.email,
            subject=notification.title,
            template_name=NOTIFICATION_EMAIL_TEMPLATE,
            context=context,
        )
    except ValueError as e:
        logger.error(
            "notification_email_rejected",
            notification_id=notification_id,
            error=str(e),
        )
        return
    except OSError as e:
        _retry_or_give_up(notification_id, attempt, e)
        return

    logger.info(
        "notification_email_sent",
        notification_id=notification_id,
        attempt=attempt,
    )


def _retry_or_give_up(notification_id: str, attempt: int, error: Exception) -> None:
    if attempt >= settings.NOTIFICATION_EMAIL_MAX_ATTEMPTS:
        logger.error(
            "notification_email_failed_permanently",
            notification_id=notification_id,
            attempts=attempt,
            error=str(error),
        )
        return

    delay = retry_delay(attempt)
    django_rq.get_scheduler("default").enqueue_in(
        delay,
        send_notification_email_job,
        notification_id,
        attempt + 1,
    )
    logger.warning(
        "notification_email_retry_scheduled",
        notification_id=notification_id,
        attempt=attempt,
        delay_seconds=delay.total_seconds(),
        error=str(error),
    )
