"""Email service for sending notification emails via SMTP."""

import re
import smtplib
from email.message import EmailMessage
from typing import Any

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.template.loader import render_to_string

import structlog

logger = structlog.get_logger(__name__)


class EmailService:
    """Renders HTML emails and delivers them over SMTP.

    Each message carries a plain text part derived from the HTML.
    """

    def __init__(self) -> None:
        """Initialize email service with SMTP configuration."""
        self.smtp_host = settings.EMAIL_HOST
        self.smtp_port = settings.EMAIL_PORT
        self.smtp_user = settings.EMAIL_HOST_USER
        self.smtp_password = settings.EMAIL_HOST_PASSWORD
        self.use_tls = settings.EMAIL_USE_TLS
        self.from_email = settings.DEFAULT_FROM_EMAIL

    def send_email(self, to_email: str, subject: str, html_content: str) -> None:
        """Send one HTML email.

        Args:
            to_email: Recipient email address
            subject: Email subject line
            html_content: HTML body

        Raises:
            ValueError: If the recipient address is invalid
            smtplib.SMTPException: If the SMTP server rejects the message
            OSError: If the SMTP server cannot be reached
        """
        try:
            validate_email(to_email)
        except ValidationError as e:
            msg = f"Invalid email address: {to_email}"
            raise ValueError(msg) from e

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.from_email
        message["To"] = to_email
        message.set_content(html_to_plain(html_content))
        message.add_alternative(html_content, subtype="html")

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
                if self.use_tls:
                    server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(message)
        except smtplib.SMTPException as e:
            logger.error(
                "email_send_failed",
                to_email=to_email,
                subject=subject,
                error=str(e),
            )
            raise

        logger.info("email_sent", to_email=to_email, subject=subject)

    def send_template_email(
        self,
        to_email: str,
        subject: str,
        template_name: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Render a Django template and send it.

        Args:
            to_email: Recipient email address
            subject: Email subject line
            template_name: Template path (e.g., 'emails/notification.html')
            context: Template context variables

        Raises:
            django.template.TemplateDoesNotExist: If the template is missing
            ValueError, smtplib.SMTPException, OSError: See send_email
        """
        html_content = render_to_string(template_name, context or {})
        self.send_email(to_email=to_email, subject=subject, html_content=html_content)


def html_to_plain(html: str) -> str:
    """Strip tags and common entities from an HTML body."""
    text = re.sub(r"<(style|script)[^>]*>.*?</\1>", "", html, flags=re.DOTALL)
    text = re.sub(r"<br\s*/?>|</p>|</h\d>", "\n", text)
    text = re.sub(r"<[^>]+>", "", text)
    for entity, char in (
        ("&nbsp;", " "),
        ("&lt;", "<"),
        ("&gt;", ">"),
        ("&quot;", '"'),
        ("&#x27;", "'"),
        ("&#39;", "'"),
        ("&amp;", "&"),
    ):
        text = text.replace(entity, char)
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n\s*\n+", "\n\n", text)
    return text.strip()
