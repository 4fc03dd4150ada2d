"""Tests for EmailService."""

import smtplib
from unittest.mock import MagicMock, patch

from django.test import SimpleTestCase, override_settings

from core.services.email_service import EmailService, html_to_plain


@override_settings(
    EMAIL_HOST="smtp.test",
    EMAIL_PORT=2525,
    EMAIL_HOST_USER="mailer",
    EMAIL_HOST_PASSWORD="secret",
    EMAIL_USE_TLS=True,
    DEFAULT_FROM_EMAIL="noreply@trackit.test",
)
class TestEmailService(SimpleTestCase):
    """Test suite for EmailService."""

    def setUp(self):
        """Set up test fixtures."""
        self.email_service = EmailService()

    @patch("core.services.email_service.smtplib.SMTP")
    def test_send_email_success(self, mock_smtp_class):
        """The message goes out over TLS with login and both parts."""
        mock_smtp = MagicMock()
        mock_smtp_class.return_value.__enter__.return_value = mock_smtp

        self.email_service.send_email(
            to_email="ada@example.com",
            subject="Task assigned",
            html_content="<p>Hello <b>Ada</b></p>",
        )

        mock_smtp_class.assert_called_once_with("smtp.test", 2525, timeout=30)
        mock_smtp.starttls.assert_called_once()
        mock_smtp.login.assert_called_once_with("mailer", "secret")
        message = mock_smtp.send_message.call_args[0][0]
        self.assertEqual(message["To"], "ada@example.com")
        self.assertEqual(message["From"], "noreply@trackit.test")
        self.assertEqual(message["Subject"], "Task assigned")
        self.assertEqual(
            message.get_body(preferencelist=("plain",)).get_content().strip(),
            "Hello Ada",
        )
        html_part = message.get_body(preferencelist=("html",))
        self.assertIn("<b>Ada</b>", html_part.get_content())

    @override_settings(EMAIL_USE_TLS=False, EMAIL_HOST_USER="")
    @patch("core.services.email_service.smtplib.SMTP")
    def test_plain_smtp_without_credentials(self, mock_smtp_class):
        """No TLS and no login when neither is configured."""
        mock_smtp = mock_smtp_class.return_value.__enter__.return_value

        EmailService().send_email("ada@example.com", "Hi", "<p>Hi</p>")

        mock_smtp.starttls.assert_not_called()
        mock_smtp.login.assert_not_called()
        mock_smtp.send_message.assert_called_once()

    @patch("core.services.email_service.smtplib.SMTP")
    def test_send_email_invalid_email(self, mock_smtp_class):
        """Invalid addresses are rejected before connecting."""
        with self.assertRaisesRegex(ValueError, "Invalid email address"):
            self.email_service.send_email(
                to_email="invalid-email",
                subject="Test",
                html_content="<p>Test</p>",
            )
        mock_smtp_class.assert_not_called()

    def test_send_email_smtp_exception(self):
        """SMTP failures propagate to the caller."""
        with patch("core.services.email_service.smtplib.SMTP") as mock_smtp:
            mock_smtp.return_value.__enter__.return_value.send_message.side_effect = (
                smtplib.SMTPException("SMTP error")
            )

            with self.assertRaises(smtplib.SMTPException):
                self.email_service.send_email(
                    to_email="ada@example.com",
                    subject="Test",
                    html_content="<p>Test</p>",
                )

    @patch.object(EmailService, "send_email")
    def test_send_template_email_renders_context(self, mock_send):
        """The notification template is rendered with the given context."""
        self.email_service.send_template_email(
            to_email="ada@example.com",
            subject="Task assigned",
            template_name="emails/notification.html",
            context={
                "user_name": "Ada Lovelace",
                "title": "Task assigned",
                "message": 'You were assigned "Ship it"',
                "frontend_url": "https://trackit.test",
            },
        )

        html = mock_send.call_args.kwargs["html_content"]
        self.assertIn("Ada Lovelace", html)
        self.assertIn("https://trackit.test/notifications", html)


class TestHtmlToPlain(SimpleTestCase):
    """Test suite for html_to_plain."""

    def test_strips_tags_and_entities(self):
        """Tags vanish and entities are decoded."""
        self.assertEqual(
            html_to_plain("<p>Tom &amp; Jerry&nbsp;&lt;3</p>"), "Tom & Jerry <3"
        )

    def test_drops_style_blocks_and_breaks_lines(self):
        """Style content is removed and paragraphs become lines."""
        html = "<style>p { color: red; }</style><p>One</p><p>Two</p>"
        self.assertEqual(html_to_plain(html), "One\nTwo")
