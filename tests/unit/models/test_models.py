"""Tests for model helpers and the user post_save signal."""

from django.test import TestCase

from core.models import NotificationPreference
from tests.factories import create_notification, create_user


class TestUser(TestCase):
    """Test suite for the User model."""

    def test_full_name(self):
        """First and last name are joined."""
        user = create_user(first_name="Ada", last_name="Lovelace")
        self.assertEqual(user.full_name, "Ada Lovelace")

    def test_full_name_falls_back_to_username(self):
        """Users without a name are shown by username."""
        user = create_user(first_name="", last_name="", username="ada")
        self.assertEqual(user.full_name, "ada")

    def test_preferences_created_with_user(self):
        """Every new user gets default preferences."""
        user = create_user()

        preference = NotificationPreference.objects.get(user=user)
        self.assertTrue(preference.email_enabled)
        self.assertTrue(preference.mention_notifications)

    def test_saving_again_keeps_preferences(self):
        """Updates to a user do not touch existing preferences."""
        user = create_user()
        NotificationPreference.objects.filter(user=user).update(email_enabled=False)

        user.first_name = "Renamed"
        user.save()

        self.assertFalse(NotificationPreference.objects.get(user=user).email_enabled)


class TestNotification(TestCase):
    """Test suite for the Notification model."""

    def test_mark_read_sets_flag_and_timestamp(self):
        """Both fields change together."""
        notification = create_notification(create_user())

        notification.mark_read()
        notification.refresh_from_db()

        self.assertTrue(notification.is_read)
        self.assertIsNotNone(notification.read_at)
