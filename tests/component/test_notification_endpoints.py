"""Component tests for the notification endpoints."""

from uuid import uuid4

from django.urls import reverse

from core.enums import RoomKind
from core.models import Notification, NotificationPreference
from tests.base import BaseComponentTest
from tests.factories import create_notification, create_user


class TestNotificationEndpoints(BaseComponentTest):
    """Test suite for /api/v1/notifications."""

    def setUp(self):
        """Set up an authenticated user with two notifications."""
        super().setUp()
        self.user = create_user()
        self.older = create_notification(self.user, title="Older")
        self.newer = create_notification(self.user, title="Newer")
        self.authenticate(self.user)

    def test_requires_token(self):
        """Anonymous requests get 401 with the standard error body."""
        self.client.credentials()

        response = self.client.get(reverse("notification-list"))

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["status"], 401)
        self.assertEqual(response["WWW-Authenticate"], "Bearer")

    def test_list_newest_first(self):
        """The page is camelCased and ordered by creation, newest first."""
        response = self.client.get(reverse("notification-list"))

        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["total"], 2)
        self.assertEqual(body["unreadCount"], 2)
        self.assertEqual(
            [n["title"] for n in body["notifications"]], ["Newer", "Older"]
        )
        self.assertIn("notificationId", body["notifications"][0])

    def test_list_unread_only_and_paging(self):
        """unreadOnly filters and limit/offset page."""
        self.older.mark_read()

        response = self.client.get(
            reverse("notification-list"), {"unreadOnly": "true", "limit": 1}
        )

        body = response.json()
        self.assertEqual(body["total"], 1)
        self.assertEqual(body["limit"], 1)
        self.assertEqual([n["title"] for n in body["notifications"]], ["Newer"])

    def test_list_rejects_bad_paging(self):
        """Negative offsets are a 400 listing the offending field."""
        response = self.client.get(reverse("notification-list"), {"offset": -1})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"][0]["loc"], ["offset"])

    def test_mark_as_read_pushes_to_user_room(self):
        """PUT /read marks the row and tells the owner's other sockets."""
        listener = self.listen(RoomKind.USER, self.user.user_id)

        response = self.client.put(
            reverse("notification-read", args=[self.older.notification_id])
        )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["isRead"])
        self.assertEqual(
            [event for event, _ in self.transport.received(listener)],
            ["notification:read"],
        )

    def test_mark_foreign_notification(self):
        """Other users' notifications are forbidden."""
        foreign = create_notification(create_user())

        response = self.client.put(
            reverse("notification-read", args=[foreign.notification_id])
        )

        self.assertEqual(response.status_code, 403)

    def test_mark_unknown_notification(self):
        """Unknown ids are 404."""
        response = self.client.put(reverse("notification-read", args=[uuid4()]))
        self.assertEqual(response.status_code, 404)

    def test_read_all(self):
        """PUT /read-all returns how many were marked."""
        response = self.client.put(reverse("notification-read-all"))

        self.assertEqual(response.json(), {"count": 2})
        self.assertFalse(Notification.objects.filter(is_read=False).exists())

    def test_delete(self):
        """DELETE removes the notification."""
        response = self.client.delete(
            reverse("notification-detail", args=[self.older.notification_id])
        )

        self.assertEqual(response.status_code, 204)
        self.assertFalse(
            Notification.objects.filter(
                notification_id=self.older.notification_id
            ).exists()
        )

    def test_preferences_round_trip(self):
        """PUT changes only the flags sent; GET reflects them."""
        response = self.client.put(
            reverse("notification-preferences"),
            {"mentionNotifications": False},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["mentionNotifications"])
        self.assertTrue(response.json()["emailEnabled"])
        self.assertFalse(
            NotificationPreference.objects.get(user=self.user).mention_notifications
        )

        response = self.client.get(reverse("notification-preferences"))
        self.assertFalse(response.json()["mentionNotifications"])

    def test_preferences_reject_non_boolean(self):
        """Flags must be booleans."""
        response = self.client.put(
            reverse("notification-preferences"),
            {"emailEnabled": "sometimes"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
