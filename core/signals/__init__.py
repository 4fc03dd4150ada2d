"""Django signal receivers."""

from core.signals.user_signals import create_notification_preferences

__all__ = ["create_notification_preferences"]
