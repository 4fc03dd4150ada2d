"""Django application configuration for core."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration class for the core application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"

    def ready(self) -> None:
        """Connect signal receivers once the models are loaded."""
        import core.signals  # noqa: PLC0415

        del core.signals
