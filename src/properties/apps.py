from django.apps import AppConfig


class PropertiesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "src.properties"
    label = "properties"

    def ready(self):
        # Import signal handlers
        from . import signals  # noqa: F401
