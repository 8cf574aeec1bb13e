from django.apps import AppConfig
from django.conf import settings


class SchedulerConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "scheduler"

    def ready(self):
        from studydeck.logging_config import configure_logging

        configure_logging(settings.STUDYDECK_ENVIRONMENT, debug=settings.DEBUG)
