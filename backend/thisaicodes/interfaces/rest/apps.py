from django.apps import AppConfig


class RestInterfaceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "thisaicodes.interfaces.rest"
    verbose_name = "ThisAICodes REST API"
