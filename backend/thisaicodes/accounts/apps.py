from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "thisaicodes.accounts"
    verbose_name = "Accounts"

    def ready(self) -> None:
        from thisaicodes.accounts import signals  # noqa: F401
