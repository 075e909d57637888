"""Django app configuration for the users app."""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    """Accounts and caller identity for checkout."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "users"
    verbose_name = "Users"
