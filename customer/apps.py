from django.apps import AppConfig


class CustomerConfig(AppConfig):
    """App configuration for stored customer addresses."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "customer"
    verbose_name = "Customer"
