"""Shared enumerations and choices used across apps."""

from django.db import models


class CartStatus(models.TextChoices):
    """Statuses for shopping carts."""

    ACTIVE = "active", "Active"
    ORDERED = "ordered", "Ordered"
    ABANDONED = "abandoned", "Abandoned"


class CartAddressType(models.TextChoices):
    """Slots an address can occupy on a cart."""

    BILLING = "billing", "Billing"
    SHIPPING = "shipping", "Shipping"


class UserType(models.TextChoices):
    """Kinds of callers the checkout API distinguishes."""

    GUEST = "guest", "Guest"
    CUSTOMER = "customer", "Customer"
    ADMIN = "admin", "Admin"
    INTEGRATION = "integration", "Integration"
