"""Customer domain models.

Stored postal addresses owned by a customer account. Checkout reads them by
id and copies their fields onto the cart; it never writes them.
"""

from django.conf import settings
from django.core.validators import RegexValidator
from django.db import models

postal_code_validator = RegexValidator(r"^[A-Za-z0-9\- ]{0,12}$", message="Use standard alphanumeric postal/zip code")
country_code_validator = RegexValidator(r"^[A-Z]{2}$", message="Use ISO 3166-1 alpha-2 country code (e.g., US)")
phone_validator = RegexValidator(r"^\+?[1-9]\d{1,14}$", message="Use E.164 format (e.g., +14155552671)")


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Address(TimeStampedModel):
    """Normalized postal address tied to a user.

    `country_code` is stored as ISO 3166-1 alpha-2 uppercase.
    """

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="addresses")
    name = models.CharField(max_length=120, blank=True, help_text="Optional recipient or label for the address")
    addr1 = models.CharField(max_length=120)
    addr2 = models.CharField(max_length=120, blank=True)
    city = models.CharField(max_length=80)
    state = models.CharField(max_length=40, blank=True, null=True, help_text="State/Province/Region")
    postal_code = models.CharField(max_length=12, blank=True, null=True, validators=[postal_code_validator])
    country_code = models.CharField(max_length=2, default="NG", validators=[country_code_validator])
    phone = models.CharField(max_length=16, blank=True, validators=[phone_validator])

    class Meta:
        indexes = [
            models.Index(fields=["user", "country_code", "postal_code"], name="customer_ad_user_id_5c1e0b_idx"),
            models.Index(fields=["user", "city"], name="customer_ad_user_id_9a7d2f_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "addr1", "city", "postal_code", "country_code"],
                name="unique_address_per_user",
            )
        ]

    def __str__(self) -> str:  # pragma: no cover
        parts = [self.addr1, self.addr2, self.city, self.state or "", self.postal_code or "", self.country_code]
        return f"{self.name or ''} - " + ", ".join([p for p in parts if p])
