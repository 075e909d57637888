"""User models for authentication and checkout eligibility.

This module defines the custom `User` model which extends Django's
`AbstractUser` with a unique email, its verification state and a
temporary lock used to keep suspended accounts out of checkout.
"""

from django.contrib.auth.models import AbstractUser
from django.core.validators import RegexValidator
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    """Custom user with unique email, verification and lock state.

    Fields:
    - email: the primary email, unique at the database level (normalized).
    - email_verified: whether the primary email has been verified.
    - locked_until: when set in the future, the account may not use stored data.
    """

    email = models.EmailField(unique=True)
    email_verified = models.BooleanField(default=False)
    locked_until = models.DateTimeField(null=True, blank=True)
    phone = models.CharField(
        max_length=16,
        blank=True,
        validators=[RegexValidator(r"^\+?[1-9]\d{1,14}$", message="Use E.164 format (e.g., +14155552671)")],
        help_text="Primary contact number for the account in E.164 format",
    )

    def save(self, *args, **kwargs):
        """Normalize email and phone whitespace, then persist."""
        if self.email:
            self.email = self.email.strip().lower()
        if self.phone:
            self.phone = self.phone.strip()
        super().save(*args, **kwargs)

    @property
    def is_locked(self) -> bool:
        return bool(self.locked_until and self.locked_until > timezone.now())
