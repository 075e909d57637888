"""Caller identity passed explicitly into checkout services."""

from dataclasses import dataclass
from typing import Optional

from common.choices import UserType


@dataclass(frozen=True)
class IdentityContext:
    """Who is making the request: a user id (None for guests) and a type."""

    user_id: Optional[int]
    user_type: str

    @classmethod
    def guest(cls) -> "IdentityContext":
        return cls(user_id=None, user_type=UserType.GUEST)

    @classmethod
    def for_user(cls, user) -> "IdentityContext":
        if user is None or not getattr(user, "is_authenticated", False):
            return cls.guest()
        if user.is_staff or user.is_superuser:
            return cls(user_id=user.pk, user_type=UserType.ADMIN)
        return cls(user_id=user.pk, user_type=UserType.CUSTOMER)

    @property
    def is_guest(self) -> bool:
        return self.user_id is None or self.user_type == UserType.GUEST


def identity_from_request(request) -> IdentityContext:
    """Build the identity for a DRF/Django request."""

    return IdentityContext.for_user(getattr(request, "user", None))
