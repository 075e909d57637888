"""Account checks used before exposing stored customer data."""

import logging
from typing import NoReturn, Optional

from common.choices import UserType
from common.exceptions import AuthenticationRequired, AuthorizationDenied
from django.conf import settings

from .models import User

logger = logging.getLogger("storefront.auth")


def _reject(exc_class, *, user_id, user_type, reason: str, message: Optional[str] = None) -> NoReturn:
    logger.info(
        "auth.account_check_failed",
        extra={
            "event": "auth.account_check_failed",
            "user_id": user_id,
            "user_type": str(user_type),
            "reason": reason,
        },
    )
    raise exc_class(message)


def check_customer_account(*, user_id: Optional[int], user_type: str) -> None:
    """Ensure the caller is a signed-in customer allowed to read stored addresses.

    Raises AuthenticationRequired for guests and for accounts that are missing,
    inactive, locked, or (when configured) unverified. Raises AuthorizationDenied
    for authenticated callers that are not customer accounts.
    """

    if user_id is None or user_type == UserType.GUEST:
        _reject(AuthenticationRequired, user_id=user_id, user_type=user_type, reason="guest")
    if user_type != UserType.CUSTOMER:
        _reject(AuthorizationDenied, user_id=user_id, user_type=user_type, reason="account_type")

    user = User.objects.filter(pk=user_id).first()
    if user is None or not user.is_active:
        _reject(AuthenticationRequired, user_id=user_id, user_type=user_type, reason="inactive")
    if user.is_locked:
        _reject(
            AuthenticationRequired,
            user_id=user_id,
            user_type=user_type,
            reason="locked",
            message="The account is locked.",
        )
    if getattr(settings, "CHECKOUT_REQUIRE_VERIFIED_EMAIL", False) and not user.email_verified:
        _reject(
            AuthenticationRequired,
            user_id=user_id,
            user_type=user_type,
            reason="unverified",
            message="This account isn't confirmed. Verify and try again.",
        )
