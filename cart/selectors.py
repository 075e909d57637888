"""Selectors for read-only cart queries."""

from .models import Cart


def get_active_cart_for_user(*, user) -> Cart:
    """Return the user's active cart, creating it if missing."""

    cart, _ = Cart.objects.get_or_create(user=user, session_id=None, status=Cart.STATUS_ACTIVE)
    return cart


def get_active_cart_for_session(*, session_id: str) -> Cart:
    """Return the guest session's active cart, creating it if missing."""

    cart, _ = Cart.objects.get_or_create(user=None, session_id=session_id, status=Cart.STATUS_ACTIVE)
    return cart


def cart_addresses(*, cart: Cart) -> dict:
    """Return the cart's billing address and shipping addresses."""

    return {
        "billing_address": cart.get_billing_address(),
        "shipping_addresses": cart.get_shipping_addresses(),
    }
