"""Cart services: billing address resolution and assignment.

`set_billing_address_on_cart` is the entry point used by the API. It is
composed of `resolve_billing_address`, which validates the request and
materializes the address without touching the cart, and
`assign_billing_address`, which writes it.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from common.exceptions import (
    AddressNotFound,
    BillingAddressError,
    CartError,
    ConflictingAddressSource,
    MissingAddressSource,
    MultiShippingConflict,
)
from customer.selectors import get_customer_address
from django.db import transaction
from users.identity import IdentityContext
from users.services import check_customer_account

from .address_factory import build_address_from_customer_address, build_address_from_fields
from .models import Cart, CartAddress

__all__ = [
    "AddressSource",
    "BillingAddressInput",
    "ByAddressFields",
    "ByCustomerAddressId",
    "CartError",
    "assign_billing_address",
    "resolve_billing_address",
    "set_billing_address_on_cart",
]

logger = logging.getLogger("storefront.cart")


@dataclass(frozen=True)
class ByCustomerAddressId:
    address_id: Any


@dataclass(frozen=True)
class ByAddressFields:
    fields: Any


AddressSource = Union[ByCustomerAddressId, ByAddressFields]


@dataclass(frozen=True)
class BillingAddressInput:
    """Billing address request: one address source plus the shipping flag."""

    customer_address_id: Optional[int] = None
    address: Any = None
    use_for_shipping: bool = False

    @classmethod
    def from_payload(cls, payload: Mapping) -> "BillingAddressInput":
        return cls(
            customer_address_id=payload.get("customer_address_id"),
            address=payload.get("address"),
            use_for_shipping=bool(payload.get("use_for_shipping") or False),
        )

    def source(self) -> AddressSource:
        """Return the single address source, or raise if there is none or two."""

        if self.customer_address_id is None and self.address is None:
            raise MissingAddressSource()
        if self.customer_address_id is not None and self.address is not None:
            raise ConflictingAddressSource()
        if self.customer_address_id is not None:
            return ByCustomerAddressId(self.customer_address_id)
        return ByAddressFields(self.address)


def resolve_billing_address(
    *, identity: IdentityContext, cart: Cart, billing_input: BillingAddressInput
) -> tuple[CartAddress, bool]:
    """Validate the request and build the billing address without saving it.

    Checks run in a fixed order: address source, multishipping, then the
    source-specific account and field checks.
    """

    source = billing_input.source()
    use_for_shipping = billing_input.use_for_shipping

    if use_for_shipping and len(cart.get_shipping_addresses()) > 1:
        raise MultiShippingConflict()

    if isinstance(source, ByAddressFields):
        return build_address_from_fields(source.fields), use_for_shipping

    check_customer_account(user_id=identity.user_id, user_type=identity.user_type)
    try:
        address_id = int(source.address_id)
    except (TypeError, ValueError):
        raise AddressNotFound.for_id(source.address_id) from None
    customer_address = get_customer_address(address_id=address_id, customer_id=identity.user_id)
    return build_address_from_customer_address(customer_address), use_for_shipping


def assign_billing_address(*, cart: Cart, address: CartAddress, use_for_shipping: bool) -> CartAddress:
    """Write `address` as the cart's billing address.

    With `use_for_shipping` the shipping collection is replaced by one
    separately stored copy, so later edits to either row stay independent.
    """

    billing = cart.set_billing_address(address)
    if use_for_shipping:
        cart.set_shipping_addresses([address], same_as_billing=True)
    cart.save(update_fields=["updated_at"])
    return billing


@transaction.atomic
def set_billing_address_on_cart(*, identity: IdentityContext, cart: Cart, payload: Mapping) -> Cart:
    """Resolve the billing address from `payload` and assign it to `cart`.

    The cart row is locked for the rest of the transaction. Any error is
    raised before the cart is modified.
    """

    cart = Cart.objects.select_for_update().get(pk=cart.pk)
    billing_input = BillingAddressInput.from_payload(payload)
    try:
        address, use_for_shipping = resolve_billing_address(
            identity=identity, cart=cart, billing_input=billing_input
        )
    except BillingAddressError as exc:
        logger.warning(
            "cart.billing_address_rejected",
            extra={
                "event": "cart.billing_address_rejected",
                "cart_id": cart.id,
                "user_id": identity.user_id,
                "code": exc.code,
                "guest": identity.is_guest,
            },
        )
        raise

    assign_billing_address(cart=cart, address=address, use_for_shipping=use_for_shipping)
    logger.info(
        "cart.billing_address_set",
        extra={
            "event": "cart.billing_address_set",
            "cart_id": cart.id,
            "user_id": identity.user_id,
            "source": "customer_address" if billing_input.customer_address_id is not None else "address",
            "use_for_shipping": use_for_shipping,
            "guest": identity.is_guest,
        },
    )
    return cart
