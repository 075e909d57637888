"""Cart app models.

A cart belongs to a user or to a guest session and holds the addresses used
at checkout: at most one billing address and any number of shipping
addresses. Cart addresses are copies; they never point back at a stored
customer address.
"""

from common.choices import CartAddressType, CartStatus
from customer.models import country_code_validator, phone_validator, postal_code_validator
from django.conf import settings
from django.db import models

# Fields copied between stored customer addresses and cart addresses.
ADDRESS_FIELDS = ("name", "addr1", "addr2", "city", "state", "postal_code", "country_code", "phone")


def default_country_code() -> str:
    return getattr(settings, "CHECKOUT_DEFAULT_COUNTRY_CODE", "NG")


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Cart(TimeStampedModel):
    """Shopping cart bound to a user or to a guest `session_id`."""

    STATUS_ACTIVE = CartStatus.ACTIVE
    STATUS_ORDERED = CartStatus.ORDERED
    STATUS_ABANDONED = CartStatus.ABANDONED
    STATUS_CHOICES = CartStatus.choices

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, related_name="carts", null=True, blank=True, on_delete=models.CASCADE
    )
    session_id = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)

    class Meta:
        ordering = ["-updated_at"]
        indexes = [
            models.Index(fields=["user", "status"], name="cart_cart_user_id_3f2a1c_idx"),
            models.Index(fields=["session_id", "status"], name="cart_cart_session_8b4e7d_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Cart#{self.id} ({self.user_id or self.session_id})"

    def get_shipping_addresses(self) -> list["CartAddress"]:
        return list(self.addresses.filter(address_type=CartAddressType.SHIPPING).order_by("id"))

    def get_billing_address(self) -> "CartAddress | None":
        return self.addresses.filter(address_type=CartAddressType.BILLING).first()

    def set_billing_address(self, address: "CartAddress") -> "CartAddress":
        """Store a copy of `address` as the billing address, replacing any previous one."""

        self.addresses.filter(address_type=CartAddressType.BILLING).delete()
        billing = address.copy()
        billing.cart = self
        billing.address_type = CartAddressType.BILLING
        billing.same_as_billing = False
        billing.save()
        return billing

    def set_shipping_addresses(self, addresses: list["CartAddress"], *, same_as_billing: bool = False):
        """Replace the shipping collection with copies of `addresses`."""

        self.addresses.filter(address_type=CartAddressType.SHIPPING).delete()
        stored = []
        for address in addresses:
            shipping = address.copy()
            shipping.cart = self
            shipping.address_type = CartAddressType.SHIPPING
            shipping.same_as_billing = same_as_billing
            shipping.save()
            stored.append(shipping)
        return stored


class CartAddress(TimeStampedModel):
    """Billing or shipping address scoped to a single cart."""

    cart = models.ForeignKey(Cart, related_name="addresses", on_delete=models.CASCADE)
    address_type = models.CharField(
        max_length=16, choices=CartAddressType.choices, default=CartAddressType.BILLING, db_index=True
    )
    same_as_billing = models.BooleanField(default=False)
    name = models.CharField(max_length=120, blank=True)
    addr1 = models.CharField(max_length=120)
    addr2 = models.CharField(max_length=120, blank=True)
    city = models.CharField(max_length=80)
    state = models.CharField(max_length=40, blank=True, null=True)
    postal_code = models.CharField(max_length=12, blank=True, null=True, validators=[postal_code_validator])
    country_code = models.CharField(max_length=2, default=default_country_code, validators=[country_code_validator])
    phone = models.CharField(max_length=16, blank=True, validators=[phone_validator])

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart"],
                condition=models.Q(address_type=CartAddressType.BILLING),
                name="unique_billing_address_per_cart",
            )
        ]
        indexes = [
            models.Index(fields=["cart", "address_type"], name="cart_cartad_cart_id_6d9e2b_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"CartAddress#{self.id} cart={self.cart_id} type={self.address_type}"

    def as_dict(self) -> dict:
        return {field: getattr(self, field) for field in ADDRESS_FIELDS}

    def copy(self) -> "CartAddress":
        """Return a new unsaved address with the same field values and no cart."""

        return CartAddress(address_type=self.address_type, **self.as_dict())
