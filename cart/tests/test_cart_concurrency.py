import pytest
from cart.models import Cart, CartAddress
from cart.services import set_billing_address_on_cart
from cart.tests.factories import CartAddressFactory, CartFactory
from common.choices import CartAddressType, CartStatus, UserType
from common.exceptions import MultiShippingConflict
from django.db import connection
from django.test.utils import CaptureQueriesContext
from users.identity import IdentityContext

RAW_ADDRESS = {"name": "Amaka Obi", "addr1": "3 Broad Street", "city": "Lagos", "country_code": "NG"}


def customer_identity(user):
    return IdentityContext(user_id=user.id, user_type=UserType.CUSTOMER)


@pytest.mark.django_db
def test_rapid_billing_updates_keep_only_the_latest_address():
    cart = CartFactory()
    identity = customer_identity(cart.user)

    # Same stale instance for every call
    for street in ("1 First Street", "2 Second Street", "3 Third Street"):
        set_billing_address_on_cart(
            identity=identity,
            cart=cart,
            payload={"address": {**RAW_ADDRESS, "addr1": street}, "use_for_shipping": True},
        )

    billing = list(CartAddress.objects.filter(cart=cart, address_type=CartAddressType.BILLING))
    shipping = list(CartAddress.objects.filter(cart=cart, address_type=CartAddressType.SHIPPING))
    assert len(billing) == 1
    assert billing[0].addr1 == "3 Third Street"
    assert len(shipping) == 1
    assert shipping[0].addr1 == "3 Third Street"


@pytest.mark.django_db
def test_cart_row_is_reread_before_any_write():
    cart = CartFactory()
    stale = Cart.objects.get(pk=cart.pk)
    stale.status = CartStatus.ABANDONED  # unsaved, must not leak into the result

    with CaptureQueriesContext(connection) as ctx:
        result = set_billing_address_on_cart(
            identity=customer_identity(cart.user), cart=stale, payload={"address": RAW_ADDRESS}
        )

    assert result is not stale
    assert result.pk == cart.pk
    assert result.status == CartStatus.ACTIVE

    statements = [q["sql"] for q in ctx.captured_queries if "SAVEPOINT" not in q["sql"]]
    assert statements[0].startswith("SELECT")
    assert '"cart_cart"' in statements[0]
    if connection.features.has_select_for_update:
        assert "FOR UPDATE" in statements[0]


@pytest.mark.django_db
def test_shipping_added_after_instance_was_loaded_is_seen():
    cart = CartFactory()
    stale = Cart.objects.get(pk=cart.pk)
    CartAddressFactory.create_batch(2, cart=cart)

    with pytest.raises(MultiShippingConflict):
        set_billing_address_on_cart(
            identity=customer_identity(cart.user),
            cart=stale,
            payload={"address": RAW_ADDRESS, "use_for_shipping": True},
        )

    assert cart.get_billing_address() is None
    assert len(cart.get_shipping_addresses()) == 2
