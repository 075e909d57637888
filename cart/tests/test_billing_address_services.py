import pytest
from cart.models import Cart, CartAddress
from cart.services import (
    BillingAddressInput,
    ByAddressFields,
    ByCustomerAddressId,
    assign_billing_address,
    resolve_billing_address,
    set_billing_address_on_cart,
)
from cart.tests.factories import CartAddressFactory, CartFactory, CustomerAddressFactory, UserFactory
from common.choices import CartAddressType, UserType
from common.exceptions import (
    AddressNotFound,
    AuthenticationRequired,
    AuthorizationDenied,
    ConflictingAddressSource,
    InvalidAddressFields,
    MissingAddressSource,
    MultiShippingConflict,
)
from users.identity import IdentityContext

RAW_ADDRESS = {
    "name": "Chidi Okafor",
    "addr1": "12 Allen Avenue",
    "city": "Ikeja",
    "state": "Lagos",
    "postal_code": "100271",
    "country_code": "ng",
    "phone": "+2348031234567",
}


def customer_identity(user):
    return IdentityContext(user_id=user.id, user_type=UserType.CUSTOMER)


def cart_snapshot(cart):
    billing = cart.get_billing_address()
    return (
        billing.as_dict() if billing else None,
        [a.as_dict() for a in cart.get_shipping_addresses()],
    )


def test_input_source_is_a_tagged_union():
    assert BillingAddressInput(customer_address_id=5).source() == ByCustomerAddressId(5)
    assert BillingAddressInput(address={"addr1": "x"}).source() == ByAddressFields({"addr1": "x"})


def test_input_from_payload_defaults_use_for_shipping_to_false():
    billing_input = BillingAddressInput.from_payload({"address": RAW_ADDRESS})
    assert billing_input.use_for_shipping is False
    assert billing_input.customer_address_id is None


@pytest.mark.django_db
@pytest.mark.parametrize("use_for_shipping", [False, True])
def test_missing_source_fails_and_leaves_cart_unchanged(use_for_shipping):
    cart = CartFactory()
    CartAddressFactory(cart=cart)
    before = cart_snapshot(cart)

    with pytest.raises(MissingAddressSource):
        set_billing_address_on_cart(
            identity=customer_identity(cart.user), cart=cart, payload={"use_for_shipping": use_for_shipping}
        )

    assert cart_snapshot(cart) == before


@pytest.mark.django_db
def test_conflicting_source_fails_and_leaves_cart_unchanged():
    cart = CartFactory()
    stored = CustomerAddressFactory(user=cart.user)
    before = cart_snapshot(cart)

    with pytest.raises(ConflictingAddressSource):
        set_billing_address_on_cart(
            identity=customer_identity(cart.user),
            cart=cart,
            payload={"customer_address_id": stored.id, "address": RAW_ADDRESS},
        )

    assert cart_snapshot(cart) == before


@pytest.mark.django_db
def test_missing_source_is_reported_before_multishipping():
    cart = CartFactory()
    CartAddressFactory.create_batch(2, cart=cart)

    with pytest.raises(MissingAddressSource):
        resolve_billing_address(
            identity=customer_identity(cart.user),
            cart=cart,
            billing_input=BillingAddressInput(use_for_shipping=True),
        )


@pytest.mark.django_db
def test_multishipping_is_reported_before_customer_address_id_checks():
    cart = CartFactory()
    CartAddressFactory.create_batch(2, cart=cart)

    with pytest.raises(MultiShippingConflict):
        resolve_billing_address(
            identity=customer_identity(cart.user),
            cart=cart,
            billing_input=BillingAddressInput(customer_address_id="abc", use_for_shipping=True),
        )


@pytest.mark.django_db
def test_non_integer_customer_address_id_is_not_found():
    cart = CartFactory()

    with pytest.raises(AddressNotFound) as excinfo:
        set_billing_address_on_cart(
            identity=customer_identity(cart.user), cart=cart, payload={"customer_address_id": "abc"}
        )

    assert excinfo.value.message == 'Could not find an address with ID "abc"'
    assert cart.get_billing_address() is None


@pytest.mark.django_db
def test_use_for_shipping_with_multishipping_cart_fails():
    cart = CartFactory()
    CartAddressFactory.create_batch(2, cart=cart)
    before = cart_snapshot(cart)

    with pytest.raises(MultiShippingConflict):
        set_billing_address_on_cart(
            identity=customer_identity(cart.user),
            cart=cart,
            payload={"address": RAW_ADDRESS, "use_for_shipping": True},
        )

    assert cart_snapshot(cart) == before


@pytest.mark.django_db
def test_multishipping_cart_accepts_billing_when_not_used_for_shipping():
    cart = CartFactory()
    CartAddressFactory.create_batch(2, cart=cart)

    set_billing_address_on_cart(identity=customer_identity(cart.user), cart=cart, payload={"address": RAW_ADDRESS})

    assert cart.get_billing_address().addr1 == "12 Allen Avenue"
    assert len(cart.get_shipping_addresses()) == 2


@pytest.mark.django_db
def test_raw_address_sets_billing_and_keeps_shipping():
    cart = CartFactory()
    shipping = CartAddressFactory(cart=cart)

    set_billing_address_on_cart(identity=customer_identity(cart.user), cart=cart, payload={"address": RAW_ADDRESS})

    billing = cart.get_billing_address()
    assert billing.as_dict() == {**RAW_ADDRESS, "addr2": "", "country_code": "NG"}
    assert [a.id for a in cart.get_shipping_addresses()] == [shipping.id]


@pytest.mark.django_db
def test_raw_address_from_guest_does_not_require_an_account():
    cart = CartFactory(user=None, session_id="guest-1")

    set_billing_address_on_cart(identity=IdentityContext.guest(), cart=cart, payload={"address": RAW_ADDRESS})

    assert cart.get_billing_address().city == "Ikeja"


@pytest.mark.django_db
def test_stored_address_used_for_shipping_on_single_shipping_cart():
    cart = CartFactory()
    CartAddressFactory(cart=cart)
    stored = CustomerAddressFactory(user=cart.user)

    set_billing_address_on_cart(
        identity=customer_identity(cart.user),
        cart=cart,
        payload={"customer_address_id": stored.id, "use_for_shipping": True},
    )

    billing = cart.get_billing_address()
    shipping = cart.get_shipping_addresses()
    expected = {
        "name": stored.name,
        "addr1": stored.addr1,
        "addr2": stored.addr2,
        "city": stored.city,
        "state": stored.state,
        "postal_code": stored.postal_code,
        "country_code": stored.country_code,
        "phone": stored.phone,
    }
    assert billing.as_dict() == expected
    assert len(shipping) == 1
    assert shipping[0].as_dict() == expected
    assert shipping[0].same_as_billing is True
    assert shipping[0].id != billing.id


@pytest.mark.django_db
def test_use_for_shipping_on_cart_without_shipping_adds_one():
    cart = CartFactory()

    set_billing_address_on_cart(
        identity=customer_identity(cart.user),
        cart=cart,
        payload={"address": RAW_ADDRESS, "use_for_shipping": True},
    )

    shipping = cart.get_shipping_addresses()
    assert len(shipping) == 1
    assert shipping[0].as_dict() == cart.get_billing_address().as_dict()


@pytest.mark.django_db
def test_guest_using_stored_address_fails_before_lookup(monkeypatch):
    cart = CartFactory(user=None, session_id="guest-2")
    stored = CustomerAddressFactory()

    def fail_lookup(**kwargs):
        raise AssertionError("address lookup must not run for guests")

    monkeypatch.setattr("cart.services.get_customer_address", fail_lookup)

    with pytest.raises(AuthenticationRequired):
        set_billing_address_on_cart(
            identity=IdentityContext.guest(), cart=cart, payload={"customer_address_id": stored.id}
        )
    assert cart.get_billing_address() is None


@pytest.mark.django_db
def test_admin_identity_cannot_use_stored_address():
    admin_user = UserFactory(is_staff=True)
    cart = CartFactory(user=admin_user)
    stored = CustomerAddressFactory(user=admin_user)

    with pytest.raises(AuthorizationDenied):
        set_billing_address_on_cart(
            identity=IdentityContext.for_user(admin_user),
            cart=cart,
            payload={"customer_address_id": stored.id},
        )


@pytest.mark.django_db
def test_stored_address_of_another_customer_is_not_found():
    cart = CartFactory()
    foreign = CustomerAddressFactory()

    with pytest.raises(AddressNotFound):
        set_billing_address_on_cart(
            identity=customer_identity(cart.user), cart=cart, payload={"customer_address_id": foreign.id}
        )
    assert cart.get_billing_address() is None


@pytest.mark.django_db
def test_invalid_raw_address_fails_without_touching_cart():
    cart = CartFactory()

    with pytest.raises(InvalidAddressFields) as excinfo:
        set_billing_address_on_cart(
            identity=customer_identity(cart.user), cart=cart, payload={"address": {"city": "Lagos"}}
        )

    assert "addr1" in excinfo.value.errors
    assert cart.get_billing_address() is None


@pytest.mark.django_db
def test_resolve_does_not_write_to_cart():
    cart = CartFactory()

    address, use_for_shipping = resolve_billing_address(
        identity=customer_identity(cart.user),
        cart=cart,
        billing_input=BillingAddressInput(address=RAW_ADDRESS, use_for_shipping=True),
    )

    assert address.pk is None
    assert use_for_shipping is True
    assert CartAddress.objects.filter(cart=cart).count() == 0


@pytest.mark.django_db
def test_assign_replaces_previous_billing_address():
    cart = CartFactory()
    set_billing_address_on_cart(identity=customer_identity(cart.user), cart=cart, payload={"address": RAW_ADDRESS})
    first = cart.get_billing_address()

    set_billing_address_on_cart(
        identity=customer_identity(cart.user),
        cart=cart,
        payload={"address": {**RAW_ADDRESS, "addr1": "1 New Street"}},
    )

    assert not CartAddress.objects.filter(pk=first.pk).exists()
    assert cart.get_billing_address().addr1 == "1 New Street"
    assert CartAddress.objects.filter(cart=cart, address_type=CartAddressType.BILLING).count() == 1


@pytest.mark.django_db
def test_assign_twice_with_same_address_is_idempotent():
    cart = CartFactory()
    address = CartAddress(**{**RAW_ADDRESS, "country_code": "NG"})

    assign_billing_address(cart=cart, address=address, use_for_shipping=True)
    once = cart_snapshot(cart)
    assign_billing_address(cart=cart, address=address, use_for_shipping=True)

    assert cart_snapshot(cart) == once
    assert CartAddress.objects.filter(cart=cart).count() == 2


@pytest.mark.django_db
def test_assign_does_not_alias_the_resolved_address():
    cart = CartFactory()
    address = CartAddress(**{**RAW_ADDRESS, "country_code": "NG"})

    billing = assign_billing_address(cart=cart, address=address, use_for_shipping=False)

    assert address.pk is None
    assert billing is not address


@pytest.mark.django_db
def test_billing_and_shipping_rows_are_independent():
    cart = CartFactory()
    set_billing_address_on_cart(
        identity=customer_identity(cart.user),
        cart=cart,
        payload={"address": RAW_ADDRESS, "use_for_shipping": True},
    )

    shipping = cart.get_shipping_addresses()[0]
    shipping.addr1 = "99 Changed Close"
    shipping.save()
    assert cart.get_billing_address().addr1 == "12 Allen Avenue"

    billing = cart.get_billing_address()
    billing.city = "Yaba"
    billing.save()
    assert cart.get_shipping_addresses()[0].city == "Ikeja"


@pytest.mark.django_db
def test_set_billing_address_on_cart_returns_refreshed_cart():
    cart = CartFactory()

    result = set_billing_address_on_cart(
        identity=customer_identity(cart.user), cart=cart, payload={"address": RAW_ADDRESS}
    )

    assert isinstance(result, Cart)
    assert result.pk == cart.pk
    assert result.get_billing_address() is not None
