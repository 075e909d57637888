import pytest
from cart.tests.factories import CustomerAddressFactory, UserFactory
from common.exceptions import AddressNotFound
from customer.selectors import get_customer_address

pytestmark = pytest.mark.django_db


def test_returns_address_owned_by_customer():
    stored = CustomerAddressFactory()

    assert get_customer_address(address_id=stored.id, customer_id=stored.user_id) == stored


def test_unknown_address_id_is_not_found():
    user = UserFactory()

    with pytest.raises(AddressNotFound) as excinfo:
        get_customer_address(address_id=424242, customer_id=user.id)

    assert excinfo.value.message == 'Could not find an address with ID "424242"'


def test_address_owned_by_someone_else_is_not_found():
    stored = CustomerAddressFactory()
    intruder = UserFactory()

    with pytest.raises(AddressNotFound):
        get_customer_address(address_id=stored.id, customer_id=intruder.id)
