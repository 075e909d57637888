"""Read-only data access helpers for the customer app."""

from common.exceptions import AddressNotFound

from .models import Address


def get_customer_address(*, address_id: int, customer_id: int) -> Address:
    """Return the stored address `address_id` if it belongs to `customer_id`.

    A missing address and an address owned by someone else are reported the
    same way so callers cannot probe for other customers' address ids.
    """

    address = Address.objects.filter(pk=address_id).first()
    if address is None or address.user_id != customer_id:
        raise AddressNotFound.for_id(address_id)
    return address
