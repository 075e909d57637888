"""Build cart addresses from raw input or from stored customer addresses.

Results are unsaved `CartAddress` instances without a cart; assigning them
to a cart is left to `cart.services.assign_billing_address`.
"""

from collections.abc import Mapping

from common.exceptions import InvalidAddressFields
from customer.models import Address
from django.core.exceptions import ValidationError

from .models import ADDRESS_FIELDS, CartAddress


def _normalize(fields: Mapping) -> dict:
    data = {}
    for key in ADDRESS_FIELDS:
        if key not in fields or fields[key] is None:
            continue
        value = fields[key]
        if isinstance(value, str):
            value = value.strip()
        data[key] = value
    if isinstance(data.get("country_code"), str):
        data["country_code"] = data["country_code"].upper()
    if data.get("country_code") == "":
        del data["country_code"]
    return data


def build_address_from_fields(fields) -> CartAddress:
    """Validate raw address input and return a new cart address.

    Raises InvalidAddressFields with a field -> messages mapping when the input
    is not an object, names unknown fields, or fails model validation.
    """

    if not isinstance(fields, Mapping):
        raise InvalidAddressFields({"address": ["Expected an object of address fields."]})

    unknown = sorted(str(key) for key in fields if key not in ADDRESS_FIELDS)
    if unknown:
        raise InvalidAddressFields({key: ["Unknown address field."] for key in unknown})

    address = CartAddress(**_normalize(fields))
    try:
        address.full_clean(exclude=["cart"], validate_unique=False, validate_constraints=False)
    except ValidationError as exc:
        raise InvalidAddressFields(exc.message_dict) from exc
    return address


def build_address_from_customer_address(customer_address: Address) -> CartAddress:
    """Copy a stored customer address into a detached cart address."""

    return CartAddress(**{field: getattr(customer_address, field) for field in ADDRESS_FIELDS})
