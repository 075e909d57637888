"""Errors shared by the cart, customer and users apps.

Every billing address failure is request scoped and carries a stable `code`
so the API layer can map it to a response without inspecting messages.
"""


class CartError(Exception):
    """Raised for cart mutation failures."""


class BillingAddressError(CartError):
    """Base class for failures while setting a cart's billing address."""

    code = "billing_address_error"
    default_message = "Unable to set the billing address."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingAddressSource(BillingAddressError):
    code = "missing_address_source"
    default_message = 'The billing address must contain either "customer_address_id" or "address".'


class ConflictingAddressSource(BillingAddressError):
    code = "conflicting_address_source"
    default_message = 'The billing address cannot contain "customer_address_id" and "address" at the same time.'


class MultiShippingConflict(BillingAddressError):
    code = "multishipping_conflict"
    default_message = 'Using the "use_for_shipping" option with multishipping is not possible.'


class AuthenticationRequired(BillingAddressError):
    code = "authentication_required"
    default_message = "The current customer isn't authorized."


class AuthorizationDenied(BillingAddressError):
    code = "authorization_denied"
    default_message = "The current account is not allowed to use stored customer addresses."


class AddressNotFound(BillingAddressError):
    code = "address_not_found"
    default_message = "Could not find the requested address."

    @classmethod
    def for_id(cls, address_id) -> "AddressNotFound":
        return cls(f'Could not find an address with ID "{address_id}"')


class InvalidAddressFields(BillingAddressError):
    """Raw address input failed structural or field validation.

    `errors` maps field names to lists of messages.
    """

    code = "invalid_address_fields"
    default_message = "The billing address is invalid."

    def __init__(self, errors: dict[str, list[str]] | None = None, message: str | None = None):
        self.errors = errors or {}
        super().__init__(message)
