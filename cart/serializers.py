"""Cart serializers for reading addresses and setting the billing address."""

from rest_framework import serializers

from .models import CartAddress
from .selectors import cart_addresses
from .services import set_billing_address_on_cart


class CartAddressReadSerializer(serializers.ModelSerializer):
    """Read serializer for a billing or shipping address on a cart."""

    class Meta:
        model = CartAddress
        fields = [
            "id",
            "address_type",
            "same_as_billing",
            "name",
            "addr1",
            "addr2",
            "city",
            "state",
            "postal_code",
            "country_code",
            "phone",
        ]


class CartReadSerializer(serializers.Serializer):
    """Read serializer for the cart and its addresses."""

    id = serializers.IntegerField()
    status = serializers.CharField()
    billing_address = CartAddressReadSerializer(allow_null=True)
    shipping_addresses = CartAddressReadSerializer(many=True)

    @classmethod
    def from_cart(cls, *, cart):
        return cls({"id": cart.id, "status": cart.status, **cart_addresses(cart=cart)})


class SetBillingAddressSerializer(serializers.Serializer):
    """Write serializer for the billing address payload.

    Only the shape of `customer_address_id` is checked here. `address` is passed
    through as-is; source exclusivity and address field validation (including a
    non-object `address`) happen in the service so they map to distinct error codes.
    """

    customer_address_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    address = serializers.JSONField(required=False, allow_null=True)
    use_for_shipping = serializers.BooleanField(required=False, default=False)

    def create(self, validated_data):  # type: ignore[override]
        return set_billing_address_on_cart(
            identity=self.context["identity"],
            cart=self.context["cart"],
            payload=validated_data,
        )
