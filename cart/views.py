"""DRF views for cart addresses."""

from common.exceptions import (
    AddressNotFound,
    AuthenticationRequired,
    AuthorizationDenied,
    BillingAddressError,
    InvalidAddressFields,
)
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from users.identity import IdentityContext, identity_from_request

from .selectors import get_active_cart_for_session, get_active_cart_for_user
from .serializers import CartReadSerializer, SetBillingAddressSerializer

ERROR_STATUS = {
    AuthenticationRequired: status.HTTP_401_UNAUTHORIZED,
    AuthorizationDenied: status.HTTP_403_FORBIDDEN,
    AddressNotFound: status.HTTP_404_NOT_FOUND,
}

BILLING_ERROR_RESPONSE = inline_serializer(
    name="BillingAddressError",
    fields={
        "detail": rf_serializers.CharField(),
        "code": rf_serializers.CharField(),
        "errors": rf_serializers.DictField(required=False),
    },
)

CART_EXAMPLE = {
    "id": 1,
    "status": "active",
    "billing_address": {
        "id": 7,
        "address_type": "billing",
        "same_as_billing": False,
        "name": "John Doe",
        "addr1": "123 Main St",
        "addr2": "",
        "city": "Lagos",
        "state": "Lagos",
        "postal_code": "100001",
        "country_code": "NG",
        "phone": "+2347012345678",
    },
    "shipping_addresses": [],
}


def billing_error_response(exc: BillingAddressError) -> Response:
    body = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, InvalidAddressFields):
        body["errors"] = exc.errors
    code = next(
        (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)),
        status.HTTP_400_BAD_REQUEST,
    )
    return Response(body, status=code)


def set_billing_address(request, *, cart, identity: IdentityContext) -> Response:
    serializer = SetBillingAddressSerializer(data=request.data, context={"cart": cart, "identity": identity})
    serializer.is_valid(raise_exception=True)
    try:
        cart = serializer.save()
    except BillingAddressError as exc:
        return billing_error_response(exc)
    return Response(CartReadSerializer.from_cart(cart=cart).data, status=status.HTTP_200_OK)


class CartDetailView(APIView):
    """Return the authenticated user's active cart with its addresses."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Get active cart",
        description="Returns the authenticated user's active cart with billing and shipping addresses.",
        examples=[OpenApiExample("Cart", value=CART_EXAMPLE)],
    )
    def get(self, request):
        cart = get_active_cart_for_user(user=request.user)
        return Response(CartReadSerializer.from_cart(cart=cart).data, status=status.HTTP_200_OK)


class CartBillingAddressView(APIView):
    """Set the billing address on the authenticated user's active cart."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Set billing address",
        description=(
            "Provide exactly one of `customer_address_id` (a stored address you own) or `address` "
            "(raw fields). `use_for_shipping` also makes it the cart's only shipping address."
        ),
        request=SetBillingAddressSerializer,
        responses={
            200: CartReadSerializer,
            400: BILLING_ERROR_RESPONSE,
            401: BILLING_ERROR_RESPONSE,
            403: BILLING_ERROR_RESPONSE,
            404: BILLING_ERROR_RESPONSE,
        },
        examples=[
            OpenApiExample("Stored address", value={"customer_address_id": 10, "use_for_shipping": True}),
            OpenApiExample(
                "Raw address",
                value={"address": {"addr1": "123 Main St", "city": "Lagos", "country_code": "NG"}},
                request_only=True,
            ),
            OpenApiExample(
                "Missing source",
                value={
                    "detail": 'The billing address must contain either "customer_address_id" or "address".',
                    "code": "missing_address_source",
                },
                response_only=True,
                status_codes=["400"],
            ),
        ],
    )
    def post(self, request):
        cart = get_active_cart_for_user(user=request.user)
        return set_billing_address(request, cart=cart, identity=identity_from_request(request))


class GuestCartDetailView(APIView):
    """Return the guest session's active cart."""

    permission_classes = [AllowAny]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Get guest cart",
        description="Returns the guest session cart. Provide X-Session-Id header.",
        parameters=[
            OpenApiParameter(
                name="X-Session-Id",
                location=OpenApiParameter.HEADER,
                required=True,
                description="Guest session identifier",
                type=str,
            )
        ],
        examples=[OpenApiExample("Guest Cart", value={**CART_EXAMPLE, "billing_address": None})],
    )
    def get(self, request):
        session_id = request.headers.get("X-Session-Id")
        if not session_id:
            return Response({"detail": "Missing X-Session-Id."}, status=status.HTTP_400_BAD_REQUEST)
        cart = get_active_cart_for_session(session_id=session_id)
        return Response(CartReadSerializer.from_cart(cart=cart).data, status=status.HTTP_200_OK)


class GuestCartBillingAddressView(APIView):
    """Set the billing address on a guest cart. Stored addresses are not available to guests."""

    permission_classes = [AllowAny]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Set guest billing address",
        request=SetBillingAddressSerializer,
        parameters=[
            OpenApiParameter(
                name="X-Session-Id",
                location=OpenApiParameter.HEADER,
                required=True,
                description="Guest session identifier",
                type=str,
            )
        ],
        responses={
            200: CartReadSerializer,
            400: BILLING_ERROR_RESPONSE,
            401: BILLING_ERROR_RESPONSE,
        },
    )
    def post(self, request):
        session_id = request.headers.get("X-Session-Id")
        if not session_id:
            return Response({"detail": "Missing X-Session-Id."}, status=status.HTTP_400_BAD_REQUEST)
        cart = get_active_cart_for_session(session_id=session_id)
        return set_billing_address(request, cart=cart, identity=IdentityContext.guest())
