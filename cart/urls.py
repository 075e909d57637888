"""Cart URL routes (v1)."""

from django.urls import path

from .views import CartBillingAddressView, CartDetailView, GuestCartBillingAddressView, GuestCartDetailView

app_name = "cart"

urlpatterns = [
    path("", CartDetailView.as_view(), name="cart-detail"),
    path("billing-address/", CartBillingAddressView.as_view(), name="cart-billing-address"),
    # Guest cart routes
    path("guest/", GuestCartDetailView.as_view(), name="guest-cart-detail"),
    path("guest/billing-address/", GuestCartBillingAddressView.as_view(), name="guest-cart-billing-address"),
]
