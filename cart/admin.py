"""Admin registration for cart models.

Carts show their billing and shipping addresses inline so support can see
what a checkout will use.
"""

from django.contrib import admin

from .models import Cart, CartAddress


class CartAddressInline(admin.TabularInline):
    model = CartAddress
    extra = 0
    fields = (
        "address_type",
        "same_as_billing",
        "name",
        "addr1",
        "city",
        "state",
        "postal_code",
        "country_code",
        "phone",
        "updated_at",
    )
    readonly_fields = ("updated_at",)


class OwnerTypeFilter(admin.SimpleListFilter):
    title = "owner type"
    parameter_name = "owner_type"

    def lookups(self, request, model_admin):
        return (
            ("user", "User carts"),
            ("guest", "Guest carts"),
        )

    def queryset(self, request, queryset):
        value = self.value()
        if value == "user":
            return queryset.filter(user__isnull=False)
        if value == "guest":
            return queryset.filter(user__isnull=True)
        return queryset


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "session_id", "status", "updated_at", "created_at")
    list_filter = ("status", OwnerTypeFilter)
    search_fields = ("session_id", "user__username", "user__email")
    ordering = ("-updated_at",)
    readonly_fields = ("created_at", "updated_at")
    inlines = [CartAddressInline]
    raw_id_fields = ("user",)
    list_select_related = ("user",)


@admin.register(CartAddress)
class CartAddressAdmin(admin.ModelAdmin):
    list_display = ("id", "cart", "address_type", "same_as_billing", "city", "country_code", "updated_at")
    list_filter = ("address_type", "country_code")
    search_fields = ("addr1", "city", "postal_code", "cart__user__email", "cart__session_id")
    ordering = ("-updated_at",)
    readonly_fields = ("created_at", "updated_at")
    raw_id_fields = ("cart",)
