import cart.models
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Cart",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("session_id", models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("ordered", "Ordered"), ("abandoned", "Abandoned")],
                        db_index=True,
                        default="active",
                        max_length=16,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="carts",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-updated_at"],
                "indexes": [
                    models.Index(fields=["user", "status"], name="cart_cart_user_id_3f2a1c_idx"),
                    models.Index(fields=["session_id", "status"], name="cart_cart_session_8b4e7d_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CartAddress",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "address_type",
                    models.CharField(
                        choices=[("billing", "Billing"), ("shipping", "Shipping")],
                        db_index=True,
                        default="billing",
                        max_length=16,
                    ),
                ),
                ("same_as_billing", models.BooleanField(default=False)),
                ("name", models.CharField(blank=True, max_length=120)),
                ("addr1", models.CharField(max_length=120)),
                ("addr2", models.CharField(blank=True, max_length=120)),
                ("city", models.CharField(max_length=80)),
                ("state", models.CharField(blank=True, max_length=40, null=True)),
                (
                    "postal_code",
                    models.CharField(
                        blank=True,
                        max_length=12,
                        null=True,
                        validators=[
                            django.core.validators.RegexValidator(
                                "^[A-Za-z0-9\\- ]{0,12}$", message="Use standard alphanumeric postal/zip code"
                            )
                        ],
                    ),
                ),
                (
                    "country_code",
                    models.CharField(
                        default=cart.models.default_country_code,
                        max_length=2,
                        validators=[
                            django.core.validators.RegexValidator(
                                "^[A-Z]{2}$", message="Use ISO 3166-1 alpha-2 country code (e.g., US)"
                            )
                        ],
                    ),
                ),
                (
                    "phone",
                    models.CharField(
                        blank=True,
                        max_length=16,
                        validators=[
                            django.core.validators.RegexValidator(
                                "^\\+?[1-9]\\d{1,14}$", message="Use E.164 format (e.g., +14155552671)"
                            )
                        ],
                    ),
                ),
                (
                    "cart",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="addresses",
                        to="cart.cart",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["cart", "address_type"], name="cart_cartad_cart_id_6d9e2b_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("address_type", "billing")),
                        fields=("cart",),
                        name="unique_billing_address_per_cart",
                    )
                ],
            },
        ),
    ]
