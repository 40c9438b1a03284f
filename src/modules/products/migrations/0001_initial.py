from django.db import migrations, models


def _variant(product_type, populated):
    lookups = {"product_type": product_type}
    for field in ("weight", "size", "height", "width", "length"):
        lookups[f"{field}__isnull"] = field not in populated
    return models.Q(**lookups)


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("sku", models.CharField(max_length=64, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                (
                    "product_type",
                    models.CharField(
                        choices=[
                            ("book", "Book"),
                            ("dvd", "DVD"),
                            ("furniture", "Furniture"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "weight",
                    models.DecimalField(
                        blank=True, decimal_places=2, default=None, max_digits=10, null=True
                    ),
                ),
                (
                    "size",
                    models.DecimalField(
                        blank=True, decimal_places=2, default=None, max_digits=10, null=True
                    ),
                ),
                (
                    "height",
                    models.DecimalField(
                        blank=True, decimal_places=2, default=None, max_digits=10, null=True
                    ),
                ),
                (
                    "width",
                    models.DecimalField(
                        blank=True, decimal_places=2, default=None, max_digits=10, null=True
                    ),
                ),
                (
                    "length",
                    models.DecimalField(
                        blank=True, decimal_places=2, default=None, max_digits=10, null=True
                    ),
                ),
            ],
            options={
                "db_table": "products",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["product_type"], name="products_type_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            _variant("book", ("weight",))
                            | _variant("dvd", ("size",))
                            | _variant("furniture", ("height", "width", "length"))
                        ),
                        name="products_single_variant_payload",
                    ),
                ],
            },
        ),
    ]
