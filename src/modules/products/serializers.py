"""Product DRF serializers for API output.

Input goes through ``ProductSubmissionValidator``; the serializer is
only used to render stored products.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read-only serializer for the product list."""

    attribute = serializers.CharField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "sku",
            "name",
            "price",
            "product_type",
            "weight",
            "size",
            "height",
            "width",
            "length",
            "attribute",
            "created_at",
        ]
        read_only_fields = fields
