import django_filters

from modules.products.models import Product, ProductType


class ProductFilter(django_filters.FilterSet):
    product_type = django_filters.ChoiceFilter(choices=ProductType.choices)
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    sku = django_filters.CharFilter(field_name="sku", lookup_expr="iexact")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = Product
        fields = ["product_type", "name", "sku", "min_price", "max_price"]
