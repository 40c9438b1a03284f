"""Product URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.products.views import ProductListView, ProductSaveView

urlpatterns = [
    path("products/", ProductListView.as_view(), name="product-list"),
    path("products/save/", ProductSaveView.as_view(), name="product-save"),
]
