from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.categories.models import Category
from modules.products.models import Product, Tag, Variant


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_category():
    """Factory for persisted categories."""

    def _make(name="Apparel", **overrides):
        return Category.objects.create(name=name, **overrides)

    return _make


@pytest.fixture()
def category(make_category):
    return make_category()


@pytest.fixture()
def make_product(category):
    """Factory for persisted products.

    ``variants`` is a list of dicts; ``sku`` is required in each, the
    rest default to a priced variant with 20 units and threshold 5.
    """

    def _make(name="Shirt", variants=None, tags=(), **overrides):
        fields = {
            "description": f"{name} description",
            "category": category,
            "base_price": Decimal("100.00"),
        }
        fields.update(overrides)
        product = Product.objects.create(name=name, **fields)
        for position, row in enumerate(variants or [{"sku": f"{name}-1"}]):
            values = {"price": Decimal("10.00"), "stock": 20, "low_stock_threshold": 5}
            values.update(row)
            Variant.objects.create(product=product, position=position, **values)
        product.tags.set([Tag.objects.get_or_create(name=tag)[0] for tag in tags])
        return product

    return _make
