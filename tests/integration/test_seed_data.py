import pytest
from django.core.management import call_command

from modules.categories.models import Category
from modules.products.models import Product, Variant

pytestmark = pytest.mark.integration


class TestSeedDataCommand:
    def test_seeds_catalog(self):
        call_command("seed_data")

        assert Category.objects.count() == 3
        assert Product.objects.count() == 4
        assert Variant.objects.filter(stock=0).count() == 2

    def test_idempotent(self):
        call_command("seed_data")
        call_command("seed_data")

        assert Category.objects.count() == 3
        assert Product.objects.count() == 4
