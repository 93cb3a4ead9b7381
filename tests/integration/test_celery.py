import pytest

from modules.reports.tasks import inventory_snapshot

pytestmark = pytest.mark.integration


class TestInventorySnapshotTask:
    def test_runs_eagerly_and_returns_summary(self, make_product):
        make_product(variants=[{"sku": "SNAP-1", "stock": 4}])

        result = inventory_snapshot.delay().get()

        assert result["total_products"] == 1
        assert result["total_items"] == 4
        assert result["total_stock_value"] == "40.00"

    def test_registered_name(self):
        assert inventory_snapshot.name == "reports.inventory_snapshot"
