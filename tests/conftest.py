import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SHOPIFY_SHOP_DOMAIN", "test-shop.myshopify.com")
os.environ.setdefault("SHOPIFY_ACCESS_TOKEN", "shpat_test")

import pytest

from core.coverage import DEFAULT_LOCATION_PINCODES, LocationCoverageTable
from core.matcher import InventoryLevel, QuantityEntry
from core.shopify_client import ProductRef, ProductVariant, ShopifyApiError

GURUGRAM = "88352981234"
BANGALORE = "88353014002"


def level(location_id, name="Warehouse", available=None, quantities=None):
    """Helper: build an InventoryLevel for a bare location id."""
    if quantities is None:
        quantities = [] if available is None else [QuantityEntry("available", available)]
    return InventoryLevel(
        location_gid=f"gid://shopify/Location/{location_id}",
        location_name=name,
        quantities=quantities,
    )


def variant(sku="SKU123"):
    return ProductVariant(
        id="gid://shopify/ProductVariant/1001",
        sku=sku,
        product=ProductRef(id="gid://shopify/Product/2002", title="Cotton Tee", handle="cotton-tee"),
    )


class FakeShopifyClient:
    """Stands in for ShopifyClient; records every lookup it receives."""

    def __init__(self, variant=None, levels=None, fail_on=None):
        self.variant = variant
        self.levels = levels or []
        self.fail_on = fail_on
        self.calls = []

    def find_variant_by_sku(self, sku):
        self.calls.append(("find_variant_by_sku", sku))
        if self.fail_on == "variant":
            raise ShopifyApiError("boom")
        return self.variant

    def get_inventory_levels(self, variant_id):
        self.calls.append(("get_inventory_levels", variant_id))
        if self.fail_on == "inventory":
            raise ShopifyApiError("boom")
        return self.levels


@pytest.fixture()
def coverage():
    return LocationCoverageTable.from_mapping(DEFAULT_LOCATION_PINCODES)


@pytest.fixture()
def fake_client():
    return FakeShopifyClient(variant=variant())


@pytest.fixture()
def app_client(coverage, fake_client):
    from fastapi.testclient import TestClient

    from core.availability import AvailabilityService
    from core.deps import get_availability_service, get_coverage_table
    from main import app

    app.dependency_overrides[get_coverage_table] = lambda: coverage
    app.dependency_overrides[get_availability_service] = lambda: AvailabilityService(
        coverage=coverage, client=fake_client
    )
    yield TestClient(app)
    app.dependency_overrides.clear()
