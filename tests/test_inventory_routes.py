"""Route tests for the admin form lookup and coverage listing."""

from unittest.mock import patch

from conftest import BANGALORE, GURUGRAM, level


class TestLookupInventoryEndpoint:
    def test_success_shape(self, app_client, fake_client):
        fake_client.levels = [level(BANGALORE, "Bangalore", 5)]

        response = app_client.post("/app/inventory", data={"searchQuery": "SKU123", "pincode": "560001"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "product": {
                "id": "gid://shopify/Product/2002",
                "title": "Cotton Tee",
                "handle": "cotton-tee",
            },
            "inventory": {
                "sku": "SKU123",
                "locationId": BANGALORE,
                "locationName": "Bangalore",
                "quantity": 5,
            },
        }

    def test_missing_fields(self, app_client, fake_client):
        response = app_client.post("/app/inventory", data={"searchQuery": "SKU123"})
        assert response.status_code == 200
        assert response.json() == {"error": "SKU and Pincode are required"}
        assert fake_client.calls == []

    def test_blank_fields(self, app_client):
        response = app_client.post("/app/inventory", data={"searchQuery": "  ", "pincode": "122001"})
        assert response.json() == {"error": "SKU and Pincode are required"}

    def test_unserviceable(self, app_client, fake_client):
        response = app_client.post("/app/inventory", data={"searchQuery": "SKU123", "pincode": "999999"})
        assert response.json() == {"error": "Delivery not available for this pincode"}
        assert fake_client.calls == []

    def test_not_found(self, app_client, fake_client):
        fake_client.variant = None
        response = app_client.post("/app/inventory", data={"searchQuery": "SKU123", "pincode": "122001"})
        assert response.json() == {"error": "No product found with SKU: SKU123"}

    def test_transient_error(self, app_client, fake_client):
        fake_client.fail_on = "inventory"
        response = app_client.post("/app/inventory", data={"searchQuery": "SKU123", "pincode": "122001"})
        assert response.status_code == 200
        assert response.json() == {"error": "Failed to fetch inventory"}


class TestCoverageEndpoint:
    def test_lists_locations(self, app_client):
        response = app_client.get("/app/inventory/coverage")
        assert response.status_code == 200
        locations = response.json()["locations"]
        assert set(locations) == {GURUGRAM, BANGALORE}
        assert "122001" in locations[GURUGRAM]


class TestHealth:
    def test_health(self, app_client):
        assert app_client.get("/health").json() == {"status": "ok"}


class TestLookupLogContext:
    def test_binds_and_clears_request_context(self, app_client):
        with patch("routers.inventory.add_context") as add_context, patch(
            "routers.inventory.clear_context"
        ) as clear_context:
            app_client.post("/app/inventory", data={"searchQuery": "SKU123", "pincode": "999999"})
        add_context.assert_called_once_with(sku="SKU123", pincode="999999")
        clear_context.assert_called_once_with()
