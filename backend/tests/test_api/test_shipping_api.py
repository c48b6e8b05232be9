"""
API tests for /api/v1/shipping

Author: TM3
Date: 2026-10-17
"""
import pytest


QUOTE_URL = "/api/v1/shipping/quote"


class TestShippingQuote:
    """Test POST /api/v1/shipping/quote"""

    def test_quote_for_customer(self, client):
        """Test R$349.90 of goods (25% off) to a São Paulo customer"""
        # Act
        response = client.post(QUOTE_URL, json={
            "customer_id": "cust1",
            "items": [{"product_id": "prod2", "quantity": 1}],
        })

        # Assert
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["serviceable"] is True
        assert data["postal_code"] == "01310200"
        assert data["subtotal"] == pytest.approx(349.90)
        assert [(o["name"], o["price"]) for o in data["options"]] == [
            ("Entrega Padrão", 15.0),
            ("Entrega Expressa", 26.25),
            ("Entrega no Mesmo Dia", 22.43),
        ]
        assert all("estimated_delivery_date" in o for o in data["options"])

    def test_quote_free_shipping_over_500(self, client):
        response = client.post(QUOTE_URL, json={
            "postal_code": "20040-002",
            "city": "Rio de Janeiro",
            "items": [{"product_id": "prod1", "quantity": 1}],
        })

        options = response.json()["data"]["options"]
        assert len(options) == 3
        assert all(o["price"] == 0 for o in options)

    def test_same_day_only_in_listed_cities(self, client):
        response = client.post(QUOTE_URL, json={
            "postal_code": "13010-000",
            "city": "Campinas",
            "items": [{"product_id": "prod4", "quantity": 1}],
        })

        names = [o["name"] for o in response.json()["data"]["options"]]
        assert "Entrega no Mesmo Dia" not in names

    def test_unserved_postal_code(self, client):
        response = client.post(QUOTE_URL, json={
            "postal_code": "99999-999",
            "items": [{"product_id": "prod4", "quantity": 1}],
        })

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["serviceable"] is False
        assert data["options"] == []

    def test_quote_without_destination_is_400(self, client):
        response = client.post(QUOTE_URL, json={"items": [{"product_id": "prod4", "quantity": 1}]})

        assert response.status_code == 400

    def test_quote_unknown_customer_is_404(self, client):
        response = client.post(QUOTE_URL, json={"customer_id": "cust99", "items": []})

        assert response.status_code == 404


class TestShippingLookups:

    def test_regions(self, client):
        body = client.get("/api/v1/shipping/regions").json()

        assert body["count"] == 6
        assert body["data"][0] == "São Paulo"

    @pytest.mark.parametrize("postal_code,expected", [
        ("01310-100", True),
        ("80010000", True),
        ("99999999", False),
        ("123", False),
    ])
    def test_serviceable(self, client, postal_code, expected):
        body = client.get(f"/api/v1/shipping/serviceable/{postal_code}").json()

        assert body["data"]["serviceable"] is expected
