"""
API tests for /api/v1/products

Author: TM3
Date: 2026-10-17
"""
import pytest


PRODUCTS_URL = "/api/v1/products/"


class TestProductListing:
    """Test GET /api/v1/products/"""

    def test_list_all(self, client):
        body = client.get(PRODUCTS_URL).json()

        assert body["status"] == "success"
        assert body["total"] == 8
        assert body["count"] == 8

    def test_in_stock_filter(self, client):
        body = client.get(PRODUCTS_URL, params={"in_stock": True}).json()

        assert body["total"] == 7
        assert all(not p["is_out_of_stock"] for p in body["data"])

    def test_filter_by_seller_state(self, client):
        body = client.get(PRODUCTS_URL, params={"state": "RJ"}).json()

        assert {p["seller_id"] for p in body["data"]} == {"seller2"}

    def test_search_and_sort(self, client):
        body = client.get(PRODUCTS_URL, params={"category": "Fotografia", "sort_by": "price_asc"}).json()

        assert [p["id"] for p in body["data"]] == ["prod8", "prod7", "prod6"]

    def test_pagination(self, client):
        body = client.get(PRODUCTS_URL, params={"limit": 3, "offset": 6}).json()

        assert body["total"] == 8
        assert body["count"] == 2

    def test_invalid_sort_is_400(self, client):
        assert client.get(PRODUCTS_URL, params={"sort_by": "random"}).status_code == 400

    def test_discounted_price_in_payload(self, client):
        product = client.get(f"{PRODUCTS_URL}prod7").json()["data"]

        assert product["price"] == pytest.approx(259.90)
        assert product["discounted_price"] == pytest.approx(207.92)


class TestProductLookups:

    def test_categories(self, client):
        body = client.get(f"{PRODUCTS_URL}categories").json()

        assert body["data"] == ["Acessórios", "Eletrônicos", "Fotografia", "Informática"]

    def test_stats(self, client):
        data = client.get(f"{PRODUCTS_URL}stats").json()["data"]

        assert data["total_products"] == 8
        assert data["out_of_stock"] == 1

    def test_unknown_product_is_404(self, client):
        assert client.get(f"{PRODUCTS_URL}prod99").status_code == 404


class TestStockUpdate:
    """Test PATCH /api/v1/products/{id}/stock"""

    def test_update_stock(self, client):
        response = client.patch(f"{PRODUCTS_URL}prod5/stock", json={"stock": 12})

        assert response.status_code == 200
        assert response.json()["data"]["stock"] == 12
        assert client.get(f"{PRODUCTS_URL}prod5").json()["data"]["is_out_of_stock"] is False

    def test_negative_stock_is_422(self, client):
        assert client.patch(f"{PRODUCTS_URL}prod5/stock", json={"stock": -1}).status_code == 422

    def test_unknown_product_is_404(self, client):
        assert client.patch(f"{PRODUCTS_URL}prod99/stock", json={"stock": 1}).status_code == 404
