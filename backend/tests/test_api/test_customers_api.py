"""
API tests for /api/v1/customers

Author: TM3
Date: 2026-10-17
"""

CUSTOMERS_URL = "/api/v1/customers/"


def customer_payload(**overrides):
    payload = {
        "name": "Elisa Prado",
        "email": "elisa@email.com",
        "phone": "41999990000",
        "tax_id": "111.222.333-44",
        "address": {
            "street": "Rua XV de Novembro",
            "number": "700",
            "city": "Curitiba",
            "state": "PR",
            "postal_code": "80020-310",
        },
    }
    payload.update(overrides)
    return payload


class TestCustomersApi:

    def test_search(self, client):
        body = client.get(CUSTOMERS_URL, params={"search": "bruno"}).json()

        assert [c["id"] for c in body["data"]] == ["cust2"]

    def test_list_all(self, client):
        assert client.get(CUSTOMERS_URL).json()["count"] == 4

    def test_get_unknown_is_404(self, client):
        assert client.get(f"{CUSTOMERS_URL}cust99").status_code == 404

    def test_create(self, client):
        response = client.post(CUSTOMERS_URL, json=customer_payload())

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"] == "cust5"
        assert data["address"]["postal_code"] == "80020310"
        assert data["address"]["country"] == "Brasil"

    def test_create_with_bad_postal_code_is_422(self, client):
        payload = customer_payload()
        payload["address"]["postal_code"] = "8002"

        assert client.post(CUSTOMERS_URL, json=payload).status_code == 422

    def test_create_without_tax_id_is_422(self, client):
        payload = customer_payload()
        del payload["tax_id"]

        assert client.post(CUSTOMERS_URL, json=payload).status_code == 422

    def test_update(self, client):
        response = client.patch(f"{CUSTOMERS_URL}cust3", json={"email": "carla@email.com"})

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "carla@email.com"

    def test_update_blank_tax_id_is_400(self, client):
        response = client.patch(f"{CUSTOMERS_URL}cust3", json={"tax_id": "  "})

        assert response.status_code == 400

    def test_update_unknown_is_404(self, client):
        assert client.patch(f"{CUSTOMERS_URL}cust99", json={"name": "X"}).status_code == 404

    def test_customer_orders(self, client):
        body = client.get(f"{CUSTOMERS_URL}cust1/orders").json()

        assert [o["id"] for o in body["data"]] == ["ORD1A2B3C4D"]

    def test_address_change_keeps_order_destination(self, client):
        """Test orders keep the address copied when they were created"""
        address = customer_payload()["address"]

        client.patch(f"{CUSTOMERS_URL}cust1", json={"address": address})
        order = client.get("/api/v1/orders/ORD1A2B3C4D").json()["data"]

        assert order["shipping_destination"]["city"] == "São Paulo"
