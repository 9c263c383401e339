"""HTTP tests for /payment-methods."""

from autospa.seed import DEFAULT_PAYMENT_METHODS


class TestPaymentMethodsApi:
    def test_defaults_seeded_on_first_read(self, client):
        names = [m["name"] for m in client.get("/payment-methods").json()]
        assert names == list(DEFAULT_PAYMENT_METHODS)

        # second read does not duplicate
        assert len(client.get("/payment-methods").json()) == len(DEFAULT_PAYMENT_METHODS)

    def test_create_update_delete(self, client):
        client.get("/payment-methods")

        created = client.post("/payment-methods", json={"name": "Tarjeta"})
        assert created.status_code == 201
        method_id = created.json()["id"]

        updated = client.put(f"/payment-methods/{method_id}", json={"is_active": False})
        assert updated.json()["is_active"] is False
        assert "Tarjeta" not in [m["name"] for m in client.get("/payment-methods").json()]

        assert client.delete(f"/payment-methods/{method_id}").status_code == 204
        assert client.put(f"/payment-methods/{method_id}", json={"name": "x"}).status_code == 404

    def test_blank_name_rejected(self, client):
        assert client.post("/payment-methods", json={"name": ""}).status_code == 400
