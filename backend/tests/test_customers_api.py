"""HTTP tests for /customers."""

from tests.conftest import make_service, make_settings, seed_booking


def _seed(db):
    make_settings(db, max_slots_per_time=5)
    service = make_service(db, price=100000)
    seed_booking(db, service.id, time="08:00", phone="0981111111", plate="AAA111",
                 name="Juan Perez", status="COMPLETED")
    seed_booking(db, service.id, time="08:30", phone="0981111111", plate="AAA111",
                 name="Juan Perez", status="COMPLETED")
    seed_booking(db, service.id, time="09:00", phone="0982222222", plate="BBB222",
                 name="Ana Gomez")


class TestCustomersApi:
    def test_stats(self, client, db):
        _seed(db)

        customers = {c["phone"]: c for c in client.get("/customers").json()}

        juan = customers["0981111111"]
        assert juan["completed_count"] == 2
        assert juan["total_spent"] == 200000
        assert juan["last_visit"] == "2030-03-04"
        assert [v["plate"] for v in juan["vehicles"]] == ["AAA111"]

        ana = customers["0982222222"]
        assert ana["completed_count"] == 0
        assert ana["last_visit"] is None

    def test_completed_filter(self, client, db):
        _seed(db)

        response = client.get("/customers", params={"completed": "true"})

        assert [c["name"] for c in response.json()] == ["Juan Perez"]

    def test_search_by_name_and_plate(self, client, db):
        _seed(db)

        by_name = client.get("/customers", params={"search": "gomez"}).json()
        by_plate = client.get("/customers", params={"search": "aaa1"}).json()

        assert [c["name"] for c in by_name] == ["Ana Gomez"]
        assert [c["name"] for c in by_plate] == ["Juan Perez"]
