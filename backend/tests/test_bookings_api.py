"""HTTP tests for /bookings."""

from tests.conftest import booking_payload, make_service, make_settings, seed_booking


class TestCreateBookingApi:
    def test_created_with_relations(self, client, db):
        make_settings(db)
        service = make_service(db, price=120000)

        response = client.post("/bookings", json=booking_payload(service.id))

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "PENDING"
        assert body["date"] == "2030-03-04"
        assert body["time"] == "09:00"
        assert body["total_price"] == 120000
        assert body["reference_code"].startswith("LAV-")
        assert body["notes"] == "Interior too"
        assert body["customer"]["phone"] == "0981123456"
        assert body["vehicle"]["plate"] == "ABC123"
        assert body["vehicle"]["model"] == "Toyota Corolla"
        assert body["service"]["id"] == service.id

    def test_caller_reference_code_kept(self, client, db):
        make_settings(db)
        service = make_service(db)

        response = client.post(
            "/bookings", json=booking_payload(service.id, reference_code="LAV-WEB-0001")
        )

        assert response.status_code == 201
        assert response.json()["reference_code"] == "LAV-WEB-0001"

    def test_slot_full(self, client, db):
        make_settings(db, max_slots_per_time=1)
        service = make_service(db)
        assert client.post("/bookings", json=booking_payload(service.id)).status_code == 201

        response = client.post("/bookings", json=booking_payload(service.id))

        assert response.status_code == 409
        assert response.json()["code"] == "SLOT_FULL"

    def test_unknown_service(self, client, db):
        make_settings(db)

        response = client.post("/bookings", json=booking_payload(999))

        assert response.status_code == 404
        assert response.json()["code"] == "SERVICE_NOT_FOUND"

    def test_duplicate_reference_code(self, client, db):
        make_settings(db, max_slots_per_time=2)
        service = make_service(db)
        payload = booking_payload(service.id, reference_code="LAV-WEB-0001")
        assert client.post("/bookings", json=payload).status_code == 201

        response = client.post("/bookings", json=payload)

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_REFERENCE"

    def test_missing_fields(self, client, db):
        service = make_service(db)
        payload = booking_payload(service.id)
        del payload["time"]

        response = client.post("/bookings", json=payload)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_blank_plate_rejected(self, client, db):
        service = make_service(db)
        payload = booking_payload(service.id)
        payload["customer"]["plate"] = "   "

        response = client.post("/bookings", json=payload)

        assert response.status_code == 400

    def test_plate_of_separators_rejected(self, client, db):
        make_settings(db, max_slots_per_time=2)
        service = make_service(db)

        for phone, plate in (("0981000001", "-"), ("0981000002", "- -")):
            payload = booking_payload(service.id)
            payload["customer"] = {"name": "Ana", "phone": phone, "plate": plate}

            response = client.post("/bookings", json=payload)

            assert response.status_code == 400
            assert response.json()["code"] == "VALIDATION_ERROR"

        assert client.get("/customers").json() == []

    def test_malformed_time_rejected(self, client, db):
        service = make_service(db)

        response = client.post("/bookings", json=booking_payload(service.id, time="9am"))

        assert response.status_code == 400

    def test_booking_reflected_in_availability(self, client, db):
        make_settings(db, max_slots_per_time=1)
        service = make_service(db)
        client.post("/bookings", json=booking_payload(service.id))

        response = client.get("/availability", params={"date": "2030-03-04"})

        nine = next(s for s in response.json()["slots"] if s["time"] == "09:00")
        assert nine["status"] == "FULL"
        assert nine["reason"] == "FULL"
        assert nine["count"] == 1
        assert nine["available"] is False


class TestManageBookingsApi:
    def test_get_and_404(self, client, db):
        make_settings(db)
        service = make_service(db)
        booking = seed_booking(db, service.id)

        assert client.get(f"/bookings/{booking.id}").json()["id"] == booking.id
        assert client.get("/bookings/999").status_code == 404

    def test_list_with_filters(self, client, db):
        make_settings(db, max_slots_per_time=3)
        service = make_service(db)
        seed_booking(db, service.id, time="09:00", phone="1", plate="P1")
        seed_booking(db, service.id, time="08:00", phone="2", plate="P2")
        seed_booking(db, service.id, time="08:30", phone="3", plate="P3", status="COMPLETED")

        body = client.get("/bookings").json()
        assert body["total"] == 3
        assert [b["time"] for b in body["bookings"]] == ["08:00", "08:30", "09:00"]

        pending = client.get("/bookings", params={"status": "PENDING"}).json()
        assert pending["total"] == 2

        page = client.get("/bookings", params={"limit": 1, "offset": 1}).json()
        assert page["total"] == 3
        assert [b["time"] for b in page["bookings"]] == ["08:30"]

        other_day = client.get("/bookings", params={"date": "2030-03-05"}).json()
        assert other_day == {"bookings": [], "total": 0}

    def test_cancel_frees_slot(self, client, db):
        make_settings(db, max_slots_per_time=1)
        service = make_service(db)
        booking_id = client.post("/bookings", json=booking_payload(service.id)).json()["id"]

        response = client.patch(f"/bookings/{booking_id}", json={"status": "CANCELLED"})
        assert response.status_code == 200
        assert response.json()["status"] == "CANCELLED"

        rebooked = client.post(
            "/bookings",
            json=booking_payload(
                service.id,
                customer={"name": "Ana", "phone": "0982000000", "plate": "XYZ789"},
            ),
        )
        assert rebooked.status_code == 201

    def test_cancelled_cannot_be_reopened(self, client, db):
        make_settings(db)
        service = make_service(db)
        booking = seed_booking(db, service.id, status="CANCELLED")

        response = client.patch(f"/bookings/{booking.id}", json={"status": "PENDING"})

        assert response.status_code == 409

    def test_update_notes_only(self, client, db):
        make_settings(db)
        service = make_service(db)
        booking = seed_booking(db, service.id)

        response = client.patch(f"/bookings/{booking.id}", json={"notes": "Bring keys"})

        assert response.status_code == 200
        assert response.json()["notes"] == "Bring keys"
        assert response.json()["status"] == "PENDING"

    def test_unknown_status_rejected(self, client, db):
        make_settings(db)
        service = make_service(db)
        booking = seed_booking(db, service.id)

        response = client.patch(f"/bookings/{booking.id}", json={"status": "LOST"})

        assert response.status_code == 400

    def test_delete(self, client, db):
        make_settings(db)
        service = make_service(db)
        booking = seed_booking(db, service.id)

        assert client.delete(f"/bookings/{booking.id}").status_code == 204
        assert client.get(f"/bookings/{booking.id}").status_code == 404
        assert client.delete(f"/bookings/{booking.id}").status_code == 404
