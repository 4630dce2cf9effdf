from datetime import datetime, timedelta

import pytest

VALID_BOOKING = {
    "tourId": "tour-42",
    "tourTitle": "Srimangal Tea Garden Trek",
    "userEmail": "traveler@example.com",
    "travelDate": "2025-11-02",
    "guests": 2,
    "pricePerPerson": 50,
}


def test_create_booking(client, stores):
    response = client.post("/bookings", json=VALID_BOOKING)

    assert response.status_code == 201
    inserted_id = response.json()["data"]["insertedId"]
    stored = next(iter(stores.bookings.docs.values()))
    assert str(stored["_id"]) == inserted_id
    assert stored["status"] == "pending"
    assert stored["paymentStatus"] == "unpaid"
    assert stored["tourId"] == "tour-42"
    assert stored["pricePerPerson"] == 50
    assert isinstance(stored["createdAt"], datetime)
    assert "transactionId" not in stored


def test_create_booking_ignores_client_payment_state(client, stores):
    payload = {**VALID_BOOKING, "paymentStatus": "paid", "status": "confirmed", "transactionId": "pi_fake"}

    assert client.post("/bookings", json=payload).status_code == 201

    stored = next(iter(stores.bookings.docs.values()))
    assert stored["status"] == "pending"
    assert stored["paymentStatus"] == "unpaid"
    assert "transactionId" not in stored


@pytest.mark.parametrize("missing", ["tourId", "userEmail", "travelDate"])
def test_create_booking_requires_fields(client, stores, missing):
    payload = {k: v for k, v in VALID_BOOKING.items() if k != missing}

    response = client.post("/bookings", json=payload)

    assert response.status_code == 400
    assert "Missing required fields" in response.json()["detail"]
    assert stores.bookings.docs == {}


def test_create_booking_rejects_empty_required_field(client, stores):
    response = client.post("/bookings", json={**VALID_BOOKING, "travelDate": ""})

    assert response.status_code == 400
    assert stores.bookings.docs == {}


def test_list_bookings_filters_and_orders(client, make_booking):
    now = datetime.utcnow()
    older = make_booking(userEmail="a@example.com", createdAt=now - timedelta(days=2))
    newer = make_booking(userEmail="a@example.com", createdAt=now, status="confirmed")
    make_booking(userEmail="b@example.com", createdAt=now - timedelta(days=1))

    everything = client.get("/bookings").json()["data"]
    mine = client.get("/bookings", params={"email": "a@example.com"}).json()["data"]
    confirmed = client.get("/bookings", params={"status": "confirmed"}).json()["data"]

    assert len(everything) == 3
    assert [b["_id"] for b in mine] == [newer, older]
    assert [b["_id"] for b in confirmed] == [newer]


def test_get_booking(client, make_booking):
    booking_id = make_booking()

    response = client.get(f"/bookings/{booking_id}")

    assert response.status_code == 200
    assert response.json()["data"]["_id"] == booking_id
    assert client.get("/bookings/64b7f0c2e4b0a1a2b3c4d5e6").status_code == 404
    assert client.get("/bookings/not-an-id").status_code == 404


def test_update_booking(client, stores, make_booking):
    booking_id = make_booking()

    response = client.patch(f"/bookings/{booking_id}", json={"status": "cancelled", "guests": 3})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "cancelled"
    assert data["guests"] == 3
    assert data["updatedAt"] is not None


def test_update_booking_cannot_mark_paid(client, stores, make_booking):
    booking_id = make_booking()

    response = client.patch(f"/bookings/{booking_id}", json={"paymentStatus": "paid", "transactionId": "pi_x"})

    assert response.status_code == 400
    booking = next(iter(stores.bookings.docs.values()))
    assert booking["paymentStatus"] == "unpaid"
    assert "transactionId" not in booking


def test_update_cannot_confirm_unpaid_booking(client, stores, make_booking):
    booking_id = make_booking()

    response = client.patch(f"/bookings/{booking_id}", json={"status": "confirmed"})

    assert response.status_code == 400
    booking = next(iter(stores.bookings.docs.values()))
    assert booking["status"] == "pending"
    assert booking["paymentStatus"] == "unpaid"
    assert stores.bookings.update_calls == 0


def test_update_cannot_reopen_paid_booking(client, stores, make_booking):
    booking_id = make_booking(status="confirmed", paymentStatus="paid", transactionId="pi_123")

    response = client.patch(f"/bookings/{booking_id}", json={"status": "pending"})

    assert response.status_code == 400
    booking = next(iter(stores.bookings.docs.values()))
    assert booking["status"] == "confirmed"
    assert booking["paymentStatus"] == "paid"


def test_update_missing_booking(client):
    response = client.patch("/bookings/64b7f0c2e4b0a1a2b3c4d5e6", json={"status": "cancelled"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Booking not found"


def test_update_rejects_unknown_status(client, make_booking):
    booking_id = make_booking()
    assert client.patch(f"/bookings/{booking_id}", json={"status": "refunded"}).status_code == 400


def test_delete_booking(client, stores, make_booking):
    booking_id = make_booking()

    assert client.delete(f"/bookings/{booking_id}").status_code == 200
    assert stores.bookings.docs == {}
    assert client.delete(f"/bookings/{booking_id}").status_code == 404
