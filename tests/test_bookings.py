from datetime import timedelta

import pytest

from staybnb.database import SessionLocal
from staybnb.models.booking_model import Booking
from staybnb.services.booking_conflicts import current_date


def book(client, user, spot_id, start, end):
    return client.post(
        f"/api/spots/{spot_id}/bookings",
        json={"startDate": start.isoformat(), "endDate": end.isoformat()},
        headers=user["headers"],
    )


@pytest.fixture
def stay():
    start = current_date() + timedelta(days=30)
    return start, start + timedelta(days=3)


def test_create_booking(client, guest, spot, stay):
    response = book(client, guest, spot["id"], *stay)

    assert response.status_code == 201
    body = response.json()
    assert body["spotId"] == spot["id"]
    assert body["userId"] == guest["id"]
    assert body["startDate"] == stay[0].isoformat()
    assert body["endDate"] == stay[1].isoformat()


def test_create_booking_for_missing_spot(client, guest, stay):
    response = book(client, guest, 999, *stay)

    assert response.status_code == 404
    assert response.json() == {"message": "Spot couldn't be found"}


def test_owner_cannot_book_own_spot(client, host, spot, stay):
    response = book(client, host, spot["id"], *stay)

    assert response.status_code == 403
    assert response.json() == {"message": "Spot must NOT belong to the current user"}


def test_create_booking_rejects_end_before_start(client, guest, spot, stay):
    start, end = stay
    response = book(client, guest, spot["id"], end, start)

    assert response.status_code == 400
    assert response.json() == {
        "message": "Bad Request",
        "errors": {"endDate": "endDate cannot be on or before startDate"},
    }


def test_create_booking_rejects_malformed_dates(client, guest, spot):
    response = client.post(
        f"/api/spots/{spot['id']}/bookings", json={"startDate": "tomorrow"}, headers=guest["headers"]
    )

    assert response.status_code == 400
    assert set(response.json()["errors"]) == {"startDate", "endDate"}


def test_overlapping_booking_is_rejected(client, guest, make_user, spot, stay):
    start, end = stay
    assert book(client, guest, spot["id"], start, end).status_code == 201
    other = make_user("other")

    response = book(client, other, spot["id"], start + timedelta(days=1), end + timedelta(days=1))

    assert response.status_code == 403
    assert response.json() == {
        "message": "Sorry, this spot is already booked for the specified dates",
        "errors": {
            "startDate": "Start date conflicts with an existing booking",
            "endDate": "End date conflicts with an existing booking",
        },
    }


def test_identical_and_contained_bookings_are_rejected(client, guest, spot, stay):
    start, end = stay
    assert book(client, guest, spot["id"], start - timedelta(days=5), end + timedelta(days=5)).status_code == 201

    assert book(client, guest, spot["id"], start, end).status_code == 403
    assert book(client, guest, spot["id"], start - timedelta(days=5), end + timedelta(days=5)).status_code == 403


def test_back_to_back_bookings_are_allowed(client, guest, make_user, spot, stay):
    start, end = stay
    other = make_user("other")

    assert book(client, guest, spot["id"], start, end).status_code == 201
    assert book(client, other, spot["id"], end, end + timedelta(days=2)).status_code == 201
    assert book(client, other, spot["id"], start - timedelta(days=2), start).status_code == 201


def test_same_dates_on_another_spot_are_allowed(client, host, guest, make_spot, stay):
    first = make_spot(host)
    second = make_spot(host, name="Second Spot")

    assert book(client, guest, first["id"], *stay).status_code == 201
    assert book(client, guest, second["id"], *stay).status_code == 201


def test_current_user_bookings_include_spot(client, host, guest, spot, stay):
    client.post(
        f"/api/spots/{spot['id']}/images",
        json={"url": "https://example.com/front.jpg", "preview": True},
        headers=host["headers"],
    )
    booking = book(client, guest, spot["id"], *stay).json()

    response = client.get("/api/bookings/current", headers=guest["headers"])

    assert response.status_code == 200
    [item] = response.json()["Bookings"]
    assert item["id"] == booking["id"]
    assert item["Spot"]["id"] == spot["id"]
    assert item["Spot"]["previewImage"] == "https://example.com/front.jpg"


def test_spot_bookings_for_non_owner_show_dates_only(client, guest, make_user, spot, stay):
    book(client, guest, spot["id"], *stay)
    other = make_user("other")

    response = client.get(f"/api/spots/{spot['id']}/bookings", headers=other["headers"])

    assert response.status_code == 200
    assert response.json() == {
        "Bookings": [
            {"spotId": spot["id"], "startDate": stay[0].isoformat(), "endDate": stay[1].isoformat()}
        ]
    }


def test_spot_bookings_for_owner_show_guest(client, host, guest, spot, stay):
    booking = book(client, guest, spot["id"], *stay).json()

    response = client.get(f"/api/spots/{spot['id']}/bookings", headers=host["headers"])

    assert response.status_code == 200
    [item] = response.json()["Bookings"]
    assert item["id"] == booking["id"]
    assert item["userId"] == guest["id"]
    assert item["User"] == {"id": guest["id"], "firstName": "Guest", "lastName": "Tester"}
    assert "createdAt" in item and "updatedAt" in item


def test_spot_bookings_for_missing_spot(client, guest):
    response = client.get("/api/spots/999/bookings", headers=guest["headers"])

    assert response.status_code == 404


def _insert_booking(spot_id, user_id, start, end):
    db = SessionLocal()
    try:
        booking = Booking(spot_id=spot_id, user_id=user_id, start_date=start, end_date=end)
        db.add(booking)
        db.commit()
        return booking.id
    finally:
        db.close()


def test_delete_future_booking(client, guest, spot):
    tomorrow = current_date() + timedelta(days=1)
    booking = book(client, guest, spot["id"], tomorrow, tomorrow + timedelta(days=2)).json()

    response = client.delete(f"/api/bookings/{booking['id']}", headers=guest["headers"])

    assert response.status_code == 200
    assert response.json() == {"message": "Successfully deleted"}
    assert client.get("/api/bookings/current", headers=guest["headers"]).json() == {"Bookings": []}


def test_delete_started_booking_is_rejected(client, guest, spot):
    yesterday = current_date() - timedelta(days=1)
    booking_id = _insert_booking(spot["id"], guest["id"], yesterday, yesterday + timedelta(days=3))

    response = client.delete(f"/api/bookings/{booking_id}", headers=guest["headers"])

    assert response.status_code == 403
    assert response.json() == {"message": "Bookings that have been started can't be deleted"}


def test_delete_booking_starting_today_is_rejected(client, guest, spot):
    today = current_date()
    booking_id = _insert_booking(spot["id"], guest["id"], today, today + timedelta(days=1))

    response = client.delete(f"/api/bookings/{booking_id}", headers=guest["headers"])

    assert response.status_code == 403


def test_delete_someone_elses_booking_is_forbidden(client, host, guest, spot, stay):
    booking = book(client, guest, spot["id"], *stay).json()

    response = client.delete(f"/api/bookings/{booking['id']}", headers=host["headers"])

    assert response.status_code == 403
    assert response.json() == {"message": "Forbidden"}


def test_delete_missing_booking(client, guest):
    response = client.delete("/api/bookings/999", headers=guest["headers"])

    assert response.status_code == 404
    assert response.json() == {"message": "Booking couldn't be found"}
