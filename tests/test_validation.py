import pytest

from staybnb.schemas.booking_schema import BookingCreate
from staybnb.schemas.spot_schema import SpotCreate
from staybnb.validation import (
    BOOKING_RULES,
    REVIEW_RULES,
    SIGNUP_RULES,
    SPOT_QUERY_RULES,
    SPOT_RULES,
    RequestValidationFailed,
    collect_errors,
    parse_payload,
)
from conftest import SPOT_PAYLOAD


def test_valid_spot_has_no_errors():
    assert collect_errors(SPOT_PAYLOAD, SPOT_RULES) == {}


def test_zero_coordinates_are_present_values():
    payload = {**SPOT_PAYLOAD, "lat": 0, "lng": 0}

    assert collect_errors(payload, SPOT_RULES) == {}


def test_missing_spot_fields_are_reported_per_field():
    errors = collect_errors({"lat": 91, "lng": -181, "price": 0}, SPOT_RULES)

    assert errors == {
        "address": "Street address is required",
        "city": "City is required",
        "state": "State is required",
        "country": "Country is required",
        "lat": "Latitude is not valid",
        "lng": "Longitude is not valid",
        "name": "Name must be less than 50 characters",
        "description": "Description is required",
        "price": "Price per day is required",
    }


def test_name_must_be_shorter_than_fifty_characters():
    assert collect_errors({**SPOT_PAYLOAD, "name": "x" * 49}, SPOT_RULES) == {}
    assert collect_errors({**SPOT_PAYLOAD, "name": "x" * 50}, SPOT_RULES) == {
        "name": "Name must be less than 50 characters"
    }


def test_blank_strings_are_missing():
    errors = collect_errors({**SPOT_PAYLOAD, "city": "   "}, SPOT_RULES)

    assert errors == {"city": "City is required"}


@pytest.mark.parametrize("stars", [0, 6, 2.5, "five", None, True])
def test_stars_outside_one_to_five_are_rejected(stars):
    errors = collect_errors({"review": "Great", "stars": stars}, REVIEW_RULES)

    assert errors == {"stars": "Stars must be an integer from 1 to 5"}


def test_booking_end_on_start_date_is_rejected():
    errors = collect_errors({"startDate": "2021-11-19", "endDate": "2021-11-19"}, BOOKING_RULES)

    assert errors == {"endDate": "endDate cannot be on or before startDate"}


def test_booking_dates_must_be_iso_dates():
    errors = collect_errors({"startDate": "11/19/2021"}, BOOKING_RULES)

    assert errors == {
        "startDate": "startDate is required and must be a date",
        "endDate": "endDate is required and must be a date",
    }


def test_invalid_email_is_reported():
    errors = collect_errors(
        {"email": "not-an-email", "username": "demo", "firstName": "Demo", "lastName": "User", "password": "secret"},
        SIGNUP_RULES,
    )

    assert errors == {"email": "Invalid email", "password": "Password must be at least 8 characters"}


def test_query_bounds_are_optional_but_checked_when_given():
    assert collect_errors({}, SPOT_QUERY_RULES) == {}
    assert collect_errors({"page": "0", "minPrice": "-1", "maxLat": "abc"}, SPOT_QUERY_RULES) == {
        "page": "Page must be greater than or equal to 1",
        "maxLat": "Maximum latitude is invalid",
        "minPrice": "Minimum price must be greater than or equal to 0",
    }


def test_parse_payload_returns_schema_instance():
    booking = parse_payload({"startDate": "2021-11-19", "endDate": "2021-11-20"}, BOOKING_RULES, BookingCreate)

    assert booking.start_date.isoformat() == "2021-11-19"
    assert booking.end_date.isoformat() == "2021-11-20"


def test_parse_payload_raises_with_field_errors():
    with pytest.raises(RequestValidationFailed) as exc_info:
        parse_payload({**SPOT_PAYLOAD, "lat": "north"}, SPOT_RULES, SpotCreate)

    assert exc_info.value.message == "Bad Request"
    assert exc_info.value.errors == {"lat": "Latitude is not valid"}


@pytest.mark.parametrize("value", ["NaN", float("nan"), "inf", float("-inf")])
def test_non_finite_numbers_are_rejected_with_table_messages(value):
    errors = collect_errors({**SPOT_PAYLOAD, "lat": value, "lng": value, "price": value}, SPOT_RULES)

    assert errors == {
        "lat": "Latitude is not valid",
        "lng": "Longitude is not valid",
        "price": "Price per day is required",
    }
