"""Request validation tables.

Every request body (and the spot search query string) is checked against an
ordered table of ``FieldRule(field, check, message)`` entries before it is
parsed into a pydantic schema. The first failing rule for a field produces
that field's message; later rules for the same field are skipped.

Presence is explicit: a value is present when the key exists, is not null
and is not a blank string. ``0`` and ``false`` are present values.
"""
import math
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type

from email_validator import EmailNotValidError, validate_email
from fastapi import Request
from pydantic import BaseModel, ValidationError

Check = Callable[[Any, Mapping[str, Any]], bool]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_INTEGER = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class FieldRule:
    field: str
    check: Check
    message: str


class RequestValidationFailed(Exception):
    """Raised when a payload fails its validation table; rendered as HTTP 400."""

    def __init__(self, errors: Dict[str, str], message: str = "Bad Request"):
        super().__init__(message)
        self.message = message
        self.errors = errors


# Value helpers


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _as_number(value: Any) -> Optional[float]:
    """Finite number from a JSON number or numeric string; NaN and infinities are not numbers here"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_integer(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER.match(value.strip()):
        return int(value)
    return None


def _as_date(value: Any) -> Optional[date]:
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


# Checks


def present(value: Any, data: Mapping[str, Any]) -> bool:
    return not _is_blank(value)


def number_between(low: Optional[float] = None, high: Optional[float] = None) -> Check:
    def check(value: Any, data: Mapping[str, Any]) -> bool:
        number = _as_number(value)
        if number is None:
            return False
        if low is not None and number < low:
            return False
        if high is not None and number > high:
            return False
        return True

    return check


def positive_number(value: Any, data: Mapping[str, Any]) -> bool:
    number = _as_number(value)
    return number is not None and number > 0


def integer_between(low: int, high: int) -> Check:
    def check(value: Any, data: Mapping[str, Any]) -> bool:
        number = _as_integer(value)
        return number is not None and low <= number <= high

    return check


def shorter_than(limit: int) -> Check:
    def check(value: Any, data: Mapping[str, Any]) -> bool:
        return isinstance(value, str) and len(value) < limit

    return check


def at_least_chars(minimum: int) -> Check:
    def check(value: Any, data: Mapping[str, Any]) -> bool:
        return isinstance(value, str) and len(value) >= minimum

    return check


def is_string(value: Any, data: Mapping[str, Any]) -> bool:
    return isinstance(value, str)


def is_boolean_if_given(value: Any, data: Mapping[str, Any]) -> bool:
    return value is None or isinstance(value, bool)


def iso_date(value: Any, data: Mapping[str, Any]) -> bool:
    return _as_date(value) is not None


def date_after(other_field: str) -> Check:
    """Passes when the other field is not a valid date: that field reports its own error."""

    def check(value: Any, data: Mapping[str, Any]) -> bool:
        start = _as_date(data.get(other_field))
        end = _as_date(value)
        if start is None or end is None:
            return True
        return end > start

    return check


def email_address(value: Any, data: Mapping[str, Any]) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def optional(check: Check) -> Check:
    def wrapper(value: Any, data: Mapping[str, Any]) -> bool:
        return value is None or check(value, data)

    return wrapper


# Tables

SPOT_RULES: List[FieldRule] = [
    FieldRule("address", present, "Street address is required"),
    FieldRule("city", present, "City is required"),
    FieldRule("state", present, "State is required"),
    FieldRule("country", present, "Country is required"),
    FieldRule("lat", number_between(-90, 90), "Latitude is not valid"),
    FieldRule("lng", number_between(-180, 180), "Longitude is not valid"),
    FieldRule("name", present, "Name must be less than 50 characters"),
    FieldRule("name", shorter_than(50), "Name must be less than 50 characters"),
    FieldRule("description", present, "Description is required"),
    FieldRule("price", positive_number, "Price per day is required"),
]

REVIEW_RULES: List[FieldRule] = [
    FieldRule("review", present, "Review text is required"),
    FieldRule("review", is_string, "Review text is required"),
    FieldRule("stars", integer_between(1, 5), "Stars must be an integer from 1 to 5"),
]

BOOKING_RULES: List[FieldRule] = [
    FieldRule("startDate", iso_date, "startDate is required and must be a date"),
    FieldRule("endDate", iso_date, "endDate is required and must be a date"),
    FieldRule("endDate", date_after("startDate"), "endDate cannot be on or before startDate"),
]

SPOT_IMAGE_RULES: List[FieldRule] = [
    FieldRule("url", present, "Image url is required"),
    FieldRule("url", is_string, "Image url is required"),
    FieldRule("preview", is_boolean_if_given, "Preview must be true or false"),
]

REVIEW_IMAGE_RULES: List[FieldRule] = [
    FieldRule("url", present, "Image url is required"),
    FieldRule("url", is_string, "Image url is required"),
]

SIGNUP_RULES: List[FieldRule] = [
    FieldRule("email", email_address, "Invalid email"),
    FieldRule("username", present, "Username is required"),
    FieldRule("username", is_string, "Username is required"),
    FieldRule("firstName", present, "First Name is required"),
    FieldRule("firstName", is_string, "First Name is required"),
    FieldRule("lastName", present, "Last Name is required"),
    FieldRule("lastName", is_string, "Last Name is required"),
    FieldRule("password", at_least_chars(8), "Password must be at least 8 characters"),
]

LOGIN_RULES: List[FieldRule] = [
    FieldRule("credential", present, "Email or username is required"),
    FieldRule("password", present, "Password is required"),
]

SPOT_QUERY_RULES: List[FieldRule] = [
    FieldRule("page", optional(integer_between(1, 10)), "Page must be greater than or equal to 1"),
    FieldRule("size", optional(integer_between(1, 20)), "Size must be greater than or equal to 1"),
    FieldRule("maxLat", optional(number_between(-90, 90)), "Maximum latitude is invalid"),
    FieldRule("minLat", optional(number_between(-90, 90)), "Minimum latitude is invalid"),
    FieldRule("minLng", optional(number_between(-180, 180)), "Minimum longitude is invalid"),
    FieldRule("maxLng", optional(number_between(-180, 180)), "Maximum longitude is invalid"),
    FieldRule("minPrice", optional(number_between(0)), "Minimum price must be greater than or equal to 0"),
    FieldRule("maxPrice", optional(number_between(0)), "Maximum price must be greater than or equal to 0"),
]


def collect_errors(data: Mapping[str, Any], rules: Sequence[FieldRule]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for rule in rules:
        if rule.field in errors:
            continue
        if not rule.check(data.get(rule.field), data):
            errors[rule.field] = rule.message
    return errors


def _errors_from_pydantic(exc: ValidationError) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "body"
        errors.setdefault(field, error["msg"])
    return errors


def parse_payload(data: Mapping[str, Any], rules: Sequence[FieldRule], schema: Type[BaseModel]):
    errors = collect_errors(data, rules)
    if errors:
        raise RequestValidationFailed(errors)
    try:
        return schema.model_validate(dict(data))
    except ValidationError as exc:
        raise RequestValidationFailed(_errors_from_pydantic(exc))


def validated_body(schema: Type[BaseModel], rules: Sequence[FieldRule]):
    """Build a dependency that validates the JSON body against ``rules`` and parses it into ``schema``."""

    async def dependency(request: Request):
        try:
            data = await request.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            raise RequestValidationFailed({"body": "Request body must be a JSON object"})
        return parse_payload(data, rules, schema)

    return dependency


def validated_query(schema: Type[BaseModel], rules: Sequence[FieldRule]):
    """Same as :func:`validated_body` for the query string."""

    def dependency(request: Request):
        return parse_payload(dict(request.query_params), rules, schema)

    return dependency
