"""
Validation of the account registration payload.

The rules run in a fixed order and the first violation wins, so a client
always sees exactly one problem per request:

1. required fields present
2. string fields are strings
3. trimmed fields carry no leading/trailing whitespace
4. minimum lengths
5. maximum lengths
"""
from typing import Any, Dict, Mapping

from .errors import FieldValidationError
from .schemas import UserCreate

REQUIRED_FIELDS = ("username", "password")
STRING_FIELDS = ("username", "password", "fullname")
TRIMMED_FIELDS = ("username", "password")

SIZED_FIELDS: Dict[str, Dict[str, int]] = {
    "username": {"min": 1},
    "password": {"min": 8, "max": 72},
}


def _check_required(payload: Mapping[str, Any]) -> None:
    for field in REQUIRED_FIELDS:
        if field not in payload:
            raise FieldValidationError("Missing field", field)


def _check_types(payload: Mapping[str, Any]) -> None:
    for field in STRING_FIELDS:
        if field not in payload:
            continue
        value = payload[field]
        if field not in REQUIRED_FIELDS and value is None:
            continue
        if not isinstance(value, str):
            raise FieldValidationError("Incorrect field type", field)


def _check_trimmed(payload: Mapping[str, Any]) -> None:
    for field in TRIMMED_FIELDS:
        if payload[field].strip() != payload[field]:
            raise FieldValidationError("Cannot start or end with whitespace", field)


def _utf16_length(value: str) -> int:
    """
    Length in UTF-16 code units, the way browsers and JS clients count it.
    Characters outside the BMP (most emoji) count as two.
    """
    return len(value.encode("utf-16-le", "surrogatepass")) // 2


def _check_sizes(payload: Mapping[str, Any]) -> None:
    for field, size in SIZED_FIELDS.items():
        if "min" in size and _utf16_length(payload[field]) < size["min"]:
            raise FieldValidationError(f"Must be at least {size['min']} characters long", field)
    for field, size in SIZED_FIELDS.items():
        if "max" in size and _utf16_length(payload[field]) > size["max"]:
            raise FieldValidationError(f"Must be at most {size['max']} characters long", field)


def validate_new_user(payload: Any) -> UserCreate:
    """
    Check a raw registration body and return the normalized input.

    Raises FieldValidationError for the first rule the payload breaks.
    """
    if not isinstance(payload, Mapping):
        raise FieldValidationError("Incorrect field type", "body")

    _check_required(payload)
    _check_types(payload)
    _check_trimmed(payload)
    _check_sizes(payload)

    fullname = payload.get("fullname") or ""
    return UserCreate(
        username=payload["username"],
        password=payload["password"],
        fullname=fullname.strip(),
    )
