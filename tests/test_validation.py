import pytest

from noteful.errors import FieldValidationError
from noteful.validation import validate_new_user


def _failure(payload):
    with pytest.raises(FieldValidationError) as excinfo:
        validate_new_user(payload)
    return excinfo.value


def test_returns_normalized_input():
    data = validate_new_user({"username": "bob", "password": "hunter22", "fullname": "  Bob Jones "})

    assert data.username == "bob"
    assert data.password == "hunter22"
    assert data.fullname == "Bob Jones"


@pytest.mark.parametrize("fullname", [None, ""])
def test_blank_fullname_becomes_empty_string(fullname):
    assert validate_new_user({"username": "bob", "password": "hunter22", "fullname": fullname}).fullname == ""
    assert validate_new_user({"username": "bob", "password": "hunter22"}).fullname == ""


def test_missing_username_reported_before_missing_password():
    err = _failure({})

    assert err.message == "Missing field"
    assert err.location == "username"


def test_missing_field_outranks_type_error():
    err = _failure({"username": 5})

    assert (err.message, err.location) == ("Missing field", "password")


def test_type_error_outranks_whitespace():
    err = _failure({"username": " bob ", "password": 12345678})

    assert (err.message, err.location) == ("Incorrect field type", "password")


def test_whitespace_outranks_length():
    err = _failure({"username": "bob", "password": " short "})

    assert (err.message, err.location) == ("Cannot start or end with whitespace", "password")


def test_username_length_outranks_password_length():
    err = _failure({"username": "", "password": "x"})

    assert (err.message, err.location) == ("Must be at least 1 characters long", "username")


def test_whitespace_only_username_is_untrimmed():
    err = _failure({"username": "   ", "password": "hunter22"})

    assert (err.message, err.location) == ("Cannot start or end with whitespace", "username")


def test_password_upper_bound():
    err = _failure({"username": "bob", "password": "p" * 73})

    assert (err.message, err.location) == ("Must be at most 72 characters long", "password")


def test_non_mapping_payload():
    err = _failure("username=bob")

    assert (err.message, err.location) == ("Incorrect field type", "body")


def test_error_body_shape():
    err = _failure({"password": "hunter22"})

    assert err.status_code == 422
    assert err.to_dict() == {"message": "Missing field", "reason": "ValidationError", "location": "username"}


def test_lengths_count_utf16_code_units():
    # four astral characters are eight code units, enough for the minimum
    data = validate_new_user({"username": "bob", "password": "\U0001F600" * 4})
    assert data.password == "\U0001F600" * 4

    err = _failure({"username": "bob", "password": "\U0001F600" * 37})
    assert (err.message, err.location) == ("Must be at most 72 characters long", "password")

    assert validate_new_user({"username": "bob", "password": "\U0001F600" * 36}).username == "bob"
