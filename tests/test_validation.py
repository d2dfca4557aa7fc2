"""Tests for request payload validation."""

import pytest

from account_service.schemas.user import SigninBody, SignupBody, UpdateBody
from account_service.services.validation import safe_parse

VALID_SIGNUP = {
    "username": "a@b.com",
    "firstName": "Ann",
    "lastName": "Bell",
    "password": "pw123",
}


def test_signup_valid():
    result = safe_parse(SignupBody, VALID_SIGNUP)
    assert result.success
    assert result.errors == []
    assert result.data.username == "a@b.com"
    assert result.data.first_name == "Ann"
    assert result.data.last_name == "Bell"


@pytest.mark.parametrize("missing", ["username", "firstName", "lastName", "password"])
def test_signup_missing_field(missing):
    payload = {k: v for k, v in VALID_SIGNUP.items() if k != missing}
    result = safe_parse(SignupBody, payload)
    assert not result.success
    assert result.data is None
    assert result.errors


def test_signup_rejects_non_email_username():
    result = safe_parse(SignupBody, {**VALID_SIGNUP, "username": "not-an-email"})
    assert not result.success


def test_signup_rejects_non_string_values():
    result = safe_parse(SignupBody, {**VALID_SIGNUP, "password": 12345})
    assert not result.success


def test_unknown_keys_are_ignored():
    result = safe_parse(SignupBody, {**VALID_SIGNUP, "isAdmin": True})
    assert result.success
    assert not hasattr(result.data, "isAdmin")


@pytest.mark.parametrize("payload", [None, [], "a@b.com", 3])
def test_non_object_payload(payload):
    result = safe_parse(SigninBody, payload)
    assert not result.success
    assert result.errors[0]["type"] == "dict_type"


def test_signin_valid():
    result = safe_parse(SigninBody, {"username": "a@b.com", "password": "pw123"})
    assert result.success


def test_update_all_optional():
    result = safe_parse(UpdateBody, {})
    assert result.success
    assert result.data.model_dump(exclude_unset=True) == {}


def test_update_partial():
    result = safe_parse(UpdateBody, {"lastName": "Smith"})
    assert result.success
    assert result.data.model_dump(exclude_unset=True) == {"last_name": "Smith"}


def test_update_rejects_null():
    result = safe_parse(UpdateBody, {"firstName": None})
    assert not result.success


def test_update_rejects_wrong_type():
    result = safe_parse(UpdateBody, {"password": ["pw"]})
    assert not result.success


@pytest.mark.parametrize("schema", [SignupBody, UpdateBody])
@pytest.mark.parametrize("password", ["pw\x00x", "x" * 73, "é" * 37])
def test_password_bcrypt_cannot_hash_is_rejected(schema, password):
    payload = {**VALID_SIGNUP, "password": password}
    result = safe_parse(schema, payload)
    assert not result.success


def test_password_at_byte_limit_is_accepted():
    result = safe_parse(SignupBody, {**VALID_SIGNUP, "password": "x" * 72})
    assert result.success


@pytest.mark.parametrize("schema", [SignupBody, UpdateBody])
@pytest.mark.parametrize("field", ["firstName", "lastName"])
def test_name_length_matches_column(schema, field):
    assert safe_parse(schema, {**VALID_SIGNUP, field: "n" * 255}).success
    assert not safe_parse(schema, {**VALID_SIGNUP, field: "n" * 256}).success
