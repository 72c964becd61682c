import pytest

from utils.validation_utils import (
    is_valid_email,
    is_valid_phone,
    is_valid_password,
    is_valid_name,
    is_valid_address,
)


@pytest.mark.parametrize("phone, expected", [
    ("9123456789", True),
    ("8123456789", False),
    ("912345", False),
    ("91234567890", False),
    ("9123456789\n", False),
    ("9١٢٣٤٥٦٧٨٩", False),
    ("９123456789", False),
    ("", False),
    (None, False),
])
def test_is_valid_phone(phone, expected):
    assert is_valid_phone(phone) is expected


@pytest.mark.parametrize("password, expected", [
    ("abc1234", False),
    ("abc123!", True),
    ("ab!", False),
    ('longpass"', True),
    (None, False),
])
def test_is_valid_password(password, expected):
    assert is_valid_password(password) is expected


@pytest.mark.parametrize("email, expected", [
    ("a@b.com", True),
    ("first.last@example.co.uk", True),
    ("no-at-sign.com", False),
    ("a@b", False),
    ("a b@c.com", False),
    ("a@@b.com", False),
])
def test_is_valid_email(email, expected):
    assert is_valid_email(email) is expected


def test_name_and_address_lengths():
    assert is_valid_name("Bob")
    assert not is_valid_name("Bo")
    assert is_valid_address("1 Long Rd.")
    assert not is_valid_address("Short Rd")
