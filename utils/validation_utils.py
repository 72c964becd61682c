"""
utils/validation_utils.py

Purpose: Input validation

- Account field predicates (email, phone, password, name, address)
- Pure functions, no side effects
- Non-string input is treated as invalid
"""

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^9[0-9]{9}$")
PASSWORD_SYMBOLS = '!@#$%^&*(),.?":{}|<>'

MIN_NAME_LENGTH = 3
MIN_ADDRESS_LENGTH = 10
MIN_PASSWORD_LENGTH = 7


def is_valid_email(email: str) -> bool:
    """
    Validates basic email shape: something@something.tld, no whitespace.

    Args:
        email: Email string to validate

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(email, str):
        return False
    return bool(EMAIL_PATTERN.fullmatch(email))


def is_valid_phone(phone: str) -> bool:
    """
    Validates mobile number format: a leading 9 followed by 9 digits.

    Args:
        phone: Phone number string

    Returns:
        True if exactly 10 digits starting with 9
    """
    if not isinstance(phone, str):
        return False
    # fullmatch so a trailing newline is not accepted
    return bool(PHONE_PATTERN.fullmatch(phone))


def is_valid_password(password: str) -> bool:
    """
    Validates password complexity.

    Requires at least 7 characters and one symbol from PASSWORD_SYMBOLS.
    """
    if not isinstance(password, str):
        return False
    if len(password) < MIN_PASSWORD_LENGTH:
        return False
    return any(char in PASSWORD_SYMBOLS for char in password)


def is_valid_name(name: str) -> bool:
    if not isinstance(name, str):
        return False
    return len(name) >= MIN_NAME_LENGTH


def is_valid_address(address: str) -> bool:
    if not isinstance(address, str):
        return False
    return len(address) >= MIN_ADDRESS_LENGTH
