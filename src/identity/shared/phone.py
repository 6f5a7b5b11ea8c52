"""Validation for phone numbers."""

import re


def validate_phone_number(number):
    """Accept digits, spaces, hyphens, parentheses and an optional leading +.

    Blank values are treated as "no phone number".
    """
    if number is None or not number.strip():
        return None

    number = number.strip()

    # Must contain at least one digit
    if not re.search(r"\d", number):
        raise ValueError(f"Invalid phone number: {number!r}")

    if len(number) > 20 or not re.match(r"^\+?[\d\s\-()]+$", number):
        raise ValueError(f"Invalid phone number: {number!r}")

    return number
