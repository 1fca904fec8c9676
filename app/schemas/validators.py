"""Custom validators and types."""

import re
from typing import Annotated

from pydantic import AfterValidator, BeforeValidator

# Optional leading + followed by 9-15 digits, e.g. +263771234567 or 0771234567
PHONE_PATTERN = re.compile(r"\+?[0-9]{9,15}")

PHONE_ERROR_MESSAGE = "Please enter a valid contact number, e.g. +263771234567."


def is_valid_phone_number(value: object) -> bool:
    """Check a contact number without raising."""
    return isinstance(value, str) and PHONE_PATTERN.fullmatch(value) is not None


def validate_phone_number(value: object) -> str:
    """
    Validate a contact number.

    Accepts an optional leading ``+`` followed by 9 to 15 digits. Spaces and
    other separators are rejected, as is a missing value.
    """
    if not is_valid_phone_number(value):
        raise ValueError(PHONE_ERROR_MESSAGE)
    return value


def _optional_phone(value: str | None) -> str | None:
    if value is None:
        return None
    return validate_phone_number(value)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


# Annotated type for phone number validation
PhoneNumber = Annotated[str, AfterValidator(validate_phone_number)]

# Optional phone: blank input counts as absent
OptionalPhoneNumber = Annotated[
    str | None,
    BeforeValidator(_blank_to_none),
    AfterValidator(_optional_phone),
]
