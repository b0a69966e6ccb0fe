"""Nigerian mobile phone number normalization and validation.

Numbers are stored as 11 digits with a 070/080/081/090/091 prefix.
Separators typed by the guest (spaces, dashes, dots, parentheses) are
stripped before validation and storage.
"""

import re

PHONE_PATTERN = re.compile(r"^(070|080|081|090|091)\d{8}$")
SEPARATOR_PATTERN = re.compile(r"[\s\-().]")


def normalize_phone_number(phone_number: str) -> str:
    """Strip separator characters from a phone number.

    Example:
        >>> normalize_phone_number("080-1234-5678")
        '08012345678'
        >>> normalize_phone_number("(0801) 234 5678")
        '08012345678'
    """
    return SEPARATOR_PATTERN.sub("", phone_number)


def is_valid_phone_number(phone_number: str) -> bool:
    """Check a phone number against the national mobile format after normalizing it."""
    return PHONE_PATTERN.match(normalize_phone_number(phone_number)) is not None
