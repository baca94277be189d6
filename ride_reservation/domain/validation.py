"""Phone-number format predicate used at registration time."""

import re

PHONE_NUMBER_PATTERN = re.compile(
    r"^[+]?[(]?[0-9]{3}[)]?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4,6}$"
)


def is_valid_phone_number(number: str) -> bool:
    """``+1234567890``, ``(123) 456-7890`` and ``123.456.78901`` all pass."""
    return PHONE_NUMBER_PATTERN.fullmatch(number) is not None
