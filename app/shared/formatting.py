"""Display formatting helpers for names and payment form fields"""

import re
from typing import Any

_NON_DIGITS = re.compile(r"[^0-9]")
_CARD_DIGITS = re.compile(r"\d{4,16}")


def format_display_name(name: Any) -> str:
    """
    Capitalize the first letter of each word and lowercase the rest.

    "john doe" -> "John Doe", "MARY JANE" -> "Mary Jane". None, non-strings
    and blank names give "".
    """
    if not isinstance(name, str):
        return ""
    trimmed = name.strip()
    if not trimmed:
        return ""
    return " ".join(word[0].upper() + word[1:].lower() for word in trimmed.split())


def format_card_number(value: str) -> str:
    """Group card digits in blocks of four, e.g. "1234 5678 9012 3456" """
    digits = _NON_DIGITS.sub("", value)
    match = _CARD_DIGITS.search(digits)
    if not match:
        return digits
    number = match.group(0)
    return " ".join(number[i : i + 4] for i in range(0, len(number), 4))


def format_expiry_date(value: str) -> str:
    """Format expiry digits as MM/YY"""
    digits = _NON_DIGITS.sub("", value)
    if len(digits) >= 2:
        return f"{digits[:2]}/{digits[2:4]}"
    return digits
