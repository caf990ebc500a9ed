"""Shared validation utilities"""

import re
from typing import Optional

from .formatting import format_card_number, format_expiry_date

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def validate_card_number(card_number: str) -> bool:
    """Card numbers have 13 to 19 digits once spaces are removed"""
    cleaned = re.sub(r"\s", "", card_number)
    return re.fullmatch(r"\d{13,19}", cleaned) is not None


def _leading_int(text: str) -> Optional[int]:
    """Integer spelled by the leading sign and digits of text, or None"""
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else None


def validate_expiry_date(expiry_date: str) -> bool:
    """
    Expiry dates are MM/YY with a month between 01 and 12.

    Each half is read up to its first non-digit, so "12/3x" passes as 12/3.
    """
    if len(expiry_date) != 5:
        return False
    month, _, year = expiry_date.partition("/")
    month_num = _leading_int(month)
    year_num = _leading_int(year)
    if month_num is None or year_num is None:
        return False
    return 1 <= month_num <= 12 and 0 <= year_num <= 99


def validate_cvv(cvv: str) -> bool:
    """CVV codes have 3 or 4 digits"""
    return re.fullmatch(r"\d{3,4}", cvv) is not None


def normalize_card_number(card_number: Optional[str]) -> Optional[str]:
    """
    Format and validate a card number.

    Args:
        card_number: Card number as typed, with or without spaces

    Returns:
        Card number grouped in blocks of four digits

    Raises:
        ValueError: If the number does not have 13 to 19 digits
    """
    if not card_number:
        return card_number

    formatted = format_card_number(card_number)
    if not validate_card_number(formatted):
        raise ValueError("Card number must be between 13 and 19 digits")

    return formatted


def normalize_expiry_date(expiry_date: Optional[str]) -> Optional[str]:
    """
    Format and validate a card expiry date.

    Args:
        expiry_date: Expiry date such as "0427", "04/27" or "04 / 27"

    Returns:
        Expiry date as MM/YY

    Raises:
        ValueError: If the month or year is out of range
    """
    if not expiry_date:
        return expiry_date

    formatted = format_expiry_date(expiry_date)
    if not validate_expiry_date(formatted):
        raise ValueError("Expiry date must be a valid MM/YY date")

    return formatted


def normalize_cvv(cvv: Optional[str]) -> Optional[str]:
    """
    Validate a card security code.

    Raises:
        ValueError: If the code is not 3 or 4 digits
    """
    if not cvv:
        return cvv

    cvv = cvv.strip()
    if not validate_cvv(cvv):
        raise ValueError("CVV must be 3 or 4 digits")

    return cvv
