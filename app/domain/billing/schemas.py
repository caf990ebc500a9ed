"""Billing domain schemas - Pydantic models for payment form input"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.formatting import format_display_name
from ...shared.validators import normalize_card_number, normalize_cvv, normalize_expiry_date


class CardDetails(BaseModel):
    """Card fields from the subscription payment form"""

    cardNumber: str
    expiryDate: str
    cvv: str
    cardholderName: Optional[str] = None

    @field_validator("cardNumber")
    @classmethod
    def validate_card_number(cls, v):
        if not v or not v.strip():
            raise ValueError("Card number is required")
        return normalize_card_number(v)

    @field_validator("expiryDate")
    @classmethod
    def validate_expiry_date(cls, v):
        if not v or not v.strip():
            raise ValueError("Expiry date is required")
        return normalize_expiry_date(v)

    @field_validator("cvv")
    @classmethod
    def validate_cvv(cls, v):
        if not v or not v.strip():
            raise ValueError("CVV is required")
        return normalize_cvv(v)

    @field_validator("cardholderName")
    @classmethod
    def format_cardholder_name(cls, v):
        if v:
            return format_display_name(v) or None
        return v
