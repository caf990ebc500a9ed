"""Billing router - payment form helpers"""

import logging

from fastapi import APIRouter

from .schemas import CardDetails

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/billing", tags=["Billing"])


@router.post("/card/validate")
async def validate_card(data: CardDetails):
    """
    Check the payment form card fields before they are sent to the payment provider.
    Invalid fields are rejected with 422 by the schema validators.
    """
    return {
        "valid": True,
        "last4": data.cardNumber.replace(" ", "")[-4:],
        "expiryDate": data.expiryDate,
        "cardholderName": data.cardholderName,
    }


__all__ = ["router", "validate_card"]
