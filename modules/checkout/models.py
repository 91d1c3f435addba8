"""
Checkout module data models.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from modules.store.models import Package, Provider


class PaymentMethod(str, Enum):
    """Supported payment methods."""

    WALLET = "wallet"
    INSTAPAY = "instapay"


class CheckoutSummary(BaseModel):
    """What the client is about to pay for."""

    provider: Provider
    package: Package
    amount: Decimal = Field(..., ge=0, description="Amount to charge")
    currency: str = Field(..., description="Currency code")

    model_config = {"frozen": True}


class PaymentOutcome(BaseModel):
    """Result reported by a payment gateway."""

    reference: str = Field(..., description="Gateway transaction reference")
    confirmed: bool = Field(..., description="Whether the payment went through")
    payment_url: Optional[str] = Field(
        None,
        description="Page where the user approves the OTP",
    )
    failure_reason: Optional[str] = None

    model_config = {"frozen": True}
