"""
Checkout module.

Stubbed payment flow that ends in a store subscription.

Public API:
- IPaymentGateway: Interface for payment providers
- StubPaymentGateway: Gateway that confirms every payment
- CheckoutService: Summarize and pay for a package
- Checkout exceptions: LoginRequiredError, PaymentDeclinedError, etc.
"""

from .interfaces import IPaymentGateway
from .models import CheckoutSummary, PaymentMethod, PaymentOutcome
from .exceptions import (
    CheckoutError,
    LoginRequiredError,
    PackageUnavailableError,
    PaymentDeclinedError,
    PaymentGatewayError,
)
from .service import CheckoutService, StubPaymentGateway

__all__ = [
    # Interface
    "IPaymentGateway",
    # Services
    "CheckoutService",
    "StubPaymentGateway",
    # Models
    "CheckoutSummary",
    "PaymentMethod",
    "PaymentOutcome",
    # Exceptions
    "CheckoutError",
    "LoginRequiredError",
    "PackageUnavailableError",
    "PaymentDeclinedError",
    "PaymentGatewayError",
]
