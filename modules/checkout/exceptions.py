"""
Checkout module exceptions.

Unlike store writes, checkout failures are raised: the payment flow is
interactive and the screen has to tell the user what went wrong.
"""

from typing import Optional

from shared.exceptions import (
    FitConnectError,
    NotFoundError,
    AuthenticationError,
    GatewayError,
)


class CheckoutError(FitConnectError):
    """Base exception for checkout errors."""

    pass


class LoginRequiredError(CheckoutError, AuthenticationError):
    """Raised when paying without a session user."""

    def __init__(self, message: str = "Please log in to complete payment."):
        super().__init__(message, code="LOGIN_REQUIRED")


class PackageUnavailableError(CheckoutError, NotFoundError):
    """Raised when the provider/package pair cannot be bought."""

    def __init__(self, provider_id: str, package_id: str):
        super().__init__(
            "Something went wrong. Please go back and select the package again.",
            code="PACKAGE_UNAVAILABLE",
            details={"provider_id": provider_id, "package_id": package_id},
        )


class PaymentDeclinedError(CheckoutError):
    """Raised when the gateway does not confirm the payment."""

    def __init__(self, reference: str, reason: Optional[str] = None):
        super().__init__(
            "Payment was not confirmed. Please try again.",
            code="PAYMENT_DECLINED",
            details={"reference": reference},
        )
        if reason:
            self.details["reason"] = reason


class PaymentGatewayError(CheckoutError, GatewayError):
    """Raised when the gateway itself fails before reporting an outcome."""

    def __init__(self, gateway: str, reason: str):
        super().__init__(
            "The payment service is not responding. Please try again later.",
            gateway=gateway,
            code="PAYMENT_GATEWAY_FAILED",
            details={"reason": reason},
        )
