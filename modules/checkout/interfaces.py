"""
Checkout module interface.

A payment gateway performs the external payment flow. The checkout
service only writes to the store once the gateway confirms.
"""

from typing import Protocol, runtime_checkable

from shared.models import CurrentUser

from .models import CheckoutSummary, PaymentMethod, PaymentOutcome


@runtime_checkable
class IPaymentGateway(Protocol):
    """Interface for payment providers."""

    async def charge(
        self,
        user: CurrentUser,
        summary: CheckoutSummary,
        method: PaymentMethod,
    ) -> PaymentOutcome:
        """
        Charge the user for a package.

        Args:
            user: Paying session user
            summary: Provider, package and amount
            method: Wallet or InstaPay

        Returns:
            PaymentOutcome; ``confirmed`` is False when the payment failed
        """
        ...
