"""
Checkout service.

Drives the stubbed payment flow: summarize the package, charge through a
payment gateway, and record the subscription once the payment is
confirmed. The gateway is the only asynchronous step; the store write
that follows is synchronous.
"""

import logging
import uuid
from typing import Optional

from shared.config import Settings, get_settings
from shared.exceptions import FitConnectError
from shared.models import CurrentUser
from modules.store.interfaces import IAppStore
from modules.store.models import Subscription

from .interfaces import IPaymentGateway
from .models import CheckoutSummary, PaymentMethod, PaymentOutcome
from .exceptions import (
    LoginRequiredError,
    PackageUnavailableError,
    PaymentDeclinedError,
    PaymentGatewayError,
)

logger = logging.getLogger(__name__)


class StubPaymentGateway(IPaymentGateway):
    """
    Gateway stand-in that confirms every payment.

    Returns the placeholder OTP page of the chosen method until a real
    gateway is wired in.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    async def charge(
        self,
        user: CurrentUser,
        summary: CheckoutSummary,
        method: PaymentMethod,
    ) -> PaymentOutcome:
        if method == PaymentMethod.WALLET:
            url = self._settings.wallet_payment_url
        else:
            url = self._settings.instapay_payment_url
        return PaymentOutcome(
            reference=f"pay_{uuid.uuid4().hex}",
            confirmed=True,
            payment_url=url,
        )


class CheckoutService:
    """Turns a confirmed payment into a subscription."""

    def __init__(
        self,
        store: IAppStore,
        gateway: Optional[IPaymentGateway] = None,
    ):
        self._store = store
        self._gateway = gateway or StubPaymentGateway()

    def summarize(self, provider_id: str, package_id: str) -> CheckoutSummary:
        """
        Resolve what is being bought.

        Raises:
            PackageUnavailableError: If the provider or package is unknown,
                or the package belongs to another provider
        """
        state = self._store.state
        provider = state.find_provider(provider_id)
        package = state.find_package(package_id)
        if provider is None or package is None or package.provider_id != provider_id:
            raise PackageUnavailableError(provider_id, package_id)

        return CheckoutSummary(
            provider=provider,
            package=package,
            amount=package.price,
            currency=package.currency,
        )

    async def pay(
        self,
        provider_id: str,
        package_id: str,
        method: PaymentMethod = PaymentMethod.WALLET,
    ) -> Subscription:
        """
        Charge the session user and subscribe them on confirmation.

        Raises:
            LoginRequiredError: If nobody is logged in
            PackageUnavailableError: If the package cannot be bought
            PaymentDeclinedError: If the gateway does not confirm
            PaymentGatewayError: If the gateway fails outright
            StoreError: If the store rejects the subscription, e.g. the
                user logged out or another user logged in while the
                payment was pending
        """
        user = self._store.state.current_user
        if user is None:
            raise LoginRequiredError()

        summary = self.summarize(provider_id, package_id)
        try:
            outcome = await self._gateway.charge(user, summary, PaymentMethod(method))
        except FitConnectError:
            raise
        except Exception as e:
            gateway = type(self._gateway).__name__
            logger.error(f"Payment gateway {gateway} failed for {user.id}: {e}")
            raise PaymentGatewayError(gateway, str(e)) from e

        if not outcome.confirmed:
            logger.warning(
                f"Payment {outcome.reference} declined for {user.id}: "
                f"{outcome.failure_reason or 'no reason given'}"
            )
            raise PaymentDeclinedError(outcome.reference, outcome.failure_reason)

        logger.info(
            f"Payment {outcome.reference} confirmed: {summary.amount} "
            f"{summary.currency} for {package_id}"
        )
        # The session may have changed while the charge was pending
        return self._store.subscribe(provider_id, package_id, client_id=user.id).unwrap()
