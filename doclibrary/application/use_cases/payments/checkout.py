"""Checkout: pay for a plan by card or mobile money and record the subscription."""

from __future__ import annotations

import logging

from doclibrary.application.dtos.payment import CheckoutResult
from doclibrary.application.dtos.subscription import (
    SubscriptionCreate,
    SubscriptionResult,
)
from doclibrary.application.interfaces.repositories import (
    ISubscriptionRepository,
    IUserRepository,
)
from doclibrary.application.interfaces.services import IPaymentGateway
from doclibrary.application.services.two_step_write import TwoStepWrite
from doclibrary.domain.enums import PaymentMethod, SubscriptionStatus
from doclibrary.domain.exceptions import (
    AuthenticationException,
    DocLibraryException,
    PaymentException,
)
from doclibrary.domain.value_objects.core import MobileMoneyPayer, Plan, compute_end_date
from doclibrary.shared.context import SessionContext
from doclibrary.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

CARD_PAYMENT_SUCCEEDED = "succeeded"
MOBILE_MONEY_PENDING = "pending"


def _payment_intent_id(client_secret: str) -> str:
    """Intent id part of a client secret (``pi_123_secret_abc`` -> ``pi_123``)."""
    return client_secret.split("_secret_", 1)[0]


class CheckoutService:
    """One checkout attempt per call; no retries."""

    def __init__(
        self,
        subscription_repo: ISubscriptionRepository,
        user_repo: IUserRepository,
        gateway: IPaymentGateway,
        currency: str = "USD",
    ) -> None:
        self.subscription_repo = subscription_repo
        self.user_repo = user_repo
        self.gateway = gateway
        self.currency = currency

    def _subscription(
        self,
        user_id: str,
        plan: Plan,
        status: SubscriptionStatus,
        metadata: dict,
    ) -> SubscriptionCreate:
        start = utc_now()
        return SubscriptionCreate(
            user_id=user_id,
            plan=plan.slug,
            status=status.value,
            start_date=start,
            end_date=compute_end_date(start, plan.duration),
            amount=plan.price,
            currency=self.currency,
            auto_renew=True,
            metadata=metadata,
        )

    async def pay_by_card(
        self,
        ctx: SessionContext | None,
        plan: Plan,
        payment_method_id: str,
    ) -> CheckoutResult:
        """Charge a card, then activate the subscription and set the user's tier.

        The subscription insert and tier update are one two-step write: if the
        tier update fails the subscription row is deleted again.
        """
        if ctx is None:
            raise AuthenticationException()
        tier = plan.tier
        if not payment_method_id:
            raise PaymentException("Card details are required", method=PaymentMethod.CARD.value)

        try:
            intent = await self.gateway.create_payment_intent(
                plan.name, plan.price, ctx.user_id
            )
            status = await self.gateway.confirm_card_payment(
                intent.client_secret, payment_method_id
            )
        except DocLibraryException as e:
            logger.error("Card payment failed for user %s: %s", ctx.user_id, e.message)
            raise
        if status != CARD_PAYMENT_SUCCEEDED:
            logger.warning(
                "Card payment for user %s not completed (status=%s)", ctx.user_id, status
            )
            raise PaymentException(
                f"Payment was not completed (status: {status})",
                method=PaymentMethod.CARD.value,
            )

        data = self._subscription(
            ctx.user_id,
            plan,
            SubscriptionStatus.ACTIVE,
            {
                "payment_method": PaymentMethod.CARD.value,
                "payment_intent_id": _payment_intent_id(intent.client_secret),
            },
        )

        async def insert_subscription() -> SubscriptionResult:
            return await self.subscription_repo.create(data)

        async def update_tier(subscription: SubscriptionResult) -> SubscriptionResult:
            await self.user_repo.set_subscription_tier(ctx.user_id, tier.value)
            return subscription

        async def delete_subscription(subscription: SubscriptionResult) -> None:
            await self.subscription_repo.delete(subscription.id)

        write: TwoStepWrite[SubscriptionResult, SubscriptionResult] = TwoStepWrite(
            "activate_subscription", insert_subscription, update_tier, delete_subscription
        )
        try:
            subscription = await write.run()
        except DocLibraryException as e:
            logger.error(
                "Subscription activation for user %s failed (%s): %s",
                ctx.user_id,
                write.state.value,
                e.message,
            )
            raise
        logger.info("User %s subscribed to %s by card", ctx.user_id, plan.slug)
        return CheckoutResult(
            subscription=subscription,
            payment_method=PaymentMethod.CARD.value,
            tier_updated=True,
        )

    async def pay_by_mobile_money(
        self,
        ctx: SessionContext | None,
        plan: Plan,
        phone_number: str | None,
        provider: str | None,
    ) -> CheckoutResult:
        """Start a mobile money collection and record a pending subscription.

        The phone number and provider are validated before any network call.
        The tier is not changed; the payment is confirmed out of band.
        """
        payer = MobileMoneyPayer.parse(phone_number, provider)
        if ctx is None:
            raise AuthenticationException()
        tier = plan.tier

        try:
            initiation = await self.gateway.initiate_mobile_money(
                payer.provider.value,
                payer.phone_number,
                plan.price,
                ctx.user_id,
                plan.name,
            )
        except DocLibraryException as e:
            logger.error(
                "Mobile money initiation failed for user %s: %s", ctx.user_id, e.message
            )
            raise
        if initiation.status != MOBILE_MONEY_PENDING:
            logger.warning(
                "Mobile money initiation for user %s returned status %r",
                ctx.user_id,
                initiation.status,
            )
            raise PaymentException(
                "Failed to initiate mobile money payment",
                method=PaymentMethod.MOBILE_MONEY.value,
            )

        data = self._subscription(
            ctx.user_id,
            plan,
            SubscriptionStatus.PENDING,
            {
                "payment_method": PaymentMethod.MOBILE_MONEY.value,
                "provider": payer.provider.value,
                "phone_number": payer.phone_number,
                "transaction_id": initiation.transaction_id,
            },
        )
        try:
            subscription = await self.subscription_repo.create(data)
        except DocLibraryException as e:
            logger.error(
                "Recording pending subscription for user %s failed (transaction %s): %s",
                ctx.user_id,
                initiation.transaction_id,
                e.message,
            )
            raise
        logger.info(
            "User %s started mobile money payment %s for %s",
            ctx.user_id,
            initiation.transaction_id,
            tier.value,
        )
        return CheckoutResult(
            subscription=subscription,
            payment_method=PaymentMethod.MOBILE_MONEY.value,
            tier_updated=False,
            transaction_id=initiation.transaction_id,
        )
