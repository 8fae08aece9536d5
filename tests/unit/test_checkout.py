"""Unit tests for CheckoutService (card and mobile money)."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from doclibrary.application.dtos.payment import MobileMoneyInitiation, PaymentIntent
from doclibrary.application.dtos.subscription import SubscriptionCreate, SubscriptionResult
from doclibrary.application.use_cases.payments import CheckoutService
from doclibrary.domain.exceptions import (
    AuthenticationException,
    CompensationFailedException,
    PaymentException,
    RemoteException,
    ValidationException,
)
from doclibrary.domain.value_objects import Plan

GOLD_YEARLY = Plan(name="Gold", price=50.0, duration="Per Year")


def _stored(data: SubscriptionCreate) -> SubscriptionResult:
    return SubscriptionResult(
        id="sub-1",
        user_id=data.user_id,
        plan=data.plan,
        status=data.status,
        start_date=data.start_date,
        end_date=data.end_date,
        amount=data.amount,
        currency=data.currency,
        auto_renew=data.auto_renew,
        metadata=data.metadata,
    )


@pytest.fixture
def subscription_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = _stored
    return repo


@pytest.fixture
def gateway() -> AsyncMock:
    gw = AsyncMock()
    gw.create_payment_intent.return_value = PaymentIntent(client_secret="pi_123_secret_abc")
    gw.confirm_card_payment.return_value = "succeeded"
    gw.initiate_mobile_money.return_value = MobileMoneyInitiation(
        transaction_id="tx-9", status="pending"
    )
    return gw


@pytest.fixture
def service(subscription_repo, user_repo, gateway) -> CheckoutService:
    return CheckoutService(subscription_repo, user_repo, gateway, currency="UGX")


class TestCard:
    async def test_success_activates_subscription_and_tier(
        self, service, gateway, subscription_repo, user_repo, user_ctx
    ) -> None:
        result = await service.pay_by_card(user_ctx, GOLD_YEARLY, "pm_card_visa")

        gateway.create_payment_intent.assert_awaited_once_with("Gold", 50.0, user_ctx.user_id)
        gateway.confirm_card_payment.assert_awaited_once_with("pi_123_secret_abc", "pm_card_visa")
        user_repo.set_subscription_tier.assert_awaited_once_with(user_ctx.user_id, "gold")

        sub = result.subscription
        assert result.tier_updated is True
        assert result.payment_method == "card"
        assert sub.status == "active"
        assert sub.plan == "gold"
        assert sub.currency == "UGX"
        assert sub.auto_renew is True
        assert sub.end_date - sub.start_date == timedelta(days=365)
        assert sub.metadata == {"payment_method": "card", "payment_intent_id": "pi_123"}

    async def test_unconfirmed_payment_writes_nothing(
        self, service, gateway, subscription_repo, user_repo, user_ctx
    ) -> None:
        gateway.confirm_card_payment.return_value = "requires_action"
        with pytest.raises(PaymentException, match="requires_action"):
            await service.pay_by_card(user_ctx, GOLD_YEARLY, "pm_card_visa")
        subscription_repo.create.assert_not_awaited()
        user_repo.set_subscription_tier.assert_not_awaited()

    async def test_gateway_error_propagates(self, service, gateway, subscription_repo, user_ctx) -> None:
        gateway.create_payment_intent.side_effect = PaymentException("No client secret")
        with pytest.raises(PaymentException):
            await service.pay_by_card(user_ctx, GOLD_YEARLY, "pm_card_visa")
        subscription_repo.create.assert_not_awaited()

    async def test_tier_failure_deletes_subscription(
        self, service, subscription_repo, user_repo, user_ctx
    ) -> None:
        user_repo.set_subscription_tier.side_effect = RemoteException("users update failed")
        with pytest.raises(RemoteException, match="users update failed"):
            await service.pay_by_card(user_ctx, GOLD_YEARLY, "pm_card_visa")
        subscription_repo.delete.assert_awaited_once_with("sub-1")

    async def test_tier_and_rollback_failure(self, service, subscription_repo, user_repo, user_ctx) -> None:
        user_repo.set_subscription_tier.side_effect = RemoteException("users update failed")
        subscription_repo.delete.side_effect = RemoteException("delete failed")
        with pytest.raises(CompensationFailedException):
            await service.pay_by_card(user_ctx, GOLD_YEARLY, "pm_card_visa")

    async def test_non_tier_plan_rejected_before_gateway(self, service, gateway, user_ctx) -> None:
        with pytest.raises(ValidationException):
            await service.pay_by_card(user_ctx, Plan("Enterprise", 10.0, "Monthly"), "pm_card_visa")
        gateway.create_payment_intent.assert_not_awaited()

    async def test_anonymous_rejected(self, service, gateway) -> None:
        with pytest.raises(AuthenticationException):
            await service.pay_by_card(None, GOLD_YEARLY, "pm_card_visa")
        gateway.create_payment_intent.assert_not_awaited()


class TestMobileMoney:
    async def test_pending_subscription_recorded(
        self, service, gateway, subscription_repo, user_repo, user_ctx
    ) -> None:
        plan = Plan(name="Silver", price=10.0, duration="1 Day")
        result = await service.pay_by_mobile_money(user_ctx, plan, "0771234567", "mtn")

        gateway.initiate_mobile_money.assert_awaited_once_with(
            "mtn", "0771234567", 10.0, user_ctx.user_id, "Silver"
        )
        assert result.tier_updated is False
        assert result.transaction_id == "tx-9"
        assert result.subscription.status == "pending"
        assert result.subscription.end_date - result.subscription.start_date == timedelta(days=1)
        assert result.subscription.metadata["provider"] == "mtn"
        user_repo.set_subscription_tier.assert_not_awaited()

    @pytest.mark.parametrize(
        ("phone", "provider"),
        [("12345", "mtn"), ("0771234567", None), ("", "airtel"), ("0771234567", "mpesa")],
    )
    async def test_invalid_payer_makes_no_network_call(
        self, service, gateway, phone, provider
    ) -> None:
        with pytest.raises(ValidationException):
            await service.pay_by_mobile_money(None, GOLD_YEARLY, phone, provider)
        gateway.initiate_mobile_money.assert_not_awaited()

    async def test_non_pending_initiation_rejected(
        self, service, gateway, subscription_repo, user_ctx
    ) -> None:
        gateway.initiate_mobile_money.return_value = MobileMoneyInitiation(
            transaction_id=None, status="failed"
        )
        with pytest.raises(PaymentException, match="mobile money"):
            await service.pay_by_mobile_money(user_ctx, GOLD_YEARLY, "0751234567", "airtel")
        subscription_repo.create.assert_not_awaited()
