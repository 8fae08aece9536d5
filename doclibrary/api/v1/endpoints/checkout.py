"""Checkout API: pay for a subscription plan by card or mobile money."""

from fastapi import APIRouter, Depends, Request

from doclibrary.api.v1.dependencies import OptionalSession, get_checkout_service
from doclibrary.application.use_cases.payments import CheckoutService
from doclibrary.core.config import get_settings
from doclibrary.core.limiter import limit_checkout
from doclibrary.schemas.checkout import (
    CardCheckoutRequest,
    CheckoutConfigResponse,
    CheckoutResponse,
    MobileMoneyCheckoutRequest,
)

router = APIRouter()


@router.get("/config", response_model=CheckoutConfigResponse)
def checkout_config() -> CheckoutConfigResponse:
    """Publishable payment key and currency for the client-side card form."""
    settings = get_settings()
    return CheckoutConfigResponse(
        public_key=settings.payment_public_key,
        currency=settings.payment_currency,
    )


@router.post("/card", response_model=CheckoutResponse, status_code=201)
@limit_checkout
async def pay_by_card(
    request: Request,
    body: CardCheckoutRequest,
    session: OptionalSession,
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Charge the card, activate the subscription, and set the caller's tier."""
    result = await checkout.pay_by_card(
        session, body.plan.to_plan(), body.payment_method_id
    )
    return CheckoutResponse.model_validate(result)


@router.post("/mobile-money", response_model=CheckoutResponse, status_code=202)
@limit_checkout
async def pay_by_mobile_money(
    request: Request,
    body: MobileMoneyCheckoutRequest,
    session: OptionalSession,
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Start a mobile money collection; the subscription stays pending until confirmed."""
    result = await checkout.pay_by_mobile_money(
        session, body.plan.to_plan(), body.phone_number, body.provider
    )
    return CheckoutResponse.model_validate(result)
