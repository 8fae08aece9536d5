"""Service interfaces (ports) for the application layer.

Protocols define contracts for external services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from doclibrary.application.dtos.payment import MobileMoneyInitiation, PaymentIntent


# Payment gateway interface
class IPaymentGateway(Protocol):
    """Protocol for the payment backend (card intents and mobile money)."""

    async def create_payment_intent(
        self, plan: str, price: float, user_id: str
    ) -> PaymentIntent:
        """Create a card payment intent; return its client secret."""

    async def confirm_card_payment(
        self, client_secret: str, payment_method_id: str
    ) -> str:
        """Confirm the intent with the given card payment method; return the intent status."""

    async def initiate_mobile_money(
        self,
        provider: str,
        phone_number: str,
        amount: float,
        user_id: str,
        plan: str,
    ) -> MobileMoneyInitiation:
        """Start a mobile money collection; return its transaction id and status."""
