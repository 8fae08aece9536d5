"""HTTP client for the payment backend (implements IPaymentGateway).

Endpoints (JSON in, JSON out):
- POST /api/create-payment-intent   {plan, price, userId}             -> {clientSecret}
- POST /api/confirm-card-payment    {clientSecret, paymentMethodId}   -> {status}
- POST /api/mobile-money/initiate   {provider, phoneNumber, amount, userId, plan}
                                                                      -> {transactionId, status}
"""

from __future__ import annotations

from typing import Any

import httpx

from doclibrary.application.dtos.payment import MobileMoneyInitiation, PaymentIntent
from doclibrary.domain.enums import PaymentMethod
from doclibrary.domain.exceptions import PaymentException, RemoteException
from doclibrary.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_SERVICE = "payments"


class HTTPPaymentGateway:
    def __init__(
        self,
        base_url: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._http.post(
                f"{self.base_url}{path}", json=body
            )
        except httpx.HTTPError as e:
            logger.error("Payment backend %s unreachable: %s", path, e)
            raise RemoteException(
                f"Payment service unavailable: {e}", service=_SERVICE
            ) from e
        if response.status_code >= 400:
            message = f"HTTP {response.status_code}"
            try:
                data = response.json()
            except ValueError:
                data = None
            if isinstance(data, dict):
                message = str(data.get("error") or data.get("message") or message)
            logger.error(
                "Payment backend %s failed: status=%d %s",
                path,
                response.status_code,
                message,
            )
            raise RemoteException(message, status_code=response.status_code, service=_SERVICE)
        try:
            data = response.json()
        except ValueError as e:
            raise RemoteException(
                f"Invalid response from payment service at {path}", service=_SERVICE
            ) from e
        return data if isinstance(data, dict) else {}

    async def create_payment_intent(
        self, plan: str, price: float, user_id: str
    ) -> PaymentIntent:
        data = await self._post(
            "/api/create-payment-intent",
            {"plan": plan, "price": price, "userId": user_id},
        )
        client_secret = data.get("clientSecret")
        if not client_secret:
            raise PaymentException(
                "Payment intent response had no client secret",
                method=PaymentMethod.CARD.value,
            )
        return PaymentIntent(client_secret=client_secret)

    async def confirm_card_payment(
        self, client_secret: str, payment_method_id: str
    ) -> str:
        data = await self._post(
            "/api/confirm-card-payment",
            {"clientSecret": client_secret, "paymentMethodId": payment_method_id},
        )
        return str(data.get("status") or "")

    async def initiate_mobile_money(
        self,
        provider: str,
        phone_number: str,
        amount: float,
        user_id: str,
        plan: str,
    ) -> MobileMoneyInitiation:
        data = await self._post(
            "/api/mobile-money/initiate",
            {
                "provider": provider,
                "phoneNumber": phone_number,
                "amount": amount,
                "userId": user_id,
                "plan": plan,
            },
        )
        return MobileMoneyInitiation(
            transaction_id=data.get("transactionId"),
            status=str(data.get("status") or ""),
        )
