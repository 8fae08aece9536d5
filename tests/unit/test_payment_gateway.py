"""Unit tests for HTTPPaymentGateway over httpx.MockTransport."""

import json

import httpx
import pytest

from doclibrary.domain.exceptions import PaymentException, RemoteException
from doclibrary.infrastructure.external.payments import HTTPPaymentGateway


def make_gateway(handler) -> HTTPPaymentGateway:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HTTPPaymentGateway("http://payments.test/", http_client=http)


async def test_create_payment_intent_posts_plan() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"clientSecret": "pi_1_secret_x"})

    intent = await make_gateway(handler).create_payment_intent("Gold", 50.0, "u1")
    assert intent.client_secret == "pi_1_secret_x"
    assert str(seen[0].url) == "http://payments.test/api/create-payment-intent"
    assert json.loads(seen[0].content) == {"plan": "Gold", "price": 50.0, "userId": "u1"}


async def test_missing_client_secret_is_payment_error() -> None:
    gateway = make_gateway(lambda request: httpx.Response(200, json={}))
    with pytest.raises(PaymentException, match="client secret"):
        await gateway.create_payment_intent("Gold", 50.0, "u1")


async def test_confirm_card_payment_returns_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content) == {
            "clientSecret": "pi_1_secret_x",
            "paymentMethodId": "pm_1",
        }
        return httpx.Response(200, json={"status": "succeeded"})

    status = await make_gateway(handler).confirm_card_payment("pi_1_secret_x", "pm_1")
    assert status == "succeeded"


async def test_mobile_money_initiation() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/mobile-money/initiate"
        body = json.loads(request.content)
        assert body["phoneNumber"] == "0771234567"
        assert body["provider"] == "mtn"
        return httpx.Response(200, json={"transactionId": "tx-1", "status": "pending"})

    result = await make_gateway(handler).initiate_mobile_money(
        "mtn", "0771234567", 10.0, "u1", "silver"
    )
    assert (result.transaction_id, result.status) == ("tx-1", "pending")


async def test_backend_error_message_is_passed_through() -> None:
    gateway = make_gateway(lambda request: httpx.Response(402, json={"error": "Card declined"}))
    with pytest.raises(RemoteException, match="Card declined") as exc_info:
        await gateway.confirm_card_payment("s", "pm")
    assert exc_info.value.status_code == 402
    assert exc_info.value.details["service"] == "payments"


async def test_unreachable_backend() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteException, match="unavailable"):
        await make_gateway(handler).create_payment_intent("gold", 1.0, "u1")
